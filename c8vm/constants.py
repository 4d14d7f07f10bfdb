#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "C8VM"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout
CPU_ENDIAN = "big"  # CHIP-8 is big-endian
RAM_SIZE = 0x1000
ADDR_MASK = 0xFFF
FONT_LOC = 0x050     # Anywhere in the interpreter area (0x000 - 0x1FF) will do
PROGRAM_LOC = 0x200  # Programs are always loaded (and started) here
STACK_DEPTH = 16

# Display
VID_WIDTH = 64
VID_HEIGHT = 32

# Timing
TIMER_FREQ = 60.0  # Delay and sound timers always count down at 60Hz, whatever the CPU speed
DISPLAY_FREQ = 60.0
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ
DEFAULT_CLOCK_SPEED = 700  # Operations per second

# Engine status
STATUS_RUNNING = 0
STATUS_WAITING_FOR_KEY = 1
STATUS_HALTED = 2

STATUS_NAMES = {
    STATUS_RUNNING:         "Running",
    STATUS_WAITING_FOR_KEY: "WaitingForKey",
    STATUS_HALTED:          "Halted"
}

# Default mappings for keys 0-F, later populated into a dictionary.  Note that the keyscans (on a UK QWERTY keyboard)
# and ASCII characters for these are the same code
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# CPU quirks
CPU_QUIRKS = ["shift", "load", "index_increment"]

# Hexadecimal digit glyphs, 4x5 pixels each, stored 5 bytes per digit (0-F)
FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
FONT_GLYPH_SIZE = 5

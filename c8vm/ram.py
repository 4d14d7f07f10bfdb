#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes.  Every
access is bounds-checked against the 4K address space, and blocks are checked
as a whole before anything is written, so a failed write never leaves memory
half-updated.

The hexadecimal font lives in the interpreter area (below 0x200) and is
rewritten on every reset.  No instruction is meant to write there, but nothing
stops a program pointing I at the font and storing registers over it.  That is
how the original hardware behaved too, so it is left unguarded.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import RAM_SIZE, FONT, FONT_LOC


class RAMError(Exception):
    pass


class OutOfBounds(RAMError):
    def __init__(self, location):
        self.location = location
        super().__init__("Memory access out of bounds at 0x{:x}".format(location))


class MisalignedAddress(RAMError):
    def __init__(self, location):
        self.location = location
        super().__init__("Program counter set to odd address 0x{:03x}".format(location))


class RAM:
    def __init__(self, mem_size=RAM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size
        self.load_font()

    def read(self, location):
        self.check_bounds(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_bounds(location, size)
        return bytes(self.mem[location:location + size])

    def read_sprite_rows(self, location, rows):
        # Sprites are at most 15 rows of 8 pixels
        assert 0 <= rows <= 0xF
        return self.read_block(location, rows)

    def write(self, location, byte):
        self.check_bounds(location)
        self.mem[location] = byte & 0xFF

    def write_block(self, location, block):
        block_size = len(block)
        self.check_bounds(location, block_size)
        self.mem[location:location + block_size] = block

    def check_bounds(self, location, size=1):
        if location < 0:
            raise OutOfBounds(location)

        if location + size - 1 > self.mem_top:
            # Report the first address which doesn't exist
            raise OutOfBounds(max(location, self.mem_size))

    def load_font(self):
        self.write_block(FONT_LOC, FONT)

    def clear(self):
        self.mem[:] = bytes(self.mem_size)

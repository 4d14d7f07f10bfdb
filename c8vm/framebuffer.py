#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only drawn to the actual display (the host
rendering system) when the host asks for a refresh, normally at 60Hz.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method.  Collisions (where any
pixel was set, but was unset by an XOR) are reported back to the CPU.

The screen is a single 64x32 monochrome plane.  One byte is kept per pixel
(0x00 or 0xFF) as that is far quicker to index than packed bits.

The CPU is the only writer and the host renderer the only reader.  In case
they run on different threads, a whole sprite is drawn while holding the lock,
and readers take a snapshot under the same lock, so a half-drawn sprite is
never seen.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from threading import Lock
from .constants import VID_WIDTH, VID_HEIGHT


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.vram = memoryview(bytearray(self.vid_size))
        self.lock = Lock()
        self.changed = True

    def clear(self):
        with self.lock:
            self.vram[:] = bytes(self.vid_size)
            self.changed = True

    def draw_sprite(self, x_pos, y_pos, rows):
        # Returns whether any pixel was turned off.  The start position and the sprite itself wrap on both axes.
        vid_width = self.vid_width
        vid_height = self.vid_height
        vram = self.vram
        x_pos %= vid_width
        y_pos %= vid_height
        collided = False

        with self.lock:
            for y, spr_data in enumerate(rows):
                row_loc = ((y_pos + y) % vid_height) * vid_width

                for x in range(8):
                    if spr_data & (0x80 >> x):
                        vram_loc = row_loc + (x_pos + x) % vid_width

                        if vram[vram_loc]:
                            # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                            collided = True

                        vram[vram_loc] ^= 0xFF

            self.changed = True

        return collided

    def get_pixel(self, x, y):
        return bool(self.vram[y * self.vid_width + x])

    def snapshot(self):
        # A consistent copy of the screen, one byte per pixel
        with self.lock:
            return bytes(self.vram)

    def take_changes(self):
        # Returns a snapshot if anything has been drawn since the last call, otherwise None
        with self.lock:
            if not self.changed:
                return None

            self.changed = False
            return bytes(self.vram)

    def get_vid_size(self):
        return self.vid_width, self.vid_height

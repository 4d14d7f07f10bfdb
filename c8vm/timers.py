#!/usr/bin/env python3

"""
Timer Clock

The delay timer (DT) and sound timer (ST) count down independently, by one at
a time, at 60Hz, until they reach zero.  Neither is tied to the CPU speed: the
scheduler calls tick() once per elapsed 1/60th of a second no matter how many
instructions ran in between, including while the CPU waits for a key.

The buzzer sounds whenever ST is above zero.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .audio.a_null import Audio


class TimerClock:
    def __init__(self, audio=None):
        self.audio = Audio() if audio is None else audio
        self.dt = 0  # Delay timer integer (byte)
        self.st = 0  # Sound timer integer (byte)

    def tick(self):
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

            if self.st == 0:
                # Sound timer just reached zero.  Stop the audio.
                self.audio.enable_buzzer(False)

    def set_delay(self, value):
        self.dt = value & 0xFF

    def set_sound(self, value):
        self.st = value & 0xFF
        # Allow the program to start the buzzer, or immediately stop it before the sound timer hits zero
        self.audio.enable_buzzer(self.st > 0)

    @property
    def sound_on(self):
        return self.st > 0

    def reset(self):
        self.dt = 0

        if self.st:
            self.audio.enable_buzzer(False)

        self.st = 0

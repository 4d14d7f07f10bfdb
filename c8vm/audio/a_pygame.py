#!/usr/bin/env python3

"""
PyGame Audio Plugin

The emulated buzzer only has an 'on' or 'off' status.  While it is on, a short
square wave sample is looped through the PyGame / SDL mixer.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
TONE_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()

        # One full period of an 8-bit unsigned square wave
        half_period = int(PLAYBACK_FREQUENCY / TONE_FREQUENCY / 2)
        self.sound = pygame.mixer.Sound(buffer=(b"\xFF" * half_period) + (b"\x00" * half_period))
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    def enable_buzzer(self, enabled):
        # If the buzzer is already playing, it won't be restarted
        if enabled and not self.buzzer_enabled:
            self.sound.play(-1)
        elif not enabled and self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        self.sound.stop()
        pygame.mixer.quit()
        super().shutdown()

#!/usr/bin/env python3

"""
PyGame Input Plugin

Reads key down and key up events from the PyGame queue and passes them on to
the Keypad, which works out complete key presses for itself.  Don't call this
more often than 60Hz, as emptying the queue is time consuming.

Closing the window or pressing Escape asks the emulator to quit.  The Renderer
is what shuts the PyGame display down afterwards.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase


class Inputs(InputsBase):
    def process_messages(self):
        quit_program = False

        # Drain the whole queue even after a quit, so no key release is lost
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_program = True
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                if event.key == pygame.K_ESCAPE:
                    quit_program = quit_program or event.type == pygame.KEYUP
                else:
                    self.host_key_changed(event.key, event.type == pygame.KEYDOWN)

        return quit_program

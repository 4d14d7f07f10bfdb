#!/usr/bin/env python3

"""
Host Bindings

Ties the host's renderer, input and audio plugins to the machine's framebuffer
and keypad.  The scheduler calls process_messages() and refresh() at 60Hz.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_NAME


class Host:
    def __init__(self, framebuffer, renderer, inputs, audio):
        self.framebuffer = framebuffer
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.renderer.set_resolution(*framebuffer.get_vid_size())
        self.renderer.set_title(APP_NAME)

    def process_messages(self):
        # Returns True if the user wants to quit
        return self.inputs.process_messages()

    def refresh(self):
        # Render the screen, but only if anything has been drawn since last time
        vram = self.framebuffer.take_changes()

        if vram is None:
            self.renderer.refresh_display()
            return

        renderer = self.renderer

        for location, pixel in enumerate(vram):
            renderer.set_pixel(location, 1 if pixel else 0)

        renderer.refresh_display(True)

    def shutdown(self):
        # __del__ cannot be relied upon when using PyPy
        self.audio.shutdown()
        self.inputs.shutdown()
        self.renderer.shutdown()

#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .config import make_quirks
from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, DEFAULT_CLOCK_SPEED
from .cpu import CPU, ENGINE_ERRORS
from .debugger import Debugger
from .framebuffer import Framebuffer
from .host import Host
from .hostio import Loader
from .keypad import Keypad
from .scheduler import Scheduler
from .timers import TimerClock


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_settings[quirk_label] = args[quirk_label]

    # Fail on bad configuration before anything is started up
    quirks = make_quirks(args["profile"], **quirk_settings)
    clock_speed = DEFAULT_CLOCK_SPEED if args["clock_speed"] is None else args["clock_speed"]
    opt_renderer = args["renderer"]
    mute_audio = args["mute"]

    # flake8: noqa: F401
    if opt_renderer is None or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            raise StartupError("PyGame does not appear to be installed.  Use the 'null' renderer to run headless.")
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio
    else:
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

    program = Loader().load_program(args["filename"])
    framebuffer = Framebuffer()
    keypad = Keypad()

    # Set up the host side first, so a bad keymap or palette is reported before any window opens
    inputs = Inputs(args["keymap"], keypad)
    renderer = Renderer(scale=args["scale"], pygame_palette=args["pygame_palette"])
    audio = Audio()
    host = Host(framebuffer, renderer, inputs, audio)

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    # Create a new CPU, plug it into the rest of the system, and boot it up at the default address
    cpu = CPU(
        quirks, program, framebuffer=framebuffer, keypad=keypad, timers=TimerClock(audio), debugger=debugger
    )
    scheduler = Scheduler(cpu, clock_speed=clock_speed)

    try:
        scheduler.run(host)
    except ENGINE_ERRORS:
        print("Emulation halted.\n\n{}Debug info:\n{}".format(APP_INTRO, cpu.halt_report))
        raise
    finally:
        # The CPU has quit, so shut down the host
        host.shutdown()

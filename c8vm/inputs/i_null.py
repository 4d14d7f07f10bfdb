#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Input plugins translate host key codes into the 16 hexadecimal keys and feed
them into the core Keypad.  They never talk to the CPU.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..config import ConfigError
from ..keypad import NUM_KEYS


class InputsError(ConfigError):
    pass


def parse_keymap(keymap):
    # "h0,h1,...,h15" (host key codes in decimal) -> {host key code: hex key}
    keymap_split = keymap.split(",")

    if len(keymap_split) != NUM_KEYS:
        raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

    try:
        host_keys = [int(key_defined) for key_defined in keymap_split]
    except ValueError:
        raise InputsError("Defined keys are not all integer values") from None

    if len(set(host_keys)) != NUM_KEYS:
        raise InputsError("Duplicate keys defined")

    return {host_key: hex_key for hex_key, host_key in enumerate(host_keys)}


class Inputs:
    def __init__(self, keymap, keypad):
        self.keymap_dict = parse_keymap(keymap)
        self.keypad = keypad

    def host_key_changed(self, host_key, down):
        # Unmapped host keys are ignored
        hex_key = self.keymap_dict.get(host_key)

        if hex_key is not None:
            self.keypad.set_key_state(hex_key, down)

    def process_messages(self):
        return False  # Don't exit the program

    def shutdown(self):
        pass

#!/usr/bin/env python3

"""
Keypad Emulator

The hexadecimal keypad has 16 keys, 0-F.  The host input system is the only
writer and the CPU the only reader.

Key states are kept in a single tuple which is replaced whole on every change,
so a reader always gets a complete 16-key snapshot, never a partial update.

Separately, the last key 'press' (a key going down then being released) is
stored for the wait-for-key instruction.  There is a 'reset' switch for this
which the CPU calls when it starts waiting, so keys pressed beforehand don't
count.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from threading import Lock

NUM_KEYS = 0x10


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.lock = Lock()
        self.keys = (False,) * NUM_KEYS
        self.last_keypress = None

    def _check_key(self, key):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key out of range: {}".format(key))

    def set_key_state(self, key, down):
        self._check_key(key)

        with self.lock:
            was_down = self.keys[key]
            keys = list(self.keys)
            keys[key] = bool(down)
            self.keys = tuple(keys)

            # A press completes when the key comes back up
            if was_down and not down:
                self.last_keypress = key

    def press(self, key):
        self.set_key_state(key, True)

    def release(self, key):
        self.set_key_state(key, False)

    def set_snapshot(self, states):
        # Replace every key state at once
        states = tuple(bool(state) for state in states)

        if len(states) != NUM_KEYS:
            raise KeypadError("Keypad snapshots must have exactly 16 keys")

        with self.lock:
            self.keys = states

    def deliver_keypress(self, key):
        # Register a discrete key press event without changing the held states
        self._check_key(key)

        with self.lock:
            self.last_keypress = key

    def snapshot(self):
        return self.keys

    def is_key_down(self, key):
        return self.keys[key & 0xF]

    def setup_keypress(self):
        with self.lock:
            self.last_keypress = None

    def get_keypress(self):
        with self.lock:
            key = self.last_keypress
            self.last_keypress = None

        return key

    def reset(self):
        with self.lock:
            self.keys = (False,) * NUM_KEYS
            self.last_keypress = None

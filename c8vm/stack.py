#!/usr/bin/env python3

"""
Stack Emulator

The call stack isn't part of system RAM, because there is no specified
location for it, and there is no stack pointer (SP) register exposed to the
running program.  A bounded list emulates it fully, with the list length
standing in for SP.

Overflowing or underflowing the stack is an error which halts the machine
rather than silently wrapping around.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_DEPTH


class StackError(Exception):
    pass


class StackOverflow(StackError):
    pass


class StackUnderflow(StackError):
    pass


class Stack:
    def __init__(self, size=STACK_DEPTH):
        self.items = []
        self.size = size

    @property
    def sp(self):
        return len(self.items)

    def push(self, item):
        # Fetching the stack size with 'len' should be immediate, so no slow loop
        if len(self.items) >= self.size:
            raise StackOverflow("Stack overflow (depth {})".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflow("Stack underflow") from None

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For debugging
        return self.items

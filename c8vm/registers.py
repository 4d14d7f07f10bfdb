#!/usr/bin/env python3

"""
Register File

Holds the sixteen 8-bit V registers, the 12-bit index register (I), the
program counter and the call stack.

The V registers live in a bytearray, so a value which doesn't fit in a byte
raises a ValueError instead of wrapping.  Callers always mask arithmetic
results with 0xFF first.  Vf doubles as the carry, borrow and collision flag.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import ADDR_MASK, PROGRAM_LOC
from .ram import MisalignedAddress
from .stack import Stack

VF = 0xF


class Registers:
    def __init__(self, stack=None):
        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self.stack = Stack() if stack is None else stack
        self._i = 0
        self._pc = PROGRAM_LOC

    def reset(self, start_location=PROGRAM_LOC):
        self.v[:] = bytes(16)
        self.stack.clear()
        self._i = 0
        self.pc = start_location

    @property
    def i(self):
        return self._i

    @i.setter
    def i(self, value):
        self._i = value & ADDR_MASK

    @property
    def pc(self):
        return self._pc

    @pc.setter
    def pc(self, location):
        self._pc = self._check_alignment(location)

    def _check_alignment(self, location):
        location &= ADDR_MASK

        # Instructions are 2 bytes wide and always start on an even address
        if location & 1:
            raise MisalignedAddress(location)

        return location

    @property
    def sp(self):
        return self.stack.sp

    def get(self, reg):
        assert 0 <= reg <= 0xF, "Register index out of range: {}".format(reg)
        return self.v[reg]

    def set(self, reg, value):
        assert 0 <= reg <= 0xF, "Register index out of range: {}".format(reg)
        self.v[reg] = value & 0xFF

    def set_flag(self, value):
        self.v[VF] = value

    def advance_pc(self):
        self._pc = (self._pc + 2) & ADDR_MASK

    def call(self, location):
        # Check the target first, so a bad call leaves the stack alone
        location = self._check_alignment(location)
        self.stack.push(self._pc)
        self._pc = location

    def ret(self):
        # Return addresses only ever come from call(), so they are already masked and aligned
        self._pc = self.stack.pop()


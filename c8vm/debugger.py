#!/usr/bin/env python3

"""
CPU Debugger

If enabled, this will output information before each instruction executed:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter
    * IN - Decoded instruction

If the CPU halts, all of the above will be included in the error message, with
the addition of:
    * Stack  - Stack contents
    * Status - Engine status
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STATUS_NAMES


class Debugger:
    def __init__(self):
        self.live = False

    def debug(self, cpu, instruction, verbose=False):
        registers = cpu.registers
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:03x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} IN: {}"
        ).format(
            *[registers.v[reg_num] for reg_num in range(15, -1, -1)] +
            [registers.i, cpu.timers.dt, cpu.timers.st, cpu.debug_pc, instruction]
        )

        if verbose:
            stack_items = registers.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            debug_str += "\nStack:{}".format(stack_str or " (Empty)")
            debug_str += "\nStatus: {}".format(STATUS_NAMES[cpu.status])

        return debug_str

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, cpu, instruction):
        print(self.debug(cpu, instruction))

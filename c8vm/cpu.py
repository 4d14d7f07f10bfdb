#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

This is where most of the processing happens.  Each call to cycle() runs at
most one instruction: fetch the word at PC, decode it into an opcode, advance
PC and apply the opcode to the registers, RAM, framebuffer and keypad.

The CPU doesn't keep time itself.  The scheduler decides how many cycles to
run and when to tick the timers, so a waiting or halted CPU never holds up the
60Hz timers.

The engine is always in one of three states:

    Running       - cycle() executes the next instruction.
    WaitingForKey - LD Vx, K is pending.  PC stays on that instruction until
                    a key press arrives, which completes it.
    Halted        - a decode, memory or stack error occurred.  State is
                    rolled back to the start of the failing instruction, the
                    error is raised to the caller, and nothing more runs until
                    reset() is called.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .config import ConfigError, Quirks
from .constants import (
    CPU_ENDIAN, FONT_LOC, FONT_GLYPH_SIZE, PROGRAM_LOC, STATUS_RUNNING, STATUS_WAITING_FOR_KEY, STATUS_HALTED
)
from .debugger import Debugger
from .decoder import (
    DecodeError, OPCODES, decode, disassemble, Cls, Ret, Jump, Call, SkipEqualByte, SkipNotEqualByte, SkipEqual,
    LoadByte, AddByte, Load, Or, And, Xor, Add, Sub, ShiftRight, SubN, ShiftLeft, SkipNotEqual, LoadIndex, JumpOffset,
    Random, Draw, SkipKeyDown, SkipKeyUp, LoadDelay, WaitKey, SetDelay, SetSound, AddIndex, LoadFont, StoreBCD,
    StoreRegisters, LoadRegisters
)
from .framebuffer import Framebuffer
from .keypad import Keypad
from .ram import RAM, RAMError
from .registers import Registers
from .stack import StackError
from .timers import TimerClock

# Errors which halt the engine.  Anything else is a bug in the emulator itself.
ENGINE_ERRORS = (DecodeError, RAMError, StackError)


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, quirks=None, program=b"", ram=None, registers=None, framebuffer=None, keypad=None, timers=None,
                 debugger=None, rng=None):

        if quirks is None:
            quirks = Quirks()
        elif not isinstance(quirks, Quirks):
            raise ConfigError("Quirks must be supplied as a Quirks object")

        self.quirks = quirks
        self.shift_quirks = quirks.shift_quirks
        self.load_quirks = quirks.load_quirks
        self.index_increment_quirks = quirks.index_increment_quirks

        self.ram = RAM() if ram is None else ram
        self.registers = Registers() if registers is None else registers
        self.framebuffer = Framebuffer() if framebuffer is None else framebuffer
        self.keypad = Keypad() if keypad is None else keypad
        self.timers = TimerClock() if timers is None else timers
        self.debugger = Debugger() if debugger is None else debugger
        self.live_debug = self.debugger.is_live()
        self.randint = randint if rng is None else rng.randint

        # One handler per opcode class
        self.instructions = {
            Cls: self._00E0,
            Ret: self._00EE,
            Jump: self._1nnn,
            Call: self._2nnn,
            SkipEqualByte: self._3xkk,
            SkipNotEqualByte: self._4xkk,
            SkipEqual: self._5xy0,
            LoadByte: self._6xkk,
            AddByte: self._7xkk,
            Load: self._8xy0,
            Or: self._8xy1,
            And: self._8xy2,
            Xor: self._8xy3,
            Add: self._8xy4,
            Sub: self._8xy5,
            ShiftRight: self._8xy6,
            SubN: self._8xy7,
            ShiftLeft: self._8xyE,
            SkipNotEqual: self._9xy0,
            LoadIndex: self._Annn,
            JumpOffset: self._Bnnn,
            Random: self._Cxkk,
            Draw: self._Dxyn,
            SkipKeyDown: self._Ex9E,
            SkipKeyUp: self._ExA1,
            LoadDelay: self._Fx07,
            WaitKey: self._Fx0A,
            SetDelay: self._Fx15,
            SetSound: self._Fx18,
            AddIndex: self._Fx1E,
            LoadFont: self._Fx29,
            StoreBCD: self._Fx33,
            StoreRegisters: self._Fx55,
            LoadRegisters: self._Fx65
        }

        unhandled = [opcode_class.__name__ for opcode_class in OPCODES if opcode_class not in self.instructions]

        if unhandled:
            raise CPUError("No handler for opcodes: {}".format(", ".join(unhandled)))

        self.program = b""
        self.reset(program)

    def reset(self, program=None):
        # Restore the machine to its power-on layout.  The program is kept for later resets.
        if program is not None:
            self.program = bytes(program)

        self.ram.clear()
        self.ram.load_font()
        self.ram.write_block(PROGRAM_LOC, self.program)
        self.registers.reset(PROGRAM_LOC)
        self.timers.reset()
        self.framebuffer.clear()
        self.keypad.setup_keypress()

        self.status = STATUS_RUNNING
        self.halt_reason = None
        self.halt_report = None
        self.wait_register = None
        self.debug_pc = PROGRAM_LOC
        self.opcode = None

    def cycle(self):
        status = self.status

        if status == STATUS_RUNNING:
            self.execute()
        elif status == STATUS_WAITING_FOR_KEY:
            key = self.keypad.get_keypress()

            if key is not None:
                self.deliver_key(key)

        return self.status

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.registers.pc, 2), CPU_ENDIAN, signed=False)

    def execute(self):
        registers = self.registers

        # Keep track of the program counter before altering it in any way, so a failed instruction can be rolled back
        self.debug_pc = registers.pc
        self.opcode = None

        try:
            opcode = decode(self.fetch())
            self.opcode = opcode
            registers.advance_pc()  # Program counter updates after fetch and decode, but before execute

            if self.live_debug:
                self.debug(disassemble(opcode))

            self.instructions[opcode.__class__](opcode)
        except ENGINE_ERRORS as error:
            # Every instruction checks before it writes, so only the program counter needs putting back
            registers.pc = self.debug_pc
            self.halt(error)
            raise

    def halt(self, error):
        self.status = STATUS_HALTED
        self.halt_reason = error
        self.halt_report = self.debugger.debug(
            self, "???" if self.opcode is None else disassemble(self.opcode), verbose=True
        )

    def deliver_key(self, key):
        # Complete a pending LD Vx, K.  Returns whether a key was waited for.
        if self.status != STATUS_WAITING_FOR_KEY:
            return False

        self.registers.set(self.wait_register, key & 0xF)
        self.registers.advance_pc()
        self.wait_register = None
        self.status = STATUS_RUNNING
        return True

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _skip(self):
        self.registers.advance_pc()

    def _00E0(self, op):  # CLS
        self.framebuffer.clear()

    def _00EE(self, op):  # RET
        self.registers.ret()

    def _1nnn(self, op):  # JP addr
        self.registers.pc = op.nnn

    def _2nnn(self, op):  # CALL addr
        self.registers.call(op.nnn)

    def _3xkk(self, op):  # SE Vx, byte
        if self.registers.get(op.x) == op.kk:
            self._skip()

    def _4xkk(self, op):  # SNE Vx, byte
        if self.registers.get(op.x) != op.kk:
            self._skip()

    def _5xy0(self, op):  # SE Vx, Vy
        if self.registers.get(op.x) == self.registers.get(op.y):
            self._skip()

    def _6xkk(self, op):  # LD Vx, byte
        self.registers.set(op.x, op.kk)

    def _7xkk(self, op):  # ADD Vx, byte
        # No carry flag for this one
        self.registers.set(op.x, self.registers.get(op.x) + op.kk)

    def _8xy0(self, op):  # LD Vx, Vy
        self.registers.set(op.x, self.registers.get(op.y))

    def _8xy1(self, op):  # OR Vx, Vy
        registers = self.registers
        registers.set(op.x, registers.get(op.x) | registers.get(op.y))

    def _8xy2(self, op):  # AND Vx, Vy
        registers = self.registers
        registers.set(op.x, registers.get(op.x) & registers.get(op.y))

    def _8xy3(self, op):  # XOR Vx, Vy
        registers = self.registers
        registers.set(op.x, registers.get(op.x) ^ registers.get(op.y))

    # Flags are always set AFTER Vx, as sometimes Vf is specified in the parameters

    def _8xy4(self, op):  # ADD Vx, Vy
        registers = self.registers
        val = registers.get(op.x) + registers.get(op.y)
        registers.set(op.x, val)
        registers.set_flag(int(val > 0xFF))  # Vf is set when carrying

    def _8xy5(self, op):  # SUB Vx, Vy
        registers = self.registers
        vx = registers.get(op.x)
        vy = registers.get(op.y)
        registers.set(op.x, vx - vy)
        registers.set_flag(int(vx >= vy))  # Vf is set when NOT borrowing

    def _shift_source(self, op):
        # With shift quirks, Vx is shifted in place.  Otherwise Vy is shifted, and the result put in Vx.
        return self.registers.get(op.x if self.shift_quirks else op.y)

    def _8xy6(self, op):  # SHR Vx {, Vy}
        val = self._shift_source(op)
        self.registers.set(op.x, val >> 1)
        self.registers.set_flag(val & 1)

    def _8xy7(self, op):  # SUBN Vx, Vy
        registers = self.registers
        vx = registers.get(op.x)
        vy = registers.get(op.y)
        registers.set(op.x, vy - vx)
        registers.set_flag(int(vy >= vx))

    def _8xyE(self, op):  # SHL Vx {, Vy}
        val = self._shift_source(op)
        self.registers.set(op.x, val << 1)
        self.registers.set_flag(val >> 7)

    def _9xy0(self, op):  # SNE Vx, Vy
        if self.registers.get(op.x) != self.registers.get(op.y):
            self._skip()

    def _Annn(self, op):  # LD I, addr
        self.registers.i = op.nnn

    def _Bnnn(self, op):  # JP V0, addr
        self.registers.pc = self.registers.get(0) + op.nnn

    def _Cxkk(self, op):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.registers.set(op.x, self.randint(0, 0xFF) & op.kk)

    def _Dxyn(self, op):  # DRW Vx, Vy, nibble
        registers = self.registers
        rows = self.ram.read_sprite_rows(registers.i, op.n)
        collided = self.framebuffer.draw_sprite(registers.get(op.x), registers.get(op.y), rows)
        registers.set_flag(int(collided))

    def _Ex9E(self, op):  # SKP Vx
        if self.keypad.is_key_down(self.registers.get(op.x)):
            self._skip()

    def _ExA1(self, op):  # SKNP Vx
        if not self.keypad.is_key_down(self.registers.get(op.x)):
            self._skip()

    def _Fx07(self, op):  # LD Vx, DT
        self.registers.set(op.x, self.timers.dt)

    def _Fx0A(self, op):  # LD Vx, K
        # Rather than blocking, park PC on this instruction and let the scheduler carry on ticking the timers.  The
        # instruction completes when a key press is delivered.
        self.keypad.setup_keypress()  # Clear any previously pressed keys
        self.registers.pc = self.debug_pc
        self.wait_register = op.x
        self.status = STATUS_WAITING_FOR_KEY

    def _Fx15(self, op):  # LD DT, Vx
        self.timers.set_delay(self.registers.get(op.x))

    def _Fx18(self, op):  # LD ST, Vx
        self.timers.set_sound(self.registers.get(op.x))

    def _Fx1E(self, op):  # ADD I, Vx
        self.registers.i += self.registers.get(op.x)

    def _Fx29(self, op):  # LD F, Vx
        self.registers.i = FONT_LOC + FONT_GLYPH_SIZE * (self.registers.get(op.x) & 0xF)

    def _Fx33(self, op):  # LD B, Vx
        val = self.registers.get(op.x)
        # Most-significant digit first
        self.ram.write_block(self.registers.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _post_Fx55_Fx65(self, op):
        if self.load_quirks:
            registers = self.registers
            registers.i += op.x if self.index_increment_quirks else op.x + 1

    def _Fx55(self, op):  # LD [I], Vx
        self.ram.write_block(self.registers.i, bytes(self.registers.v[:op.x + 1]))
        self._post_Fx55_Fx65(op)

    def _Fx65(self, op):  # LD Vx, [I]
        self.registers.v[:op.x + 1] = self.ram.read_block(self.registers.i, op.x + 1)
        self._post_Fx55_Fx65(op)

#!/usr/bin/env python3

"""
Instruction Decoder

Turns a 16-bit big-endian instruction word into an opcode object.  Each
instruction form has its own immutable opcode class, which only carries the
operand fields the instruction uses:

    n   = Nibble (4-bit count)
    kk  = Byte
    nnn = Address (12-bit)
    x/y = Register (0-15)

Like the CPU's old lookup table, the word is first looked up by its leading
nibble alone, then by a mask for the families which share a leading nibble
(exact match for 0, 0xF00F for 5/8/9 and 0xF0FF for E/F).  Anything left over
is an unknown opcode.  There is no guessing and no silent no-op.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple


class DecodeError(Exception):
    pass


class UnknownOpcode(DecodeError):
    def __init__(self, word):
        self.word = word
        super().__init__("Unknown opcode 0x{:04x}".format(word))


def _opcode(name, fields, mnemonic):
    # Opcodes are plain named tuples with a display format attached for the debugger
    opcode_class = namedtuple(name, fields)
    opcode_class.mnemonic = mnemonic
    return opcode_class


Cls = _opcode("Cls", (), "CLS")
Ret = _opcode("Ret", (), "RET")
Jump = _opcode("Jump", ("nnn",), "JP 0x{nnn:03x}")
Call = _opcode("Call", ("nnn",), "CALL 0x{nnn:03x}")
SkipEqualByte = _opcode("SkipEqualByte", ("x", "kk"), "SE V{x:01x}, 0x{kk:02x}")
SkipNotEqualByte = _opcode("SkipNotEqualByte", ("x", "kk"), "SNE V{x:01x}, 0x{kk:02x}")
SkipEqual = _opcode("SkipEqual", ("x", "y"), "SE V{x:01x}, V{y:01x}")
LoadByte = _opcode("LoadByte", ("x", "kk"), "LD V{x:01x}, 0x{kk:02x}")
AddByte = _opcode("AddByte", ("x", "kk"), "ADD V{x:01x}, 0x{kk:02x}")
Load = _opcode("Load", ("x", "y"), "LD V{x:01x}, V{y:01x}")
Or = _opcode("Or", ("x", "y"), "OR V{x:01x}, V{y:01x}")
And = _opcode("And", ("x", "y"), "AND V{x:01x}, V{y:01x}")
Xor = _opcode("Xor", ("x", "y"), "XOR V{x:01x}, V{y:01x}")
Add = _opcode("Add", ("x", "y"), "ADD V{x:01x}, V{y:01x}")
Sub = _opcode("Sub", ("x", "y"), "SUB V{x:01x}, V{y:01x}")
ShiftRight = _opcode("ShiftRight", ("x", "y"), "SHR V{x:01x} {{, V{y:01x}}}")
SubN = _opcode("SubN", ("x", "y"), "SUBN V{x:01x}, V{y:01x}")
ShiftLeft = _opcode("ShiftLeft", ("x", "y"), "SHL V{x:01x} {{, V{y:01x}}}")
SkipNotEqual = _opcode("SkipNotEqual", ("x", "y"), "SNE V{x:01x}, V{y:01x}")
LoadIndex = _opcode("LoadIndex", ("nnn",), "LD I, 0x{nnn:03x}")
JumpOffset = _opcode("JumpOffset", ("nnn",), "JP V0, 0x{nnn:03x}")
Random = _opcode("Random", ("x", "kk"), "RND V{x:01x}, 0x{kk:02x}")
Draw = _opcode("Draw", ("x", "y", "n"), "DRW V{x:01x}, V{y:01x}, 0x{n:01x}")
SkipKeyDown = _opcode("SkipKeyDown", ("x",), "SKP V{x:01x}")
SkipKeyUp = _opcode("SkipKeyUp", ("x",), "SKNP V{x:01x}")
LoadDelay = _opcode("LoadDelay", ("x",), "LD V{x:01x}, DT")
WaitKey = _opcode("WaitKey", ("x",), "LD V{x:01x}, K")
SetDelay = _opcode("SetDelay", ("x",), "LD DT, V{x:01x}")
SetSound = _opcode("SetSound", ("x",), "LD ST, V{x:01x}")
AddIndex = _opcode("AddIndex", ("x",), "ADD I, V{x:01x}")
LoadFont = _opcode("LoadFont", ("x",), "LD F, V{x:01x}")
StoreBCD = _opcode("StoreBCD", ("x",), "LD B, V{x:01x}")
StoreRegisters = _opcode("StoreRegisters", ("x",), "LD [I], V{x:01x}")
LoadRegisters = _opcode("LoadRegisters", ("x",), "LD V{x:01x}, [I]")


# Operand extractors.  References to x, y, kk, nnn and n are always in the same position throughout all instructions.
def _no_operands(word):
    return ()


def _nnn(word):
    return (word & 0xFFF,)


def _x(word):
    return ((word & 0xF00) >> 8,)


def _xkk(word):
    return (word & 0xF00) >> 8, word & 0xFF


def _xy(word):
    return (word & 0xF00) >> 8, (word & 0xF0) >> 4


def _xyn(word):
    return (word & 0xF00) >> 8, (word & 0xF0) >> 4, word & 0xF


# Family markers for leading nibbles which need a second, masked lookup
_MASK_EXACT = 0xFFFF
_MASK_XY = 0xF00F
_MASK_X = 0xF0FF

FAMILIES = {
    # Initial lookup for instructions' first nibble
    0x0: _MASK_EXACT,
    0x1: (Jump, _nnn),
    0x2: (Call, _nnn),
    0x3: (SkipEqualByte, _xkk),
    0x4: (SkipNotEqualByte, _xkk),
    0x5: _MASK_XY,
    0x6: (LoadByte, _xkk),
    0x7: (AddByte, _xkk),
    0x8: _MASK_XY,
    0x9: _MASK_XY,
    0xA: (LoadIndex, _nnn),
    0xB: (JumpOffset, _nnn),
    0xC: (Random, _xkk),
    0xD: (Draw, _xyn),
    0xE: _MASK_X,
    0xF: _MASK_X
}

INSTRUCTIONS = {
    # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
    0x00E0: (Cls, _no_operands),
    0x00EE: (Ret, _no_operands),
    # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
    0x5000: (SkipEqual, _xy),
    0x8000: (Load, _xy),
    0x8001: (Or, _xy),
    0x8002: (And, _xy),
    0x8003: (Xor, _xy),
    0x8004: (Add, _xy),
    0x8005: (Sub, _xy),
    0x8006: (ShiftRight, _xy),
    0x8007: (SubN, _xy),
    0x800E: (ShiftLeft, _xy),
    0x9000: (SkipNotEqual, _xy),
    # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
    0xE09E: (SkipKeyDown, _x),
    0xE0A1: (SkipKeyUp, _x),
    0xF007: (LoadDelay, _x),
    0xF00A: (WaitKey, _x),
    0xF015: (SetDelay, _x),
    0xF018: (SetSound, _x),
    0xF01E: (AddIndex, _x),
    0xF029: (LoadFont, _x),
    0xF033: (StoreBCD, _x),
    0xF055: (StoreRegisters, _x),
    0xF065: (LoadRegisters, _x)
}

# Every opcode class the decoder can produce
OPCODES = tuple(
    [entry[0] for entry in FAMILIES.values() if isinstance(entry, tuple)] +
    [entry[0] for entry in INSTRUCTIONS.values()]
)


def decode(word):
    if not 0 <= word <= 0xFFFF:
        raise UnknownOpcode(word)

    entry = FAMILIES[word >> 12]

    if not isinstance(entry, tuple):
        entry = INSTRUCTIONS.get(word & entry)

        if entry is None:
            raise UnknownOpcode(word)

    opcode_class, operands = entry
    return opcode_class(*operands(word))


def disassemble(opcode):
    return opcode.mnemonic.format(**opcode._asdict())

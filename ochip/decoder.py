#!/usr/bin/env python3

"""
Instruction Decoder

Turns a 16-bit opcode word into an Instruction: a pattern tag naming the
instruction form (e.g. "8xy4"), plus every operand field already pulled out of
the word, so the interpreter never has to pick the word apart again.

Decoding never fails.  Any word that isn't a CHIP-8 instruction comes back
tagged as UNKNOWN, and the interpreter decides what to do about it.

The first nibble picks the instruction family.  Most families only have one
instruction.  The rest are looked up with the first nibble kept and the operand
nibbles masked out:

    0x0          exact match (00E0, 00EE), anything else is SYS
    0x5/0x8/0x9  bitmask 0xF00F
    0xE/0xF      bitmask 0xF0FF
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

# n = Nibble
# kk = Byte
# nnn = address
# x/y = register (0-15)
Instruction = namedtuple("Instruction", ["pattern", "opcode", "x", "y", "n", "kk", "nnn"])

UNKNOWN = "????"

# Families with only one instruction, keyed on the first nibble
SINGLE_PATTERNS = {
    0x1: "1nnn",
    0x2: "2nnn",
    0x3: "3xkk",
    0x4: "4xkk",
    0x6: "6xkk",
    0x7: "7xkk",
    0xA: "Annn",
    0xB: "Bnnn",
    0xC: "Cxkk",
    0xD: "Dxyn"
}

FAMILY_MASKS = {
    0x0: 0xFFFF,
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

MASKED_PATTERNS = {
    # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
    0x00E0: "00E0",
    0x00EE: "00EE",
    # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
    0x5000: "5xy0",
    0x8000: "8xy0",
    0x8001: "8xy1",
    0x8002: "8xy2",
    0x8003: "8xy3",
    0x8004: "8xy4",
    0x8005: "8xy5",
    0x8006: "8xy6",
    0x8007: "8xy7",
    0x800E: "8xyE",
    0x9000: "9xy0",
    # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
    0xE09E: "Ex9E",
    0xE0A1: "ExA1",
    0xF007: "Fx07",
    0xF00A: "Fx0A",
    0xF015: "Fx15",
    0xF018: "Fx18",
    0xF01E: "Fx1E",
    0xF029: "Fx29",
    0xF033: "Fx33",
    0xF055: "Fx55",
    0xF065: "Fx65"
}

# Conventional assembler mnemonics, used for log and fault messages
MNEMONICS = {
    "0nnn": "SYS 0x{nnn:03x}",
    "00E0": "CLS",
    "00EE": "RET",
    "1nnn": "JP 0x{nnn:03x}",
    "2nnn": "CALL 0x{nnn:03x}",
    "3xkk": "SE V{x:01x}, 0x{kk:02x}",
    "4xkk": "SNE V{x:01x}, 0x{kk:02x}",
    "5xy0": "SE V{x:01x}, V{y:01x}",
    "6xkk": "LD V{x:01x}, 0x{kk:02x}",
    "7xkk": "ADD V{x:01x}, 0x{kk:02x}",
    "8xy0": "LD V{x:01x}, V{y:01x}",
    "8xy1": "OR V{x:01x}, V{y:01x}",
    "8xy2": "AND V{x:01x}, V{y:01x}",
    "8xy3": "XOR V{x:01x}, V{y:01x}",
    "8xy4": "ADD V{x:01x}, V{y:01x}",
    "8xy5": "SUB V{x:01x}, V{y:01x}",
    "8xy6": "SHR V{x:01x} {{, V{y:01x}}}",
    "8xy7": "SUBN V{x:01x}, V{y:01x}",
    "8xyE": "SHL V{x:01x} {{, V{y:01x}}}",
    "9xy0": "SNE V{x:01x}, V{y:01x}",
    "Annn": "LD I, 0x{nnn:03x}",
    "Bnnn": "JP V0, 0x{nnn:03x}",
    "Cxkk": "RND V{x:01x}, 0x{kk:02x}",
    "Dxyn": "DRW V{x:01x}, V{y:01x}, 0x{n:01x}",
    "Ex9E": "SKP V{x:01x}",
    "ExA1": "SKNP V{x:01x}",
    "Fx07": "LD V{x:01x}, DT",
    "Fx0A": "LD V{x:01x}, K",
    "Fx15": "LD DT, V{x:01x}",
    "Fx18": "LD ST, V{x:01x}",
    "Fx1E": "ADD I, V{x:01x}",
    "Fx29": "LD F, V{x:01x}",
    "Fx33": "LD B, V{x:01x}",
    "Fx55": "LD [I], V{x:01x}",
    "Fx65": "LD V{x:01x}, [I]",
    UNKNOWN: "??? 0x{opcode:04x}"
}

# Every instruction form the interpreter has to handle
PATTERNS = tuple(pattern for pattern in MNEMONICS if pattern != UNKNOWN)


def decode(opcode):
    opcode &= 0xFFFF
    family = opcode >> 12
    pattern = SINGLE_PATTERNS.get(family)

    if pattern is None:
        pattern = MASKED_PATTERNS.get(opcode & FAMILY_MASKS[family])

        if pattern is None:
            # Every other 0nnn calls a native machine code routine
            pattern = "0nnn" if family == 0x0 else UNKNOWN

    return Instruction(
        pattern,
        opcode,
        (opcode & 0xF00) >> 8,
        (opcode & 0xF0) >> 4,
        opcode & 0xF,
        opcode & 0xFF,
        opcode & 0xFFF
    )


def describe(instruction):
    return MNEMONICS[instruction.pattern].format(**instruction._asdict())

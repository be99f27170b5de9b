#!/usr/bin/env python3

"""
Register File

Sixteen 8-bit general purpose registers (V0 to VF), the 16-bit index register
(I), and the program counter (PC).  VF doubles up as the carry, borrow and
collision flag, so instructions must write it after their main result.

There is no stack pointer here, since the call stack tracks its own depth.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_REGISTERS, DEFAULT_LOAD_OFFSET

I_BITMASK = 0xFFFF  # Index register is 16 bits wide, even though only 12 bits of memory exist


class RegisterFile:
    def __init__(self, pc=DEFAULT_LOAD_OFFSET):
        self.v = memoryview(bytearray(NUM_REGISTERS))  # Mutable bytes, so writes are masked to 8 bits by the caller
        self.i = 0
        self.pc = pc

    def reset(self, pc=DEFAULT_LOAD_OFFSET):
        self.v[:] = bytes(NUM_REGISTERS)
        self.i = 0
        self.pc = pc

    @property
    def vf(self):
        return self.v[0xF]

    @vf.setter
    def vf(self, flag):
        self.v[0xF] = flag

    def set_i(self, value):
        self.i = value & I_BITMASK

    def dump(self):
        # Most significant register first, matching the way the opcode nibbles read
        return (
            "V: 0x" + ("{:02x}" * NUM_REGISTERS) + " I: 0x{:04x} PC: 0x{:03x}"
        ).format(*[self.v[reg_num] for reg_num in range(NUM_REGISTERS - 1, -1, -1)] + [self.i, self.pc])

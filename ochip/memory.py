#!/usr/bin/env python3

"""
Address Space Emulator

Holds the 4K memory image shared by the interpreter font, the loaded program,
and any scratch data the program writes through the index register.

Programs can only reach memory through the index register, and the real
hardware only decodes 12 address lines, so index-relative accesses wrap back
round to 0x000 rather than faulting.  All of that wrapping is done by 'wrap',
so every instruction agrees on where an address lands.

Host-side writes (font and program loading) are bounds-checked instead, as a
block that doesn't fit is a bug in the caller, not in the running program.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE


class AddressSpaceError(Exception):
    pass


class AddressSpace:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def wrap(self, location):
        return location % self.mem_size

    def in_bounds(self, location):
        return 0 <= location <= self.mem_top

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_word(self, location):
        # CHIP-8 is big-endian
        self.check_overflow(location + 1)
        return (self.mem[location] << 8) | self.mem[location + 1]

    def read_block(self, location, size=1):
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_top = location + len(block)
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def read_wrapped(self, location):
        return self.mem[self.wrap(location)]

    def write_wrapped(self, location, byte):
        self.mem[self.wrap(location)] = byte

    def check_overflow(self, location):
        if not self.in_bounds(location):
            raise AddressSpaceError("Address 0x{:x} is outside of memory".format(location))

    def clear(self):
        self.mem[:] = bytes(self.mem_size)

    def snapshot(self):
        # Read-only view for host inspection
        return self.mem.toreadonly()

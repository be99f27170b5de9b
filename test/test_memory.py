#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from ochip.memory import AddressSpace, AddressSpaceError


class TestAddressSpace(unittest.TestCase):
    def setUp(self):
        self.ram = AddressSpace()

    def test_memory_size(self):
        self.assertEqual(0x1000, self.ram.mem_size)
        self.assertEqual(0xFFF, self.ram.mem_top)
        self.assertEqual(bytes(0x1000), bytes(self.ram.snapshot()))

    def test_memory_write_block(self):
        data = bytearray(b"\x01\x02\x03")
        self.ram.write_block(0xFFD, data)
        self.assertEqual(bytes(data), bytes(self.ram.read_block(0xFFD, 3)))

    def test_memory_write_block_overflow(self):
        data = bytearray(b"\x01\x02\x03")
        self.assertRaises(AddressSpaceError, self.ram.write_block, 0xFFE, data)
        self.assertEqual(0, self.ram.read(0xFFE))

    def test_memory_read_write_checked(self):
        self.ram.write(0x123, 0x45)
        self.assertEqual(0x45, self.ram.read(0x123))
        self.assertRaises(AddressSpaceError, self.ram.read, 0x1000)
        self.assertRaises(AddressSpaceError, self.ram.write, -1, 0x00)

    def test_memory_read_word(self):
        self.ram.write_block(0x200, bytearray(b"\x12\x34"))
        self.assertEqual(0x1234, self.ram.read_word(0x200))
        self.assertRaises(AddressSpaceError, self.ram.read_word, 0xFFF)

    def test_memory_wrapped(self):
        self.ram.write_wrapped(0x1001, 0xAB)
        self.assertEqual(0xAB, self.ram.read(0x001))
        self.assertEqual(0xAB, self.ram.read_wrapped(0x2001))
        self.assertEqual(0x005, self.ram.wrap(0x1005))

    def test_memory_wrapped_uses_wrap(self):
        # A smaller address space wraps at its own size
        ram = AddressSpace(0x100)
        ram.write_wrapped(0x101, 0xCD)
        self.assertEqual(0xCD, ram.read(0x01))
        self.assertEqual(0xCD, ram.read_wrapped(0x301))

    def test_memory_clear(self):
        self.ram.write(0x300, 0xFF)
        self.ram.clear()
        self.assertEqual(0, self.ram.read(0x300))

    def test_memory_snapshot_read_only(self):
        snapshot = self.ram.snapshot()
        self.ram.write(0x10, 0x7)
        self.assertEqual(0x7, snapshot[0x10])

        with self.assertRaises(TypeError):
            snapshot[0x10] = 0

#!/usr/bin/env python3

"""
Call Stack

There is no specified location in memory for the call stack, and no stack
pointer register exposed to the running program, so return addresses are kept
in a plain list on the host side.

Only CALL pushes and only RET pops.  Both directions are bounded: going past
16 nested calls, or returning with nothing to return to, is a fault the
interpreter cannot recover from.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_DEPTH


class StackError(Exception):
    pass


class CallStack:
    def __init__(self, size=STACK_DEPTH):
        self.items = []
        self.size = size

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackError("Stack overflow")

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def clear(self):
        self.items.clear()

    def depth(self):
        return len(self.items)

    def get_items(self):
        # For fault reports
        return tuple(self.items)

#!/usr/bin/env python3

"""
CHIP-8 Interpreter

Like a real computer, this is where most of the processing happens.  Each call
to 'step' runs exactly one instruction: fetch the opcode word at the program
counter, move the program counter past it, decode it, and execute it.

Nothing here waits on the host.  The timers are ticked by whoever drives the
interpreter (at 60Hz), and the key-wait instruction doesn't block, it just
rewinds the program counter so it runs again on the next step, with
'awaiting_key' set so the host can tell.

Faults the real machine could not have survived (running off the end of
memory, or over/underflowing the call stack) halt the interpreter with a
MachineFault.  Anything else, such as an opcode that doesn't exist, is logged
and reported through 'diagnostics', and execution carries on.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from collections import deque, namedtuple
from random import Random
from .config import Config
from .constants import APP_INTRO, FONT_LOCATION, FONT_GLYPH_SIZE, MEM_SIZE, SYSTEM_FONT
from .decoder import decode, describe
from .display import Display
from .keypad import Keypad
from .memory import AddressSpace
from .registers import RegisterFile
from .stack import CallStack, StackError
from .timers import TimerUnit

logger = logging.getLogger(__name__)

DIAGNOSTICS_LIMIT = 256  # Only the most recent anomalies are kept

Diagnostic = namedtuple("Diagnostic", ["address", "opcode", "message"])


class InterpreterError(Exception):
    pass


class MachineFault(InterpreterError):
    pass


class ProgramError(InterpreterError):
    pass


def check_program(image, load_offset):
    # Returns the image as bytes if it fits in memory from 'load_offset'
    if not isinstance(image, (bytes, bytearray, memoryview)):
        raise ProgramError("Program image must be bytes, not {}".format(type(image).__name__))

    image = bytes(image)
    capacity = MEM_SIZE - load_offset

    if not image:
        raise ProgramError("Program image is empty")

    if len(image) > capacity:
        raise ProgramError(
            "Program image is {} bytes, but only {} bytes fit from address 0x{:03x}".format(
                len(image), capacity, load_offset
            )
        )

    return image


class Interpreter:
    def __init__(self, config=None, renderer=None, rng=None):
        self.config = Config() if config is None else config
        self.ram = AddressSpace()
        self.registers = RegisterFile(self.config.load_offset)
        self.v = self.registers.v  # Updated in place, so this alias stays valid across resets
        self.stack = CallStack()
        self.timers = TimerUnit()
        self.display = Display(renderer, allow_wrapping=self.config.draw_wraps)
        self.keypad = Keypad()
        self.rng = Random() if rng is None else rng
        self.live_debug = logger.isEnabledFor(logging.DEBUG)
        self.diagnostics = deque(maxlen=DIAGNOSTICS_LIMIT)
        self.program = b""

        # Quirks are looked up on every instruction that uses them, so keep them flat
        self.shift_quirks = self.config.shift_uses_vy
        self.index_increment_quirks = self.config.store_load_increment_quirk
        self.index_overflow_quirks = self.config.add_i_overflow_quirk
        self.jump_quirks = self.config.jump_uses_vx

        # Define instruction pointers, keyed on the decoded pattern.  Unknown patterns fall through to
        # '_opcode_unknown' in 'step'.
        self.instructions = {
            "0nnn": self._0nnn,
            "00E0": self._00E0,
            "00EE": self._00EE,
            "1nnn": self._1nnn,
            "2nnn": self._2nnn,
            "3xkk": self._3xkk,
            "4xkk": self._4xkk,
            "5xy0": self._5xy0,
            "6xkk": self._6xkk,
            "7xkk": self._7xkk,
            "8xy0": self._8xy0,
            "8xy1": self._8xy1,
            "8xy2": self._8xy2,
            "8xy3": self._8xy3,
            "8xy4": self._8xy4,
            "8xy5": self._8xy5,
            "8xy6": self._8xy6,
            "8xy7": self._8xy7,
            "8xyE": self._8xyE,
            "9xy0": self._9xy0,
            "Annn": self._Annn,
            "Bnnn": self._Bnnn,
            "Cxkk": self._Cxkk,
            "Dxyn": self._Dxyn,
            "Ex9E": self._Ex9E,
            "ExA1": self._ExA1,
            "Fx07": self._Fx07,
            "Fx0A": self._Fx0A,
            "Fx15": self._Fx15,
            "Fx18": self._Fx18,
            "Fx1E": self._Fx1E,
            "Fx29": self._Fx29,
            "Fx33": self._Fx33,
            "Fx55": self._Fx55,
            "Fx65": self._Fx65
        }

        self.opcode = 0
        self.debug_pc = 0
        self._awaiting_key = False
        self._fault = None
        self.reset()

    # Host-facing operations

    def load_program(self, image):
        # Check everything before touching memory, so a bad image is never partially loaded
        self.program = check_program(image, self.config.load_offset)
        self.reset()

    def reset(self):
        self.ram.clear()
        self.ram.write_block(FONT_LOCATION, SYSTEM_FONT)

        if self.program:
            self.ram.write_block(self.config.load_offset, self.program)

        self.registers.reset(self.config.load_offset)
        self.stack.clear()
        self.timers.reset()
        self.display.clear()
        self.keypad.setup_keypress()
        self.diagnostics.clear()
        self.opcode = 0
        self.debug_pc = self.registers.pc
        self._awaiting_key = False
        self._fault = None

    def step(self):
        if self._fault is not None:
            # Stay halted until reset
            raise self._fault

        pc = self.registers.pc

        if not (self.ram.in_bounds(pc) and self.ram.in_bounds(pc + 1)):
            raise self._halt("Program counter 0x{:x} is outside of memory".format(pc)) from None

        # Keep track of the program counter before altering it in any way for fault reports
        self.debug_pc = pc
        self.opcode = self.ram.read_word(pc)
        self.registers.pc = pc + 2  # Program counter moves on before execution, so jumps and calls overwrite it
        instruction = decode(self.opcode)

        if self.live_debug:
            logger.debug("0x%03x: 0x%04x %-22s %s", pc, self.opcode, describe(instruction), self.registers.dump())

        self.instructions.get(instruction.pattern, self._opcode_unknown)(instruction)

        return instruction

    def tick_timers(self):
        self.timers.tick()

    def set_key(self, key, pressed):
        self.keypad.set_key(key, pressed)

    def sound_active(self):
        return self.timers.sound_active()

    def display_view(self):
        return self.display.view()

    @property
    def awaiting_key(self):
        return self._awaiting_key

    @property
    def fault(self):
        return self._fault

    # Fault and anomaly reporting

    def _dump(self):
        stack_items = self.stack.get_items()
        stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)

        return "{} DT: 0x{:02x} ST: 0x{:02x}\nStack:{}".format(
            self.registers.dump(), self.timers.delay, self.timers.sound, stack_str or " (Empty)"
        )

    def _halt(self, reason):
        self._fault = MachineFault(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\n{}.  Last opcode 0x{:04x} at address 0x{:03x}."
            ).format(APP_INTRO, self._dump(), reason, self.opcode, self.debug_pc)
        )
        logger.error("%s at 0x%03x", reason, self.debug_pc)

        return self._fault

    def _report(self, message):
        logger.warning("%s (opcode 0x%04x at address 0x%03x)", message, self.opcode, self.debug_pc)
        self.diagnostics.append(Diagnostic(self.debug_pc, self.opcode, message))

    def _index_base(self, count):
        # Index-relative accesses wrap round the end of memory rather than faulting, but it's worth knowing about
        i = self.registers.i

        if i + count > self.ram.mem_size:
            self._report("Index register access 0x{:04x}+{} wrapped round memory".format(i, count))

        return i

    def _opcode_unknown(self, op):
        self._report("Unknown opcode 0x{:04x} skipped".format(op.opcode))

    def _skip(self):
        self.registers.pc += 2

    # Instructions

    def _0nnn(self, op):  # SYS addr
        # Native machine code routines can't be run, so these are treated as a no-op
        if self.live_debug:
            logger.debug("Ignoring call to machine code routine at 0x%03x", op.nnn)

    def _00E0(self, op):  # CLS
        self.display.clear()

    def _00EE(self, op):  # RET
        try:
            self.registers.pc = self.stack.pop()
        except StackError as err:
            raise self._halt(str(err)) from None

    def _1nnn(self, op):  # JP addr
        self.registers.pc = op.nnn

    def _2nnn(self, op):  # CALL addr
        try:
            self.stack.push(self.registers.pc)
        except StackError as err:
            raise self._halt(str(err)) from None

        self.registers.pc = op.nnn

    def _3xkk(self, op):  # SE Vx, byte
        if self.v[op.x] == op.kk:
            self._skip()

    def _4xkk(self, op):  # SNE Vx, byte
        if self.v[op.x] != op.kk:
            self._skip()

    def _5xy0(self, op):  # SE Vx, Vy
        if self.v[op.x] == self.v[op.y]:
            self._skip()

    def _6xkk(self, op):  # LD Vx, byte
        self.v[op.x] = op.kk

    def _7xkk(self, op):  # ADD Vx, byte
        # No carry flag for this one
        self.v[op.x] = (self.v[op.x] + op.kk) & 0xFF

    def _8xy0(self, op):  # LD Vx, Vy
        self.v[op.x] = self.v[op.y]

    def _8xy1(self, op):  # OR Vx, Vy
        self.v[op.x] |= self.v[op.y]

    def _8xy2(self, op):  # AND Vx, Vy
        self.v[op.x] &= self.v[op.y]

    def _8xy3(self, op):  # XOR Vx, Vy
        self.v[op.x] ^= self.v[op.y]

    def _8xy4(self, op):  # ADD Vx, Vy
        v = self.v
        val = v[op.x] + v[op.y]
        v[op.x] = val & 0xFF
        v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, x, val):  # Post-SUB/SUBN
        self.v[x] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes VF is specified in the
        # parameters.
        self.v[0xF] = int(val >= 0)

    def _8xy5(self, op):  # SUB Vx, Vy
        self._post_8xy5_8xy7(op.x, self.v[op.x] - self.v[op.y])

    def _8xy6(self, op):  # SHR Vx {, Vy}
        # On the COSMAC VIP, Vy is shifted into Vx.  Later interpreters shift Vx in place.
        v = self.v
        val = v[op.y] if self.shift_quirks else v[op.x]
        v[op.x] = val >> 1
        v[0xF] = val & 1

    def _8xy7(self, op):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(op.x, self.v[op.y] - self.v[op.x])

    def _8xyE(self, op):  # SHL Vx {, Vy}
        v = self.v
        val = v[op.y] if self.shift_quirks else v[op.x]
        v[op.x] = (val << 1) & 0xFF
        v[0xF] = val >> 7

    def _9xy0(self, op):  # SNE Vx, Vy
        if self.v[op.x] != self.v[op.y]:
            self._skip()

    def _Annn(self, op):  # LD I, addr
        self.registers.set_i(op.nnn)

    def _Bnnn(self, op):  # JP V0, addr
        # This is a nasty quirk which breaks lots of games if set incorrectly.  Landing outside of memory is left for
        # the next fetch to catch.
        reg = op.x if self.jump_quirks else 0
        self.registers.pc = self.v[reg] + op.nnn

    def _Cxkk(self, op):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[op.x] = self.rng.randint(0, 0xFF) & op.kk

    def _Dxyn(self, op):  # DRW Vx, Vy, nibble
        height = op.n
        i = self._index_base(height)
        read_wrapped = self.ram.read_wrapped
        sprite = bytes(read_wrapped(i + row) for row in range(height))
        self.v[0xF] = int(self.display.draw(self.v[op.x], self.v[op.y], sprite))

    def _Ex9E(self, op):  # SKP Vx
        if self.keypad.is_key_down(self.v[op.x]):
            self._skip()

    def _ExA1(self, op):  # SKNP Vx
        if not self.keypad.is_key_down(self.v[op.x]):
            self._skip()

    def _Fx07(self, op):  # LD Vx, DT
        self.v[op.x] = self.timers.delay

    def _Fx0A(self, op):  # LD Vx, K
        # This waits for a keypress, but the timers still need to run and the display still needs updating, so hand
        # control back to the host and rewind the program counter to come back here on the next step.

        if self._awaiting_key:
            key = self.keypad.get_keypress()
        else:
            self.keypad.setup_keypress()  # Forget any key pressed before the wait started
            self._awaiting_key = True
            key = None

        if key is None:
            self.registers.pc -= 2
        else:
            self.v[op.x] = key
            self._awaiting_key = False

    def _Fx15(self, op):  # LD DT, Vx
        self.timers.set_delay(self.v[op.x])

    def _Fx18(self, op):  # LD ST, Vx
        self.timers.set_sound(self.v[op.x])

    def _Fx1E(self, op):  # ADD I, Vx
        val = self.registers.i + self.v[op.x]
        self.registers.set_i(val)

        # Allow for Amiga CHIP-8 interpreter behaviour
        if self.index_overflow_quirks:
            self.v[0xF] = int(val > self.ram.mem_top)

    def _Fx29(self, op):  # LD F, Vx
        self.registers.set_i(FONT_LOCATION + FONT_GLYPH_SIZE * (self.v[op.x] & 0xF))

    def _Fx33(self, op):  # LD B, Vx
        val = self.v[op.x]
        i = self._index_base(3)
        self.ram.write_wrapped(i, val // 100)            # Most-significant digit
        self.ram.write_wrapped(i + 1, (val // 10) % 10)  # Middle digit
        self.ram.write_wrapped(i + 2, val % 10)          # Least-significant digit

    def _post_Fx55_Fx65(self, i, count):
        if self.index_increment_quirks:
            self.registers.set_i(i + count)

    def _Fx55(self, op):  # LD [I], Vx
        count = op.x + 1
        i = self._index_base(count)

        for reg in range(count):
            self.ram.write_wrapped(i + reg, self.v[reg])

        self._post_Fx55_Fx65(i, count)

    def _Fx65(self, op):  # LD Vx, [I]
        count = op.x + 1
        i = self._index_base(count)

        for reg in range(count):
            self.v[reg] = self.ram.read_wrapped(i + reg)

        self._post_Fx55_Fx65(i, count)

"""
Hatchling CPU
=============

Opcode executor and fetch-decode-execute loop for the Hatchling machine.

The machine has one signed 16-bit accumulator, an 8-bit instruction
counter and 256 words of memory. Each cycle:

    1. fetch   memory[instruction_counter] into the instruction register
    2. decode  the register into opcode (high byte) and operand (low byte)
    3. execute the opcode's handler from the dispatch table

The loop stops on HALT or when a handler reports a fatal error. There is
no built-in instruction limit; a program that branches to itself runs
until the process is killed, unless the caller passes max_instructions.

Arithmetic is computed at full precision and checked against the signed
16-bit range before anything is committed. A failing instruction changes
nothing: accumulator, memory and counter keep their pre-instruction
values, and the fatal flag freezes the machine for good.

LSR defaults to the signed shift of the reference machine, so for a
negative accumulator it gives the same result as ASR (-4 -> -2). Only
lsr_mode="logical" makes the two differ (-4 -> 0x7FFE).

Copyright (c) 2025 Hatchling Simulator Contributors
"""

import logging
from typing import Callable, Dict, Optional

from hatchling_sim.errors import ConfigError

from .console import ClickConsole, ConsoleProtocol
from .events import (
    ABNORMAL_TERMINATION,
    FATAL_MESSAGES,
    RunResult,
    StopReason,
)
from .opcodes import Opcode
from .state import MachineState
from .words import fits_signed16, format_word, parse_hex, to_signed16, to_unsigned16

logger = logging.getLogger(__name__)

# LSR variants: "signed" shifts the signed accumulator (sign bit copied),
# "logical" shifts the 16-bit pattern with a zero fill.
LSR_SIGNED = "signed"
LSR_LOGICAL = "logical"
LSR_MODES = (LSR_SIGNED, LSR_LOGICAL)

READ_PROMPT = "INPUT A SIGNED SHORT INT (BASE 16, USE - FOR NEGATIVE):  "
READ_OUT_OF_RANGE = "Value out of range (-32768 to 32767, base 10)"
READ_NOT_HEX = "Value is not a base 16 number"

Handler = Callable[[int], Optional[StopReason]]


def c_divide(dividend: int, divisor: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(dividend) // abs(divisor)
    return -quotient if (dividend < 0) != (divisor < 0) else quotient


def c_remainder(dividend: int, divisor: int) -> int:
    """Remainder with the sign of the dividend, pairing with c_divide."""
    return dividend - divisor * c_divide(dividend, divisor)


class HatchlingCPU:
    """
    Hatchling CPU bound to one machine state.

    Each handler receives the operand, mutates the state and returns None
    to keep running, or a StopReason to end the run. Handlers own counter
    advancement, because branches, HALT, faults and rejected READs do not
    advance.

    Example:
        >>> state = MachineState.from_words([0x4003, 0x1004, 0xFF00, 0x0002, 0x0003])
        >>> cpu = HatchlingCPU(state)
        >>> result = cpu.run()
        >>> result.reason, state.accumulator
        (<StopReason.HALT: 1>, 5)
    """

    def __init__(
        self,
        state: MachineState,
        console: Optional[ConsoleProtocol] = None,
        lsr_mode: str = LSR_SIGNED,
    ):
        """
        Initialize CPU with a loaded machine state.

        Args:
            state: Machine state populated by the loader
            console: Terminal used by READ/WRTE (default: click terminal)
            lsr_mode: "signed" (default) or "logical" right shift for LSR

        Raises:
            ConfigError: If lsr_mode is unknown
        """
        if lsr_mode not in LSR_MODES:
            raise ConfigError(f"unknown LSR mode {lsr_mode!r}, expected one of {LSR_MODES}")

        self.state = state
        self.console: ConsoleProtocol = console if console is not None else ClickConsole()
        self.lsr_mode = lsr_mode

        self._handlers: Dict[Opcode, Handler] = {
            Opcode.ADD: self._op_add,
            Opcode.SUB: self._op_sub,
            Opcode.MUL: self._op_mul,
            Opcode.DIV: self._op_div,
            Opcode.MOD: self._op_mod,
            Opcode.AND: self._op_and,
            Opcode.ORR: self._op_orr,
            Opcode.NOT: self._op_not,
            Opcode.XOR: self._op_xor,
            Opcode.LSR: self._op_lsr,
            Opcode.ASR: self._op_asr,
            Opcode.LSL: self._op_lsl,
            Opcode.B: self._op_b,
            Opcode.BNEG: self._op_bneg,
            Opcode.BPOS: self._op_bpos,
            Opcode.BZRO: self._op_bzro,
            Opcode.LOAD: self._op_load,
            Opcode.STOR: self._op_stor,
            Opcode.READ: self._op_read,
            Opcode.WRTE: self._op_wrte,
            Opcode.HALT: self._op_halt,
        }

    # ========================================
    # Main Execution Loop
    # ========================================

    def run(self, max_instructions: Optional[int] = None) -> RunResult:
        """
        Run until HALT or a fatal error.

        Args:
            max_instructions: Stop after this many instructions. None (the
                default) means no limit.

        Returns:
            RunResult describing why execution stopped
        """
        state = self.state
        if state.fatal_error:
            logger.debug("Machine is frozen by an earlier fatal error")
            return RunResult(state.fault, state.instruction_counter, 0)

        logger.info(f"Execution begins at ${state.instruction_counter:02X}")
        executed = 0

        while True:
            if max_instructions is not None and executed >= max_instructions:
                result = RunResult(
                    StopReason.INSTRUCTION_LIMIT, state.instruction_counter, executed
                )
                break

            address = state.instruction_counter
            reason = self.step()
            executed += 1

            if reason is not None:
                result = RunResult(reason, address, executed)
                break

        logger.info(f"{result} after {executed} instruction(s)")
        return result

    def step(self) -> Optional[StopReason]:
        """
        Fetch, decode and execute exactly one instruction.

        Returns:
            None if execution should continue, otherwise the StopReason
        """
        state = self.state
        if state.fatal_error:
            return state.fault

        state.instruction_register = state.memory[state.instruction_counter]
        opcode = Opcode.lookup(state.opcode)
        handler = self._handlers.get(opcode) if opcode is not None else None

        if logger.isEnabledFor(logging.DEBUG):
            name = opcode.mnemonic if opcode is not None else "???"
            logger.debug(
                f"${state.instruction_counter:02X}: {state.instruction_register:04X} "
                f"{name:<4} {state.operand:02X}  ACC={format_word(state.accumulator)}"
            )

        if handler is None:
            return self._fault(StopReason.UNDEFINED_OPCODE)
        return handler(state.operand)

    # ========================================
    # Helpers
    # ========================================

    def _advance(self) -> None:
        """Move to the next instruction (wraps from $FF to $00)."""
        self.state.instruction_counter += 1

    def _fault(self, reason: StopReason) -> StopReason:
        """Freeze the machine with a fatal error."""
        state = self.state
        state.fatal_error = True
        state.fault = reason
        logger.info(
            f"Fatal error at ${state.instruction_counter:02X} "
            f"(IR={state.instruction_register:04X}): {reason.name}"
        )
        self.console.write(FATAL_MESSAGES[reason])
        self.console.write(ABNORMAL_TERMINATION)
        return reason

    def _commit(self, result: int) -> Optional[StopReason]:
        """Store an exact arithmetic result, or fault if it overflows."""
        if not fits_signed16(result):
            return self._fault(StopReason.ACCUMULATOR_OVERFLOW)
        self.state.accumulator = result
        self._advance()
        return None

    def _set_accumulator(self, value: int) -> None:
        """Store a non-checked result (logic/shift/load) and advance."""
        self.state.accumulator = value
        self._advance()

    def _branch_if(self, condition: bool, target: int) -> None:
        if condition:
            self.state.instruction_counter = target
        else:
            self._advance()

    # ========================================
    # Arithmetic (signed memory operand, overflow is fatal)
    # ========================================

    def _op_add(self, operand: int) -> Optional[StopReason]:
        return self._commit(self.state.accumulator + self.state.read_signed(operand))

    def _op_sub(self, operand: int) -> Optional[StopReason]:
        return self._commit(self.state.accumulator - self.state.read_signed(operand))

    def _op_mul(self, operand: int) -> Optional[StopReason]:
        return self._commit(self.state.accumulator * self.state.read_signed(operand))

    def _op_div(self, operand: int) -> Optional[StopReason]:
        # Zero divisor is checked before overflow
        if self.state.read_word(operand) == 0:
            return self._fault(StopReason.DIVIDE_BY_ZERO)
        return self._commit(c_divide(self.state.accumulator, self.state.read_signed(operand)))

    def _op_mod(self, operand: int) -> Optional[StopReason]:
        if self.state.read_word(operand) == 0:
            return self._fault(StopReason.DIVIDE_BY_ZERO)
        return self._commit(c_remainder(self.state.accumulator, self.state.read_signed(operand)))

    # ========================================
    # Logic (raw memory bit pattern)
    # ========================================

    def _op_and(self, operand: int) -> None:
        self._set_accumulator(to_unsigned16(self.state.accumulator) & self.state.read_word(operand))

    def _op_orr(self, operand: int) -> None:
        self._set_accumulator(to_unsigned16(self.state.accumulator) | self.state.read_word(operand))

    def _op_xor(self, operand: int) -> None:
        self._set_accumulator(to_unsigned16(self.state.accumulator) ^ self.state.read_word(operand))

    def _op_not(self, operand: int) -> None:
        # Logical NOT, not bitwise
        self._set_accumulator(1 if self.state.accumulator == 0 else 0)

    # ========================================
    # Shifts (accumulator only, operand ignored)
    # ========================================

    def _op_lsr(self, operand: int) -> None:
        acc = self.state.accumulator
        if self.lsr_mode == LSR_LOGICAL:
            self._set_accumulator(to_unsigned16(acc) >> 1)
        else:
            self._set_accumulator(acc >> 1)

    def _op_asr(self, operand: int) -> None:
        acc = self.state.accumulator
        if acc < 0:
            self._set_accumulator(~(~acc >> 1))
        else:
            self._set_accumulator(acc >> 1)

    def _op_lsl(self, operand: int) -> None:
        # Bits shifted past bit 15 are lost, no overflow check
        self._set_accumulator(to_signed16(self.state.accumulator << 1))

    # ========================================
    # Branches
    # ========================================

    def _op_b(self, operand: int) -> None:
        self.state.instruction_counter = operand

    def _op_bneg(self, operand: int) -> None:
        self._branch_if(self.state.accumulator < 0, operand)

    def _op_bpos(self, operand: int) -> None:
        self._branch_if(self.state.accumulator > 0, operand)

    def _op_bzro(self, operand: int) -> None:
        self._branch_if(self.state.accumulator == 0, operand)

    # ========================================
    # Load / Store
    # ========================================

    def _op_load(self, operand: int) -> None:
        self._set_accumulator(self.state.read_signed(operand))

    def _op_stor(self, operand: int) -> None:
        self.state.write_word(operand, self.state.accumulator)
        self._advance()

    # ========================================
    # Terminal I/O
    # ========================================

    def _op_read(self, operand: int) -> None:
        """
        Read a signed hex word from the terminal into memory.

        A rejected value leaves memory and counter unchanged, so the same
        READ runs again and prompts once more.
        """
        text = self.console.prompt(READ_PROMPT)
        try:
            value = parse_hex(text)
        except ValueError:
            # Reprompt instead of storing 0 as the reference machine does
            logger.warning(f"READ at ${self.state.instruction_counter:02X}: rejected {text!r}")
            self.console.write(READ_NOT_HEX)
            return

        if not fits_signed16(value):
            logger.warning(
                f"READ at ${self.state.instruction_counter:02X}: {text.strip()} out of range"
            )
            self.console.write(READ_OUT_OF_RANGE)
            return

        self.state.write_word(operand, value)
        self._advance()

    def _op_wrte(self, operand: int) -> None:
        word = format_word(self.state.read_word(operand))
        self.console.write(f"OUTPUT: {word} (REPRESENTED IN BASE 16, 2'S COMPLEMENT)")
        self._advance()

    def _op_halt(self, operand: int) -> StopReason:
        return StopReason.HALT

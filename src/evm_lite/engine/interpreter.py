"""Fetch-decode-execute loop for EVM bytecode."""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..bytecode.opcodes import OpCode, immediate_size, opcode_name
from ..bytecode.parser import BytecodeCursor
from ..errors import ExecutionError, InvalidOpcode, StackUnderflow
from . import alu
from .config import InterpreterConfig, UnknownOpcodePolicy
from .state import ExecutionContext, ExecutionResult, GasMeter, HaltReason, OperandStack

__all__ = ["DEFAULT_HANDLERS", "Handler", "Interpreter", "execute"]

logger = logging.getLogger(__name__)

HandlerFn = Callable[[ExecutionContext], None]


@dataclass(slots=True, frozen=True)
class Handler:
    """Semantics of one opcode.

    ``arity`` is checked by the interpreter before ``fn`` runs, so a handler
    never sees a partially popped stack.
    """

    name: str
    arity: int
    fn: HandlerFn


def _unary(op: Callable[[int], int]) -> HandlerFn:
    def run(ctx: ExecutionContext) -> None:
        ctx.stack.push(op(ctx.stack.pop()))

    return run


def _binary(op: Callable[[int, int], int]) -> HandlerFn:
    def run(ctx: ExecutionContext) -> None:
        primary, secondary = ctx.stack.pop_n(2)
        ctx.stack.push(op(primary, secondary))

    return run


def _ternary(op: Callable[[int, int, int], int]) -> HandlerFn:
    def run(ctx: ExecutionContext) -> None:
        a, b, n = ctx.stack.pop_n(3)
        ctx.stack.push(op(a, b, n))

    return run


def _stop(ctx: ExecutionContext) -> None:
    ctx.halt(HaltReason.STOP)


def _pop(ctx: ExecutionContext) -> None:
    ctx.stack.pop()


def _push(width: int) -> HandlerFn:
    def run(ctx: ExecutionContext) -> None:
        immediate = ctx.cursor.read_immediate(width)
        ctx.stack.push(int.from_bytes(immediate, "big"))

    return run


def _build_default_handlers() -> dict[int, Handler]:
    unary = {
        OpCode.ISZERO: alu.iszero,
        OpCode.NOT: alu.not_,
    }
    binary = {
        OpCode.ADD: alu.add,
        OpCode.MUL: alu.mul,
        OpCode.SUB: alu.sub,
        OpCode.DIV: alu.div,
        OpCode.SDIV: alu.sdiv,
        OpCode.MOD: alu.mod,
        OpCode.SMOD: alu.smod,
        OpCode.EXP: alu.exp,
        OpCode.SIGNEXTEND: alu.signextend,
        OpCode.LT: alu.lt,
        OpCode.GT: alu.gt,
        OpCode.SLT: alu.slt,
        OpCode.SGT: alu.sgt,
        OpCode.EQ: alu.eq,
        OpCode.AND: alu.and_,
        OpCode.OR: alu.or_,
        OpCode.XOR: alu.xor,
        OpCode.SHL: alu.shl,
        OpCode.SHR: alu.shr,
        OpCode.SAR: alu.sar,
    }
    ternary = {
        OpCode.ADDMOD: alu.addmod,
        OpCode.MULMOD: alu.mulmod,
    }

    handlers: dict[int, Handler] = {
        OpCode.STOP: Handler("STOP", 0, _stop),
        OpCode.POP: Handler("POP", 1, _pop),
    }
    for opcode, op in unary.items():
        handlers[opcode] = Handler(opcode.name, 1, _unary(op))
    for opcode, op in binary.items():
        handlers[opcode] = Handler(opcode.name, 2, _binary(op))
    for opcode, op in ternary.items():
        handlers[opcode] = Handler(opcode.name, 3, _ternary(op))
    for opcode in range(OpCode.PUSH0, OpCode.PUSH32 + 1):
        handlers[opcode] = Handler(opcode_name(opcode), 0, _push(immediate_size(opcode)))
    return handlers


DEFAULT_HANDLERS: Mapping[int, Handler] = MappingProxyType(_build_default_handlers())


class Interpreter:
    """Runs bytecode against a fresh stack, one instruction at a time."""

    def __init__(self, config: InterpreterConfig | None = None) -> None:
        self.config = config or InterpreterConfig()
        self._handlers: dict[int, Handler] = dict(DEFAULT_HANDLERS)

    @property
    def handlers(self) -> Mapping[int, Handler]:
        return MappingProxyType(self._handlers)

    def register(self, opcode: int, handler: Handler, *, replace: bool = False) -> None:
        """Add an opcode handler to this interpreter's dispatch table."""
        if not 0 <= opcode <= 0xFF:
            raise ValueError(f"opcode out of range: {opcode}")
        if opcode in self._handlers and not replace:
            raise ValueError(f"opcode 0x{opcode:02X} already registered as {self._handlers[opcode].name}")
        self._handlers[opcode] = handler

    def run(self, code: bytes) -> ExecutionResult:
        ctx = ExecutionContext(
            cursor=BytecodeCursor(code),
            stack=OperandStack(),
            gas=GasMeter(limit=self.config.gas_limit),
        )
        logger.debug("executing %d bytes of code", len(ctx.cursor.code))

        while not ctx.halted:
            try:
                self.step(ctx)
            except ExecutionError as exc:
                logger.warning("execution faulted at pc=0x%04X: %s", ctx.offset, exc)
                ctx.halt(HaltReason.FAULT)
                return self._result(ctx, error=str(exc))

        logger.info("execution halted (%s) after %d steps", ctx.halt_reason, ctx.steps)
        return self._result(ctx)

    def step(self, ctx: ExecutionContext) -> None:
        """Execute the instruction at the cursor, halting ``ctx`` when appropriate."""
        if ctx.halted:
            return
        if self.config.max_steps is not None and ctx.steps >= self.config.max_steps:
            ctx.halt(HaltReason.STEP_LIMIT)
            return

        opcode = ctx.cursor.current_opcode()
        if opcode is None:
            ctx.halt(HaltReason.END_OF_CODE)
            return

        ctx.offset = ctx.cursor.pc
        ctx.cursor.advance()
        handler = self._handlers.get(opcode)

        if handler is None:
            if self.config.unknown_opcode == UnknownOpcodePolicy.FAULT:
                raise InvalidOpcode(opcode, ctx.offset)
            logger.debug("skipping unknown opcode 0x%02X at 0x%04X", opcode, ctx.offset)
            ctx.unknown_opcodes.append(ctx.offset)
        else:
            fee = self.config.fee_schedule.get(opcode, 0)
            if fee:
                ctx.gas.consume(fee)
            if len(ctx.stack) < handler.arity:
                raise StackUnderflow(handler.arity, len(ctx.stack))
            logger.debug("0x%04X %s stack=%d", ctx.offset, handler.name, len(ctx.stack))
            handler.fn(ctx)

        ctx.steps += 1
        if not ctx.halted and ctx.cursor.at_end:
            ctx.halt(HaltReason.END_OF_CODE)

    @staticmethod
    def _result(ctx: ExecutionContext, error: str | None = None) -> ExecutionResult:
        return ExecutionResult(
            stack=ctx.stack.snapshot(),
            success=error is None,
            halt_reason=ctx.halt_reason or HaltReason.END_OF_CODE,
            pc=ctx.offset if error is not None else ctx.cursor.pc,
            steps=ctx.steps,
            gas_used=ctx.gas.used,
            error=error,
            unknown_opcodes=tuple(ctx.unknown_opcodes),
        )


def execute(code: bytes, config: InterpreterConfig | None = None) -> ExecutionResult:
    """Run ``code`` on a new interpreter and return its result."""
    return Interpreter(config).run(code)

"""Sample script demonstrating programmatic usage."""
from evm_lite.bytecode.opcodes import STATIC_GAS, OpCode
from evm_lite.bytecode.parser import disassemble
from evm_lite.engine.config import InterpreterConfig
from evm_lite.engine.interpreter import Interpreter
from evm_lite.report.formatter import ResultFormatter


def demo_with_synthetic_bytecode():
    """Compute (7 - 10) * 2 with the static fee schedule enabled."""
    # PUSH1 2 -> PUSH1 10 -> PUSH1 7 -> SUB -> MUL -> STOP
    code = bytes([
        OpCode.PUSH1, 0x02,
        OpCode.PUSH1, 0x0A,
        OpCode.PUSH1, 0x07,
        OpCode.SUB,
        OpCode.MUL,
        OpCode.STOP,
    ])
    for ins in disassemble(code):
        print(f"0x{ins.offset:04X} {ins.name} {ins.operand.hex()}")

    result = Interpreter(InterpreterConfig(fee_schedule=STATIC_GAS)).run(code)
    print(ResultFormatter("synthetic").to_markdown(result))


if __name__ == "__main__":
    demo_with_synthetic_bytecode()

"""Tests for operand stack, gas meter and interpreter config."""
import pytest

from evm_lite.engine.alu import UINT256_MAX
from evm_lite.engine.config import InterpreterConfig, UnknownOpcodePolicy
from evm_lite.engine.state import GasMeter, OperandStack
from evm_lite.errors import OutOfGas, StackUnderflow


def test_stack_push_pop_is_lifo():
    stack = OperandStack()
    stack.push(1)
    stack.push(2)
    assert stack.peek() == 2
    assert stack.pop() == 2
    assert stack.pop() == 1
    assert len(stack) == 0


def test_stack_pop_n_returns_top_first():
    stack = OperandStack([10, 20, 30])
    assert stack.pop_n(2) == [30, 20]
    assert stack.snapshot() == (10,)
    assert stack.pop_n(0) == []


def test_stack_underflow_leaves_stack_intact():
    stack = OperandStack([7])
    with pytest.raises(StackUnderflow) as excinfo:
        stack.pop_n(2)
    assert excinfo.value.needed == 2
    assert excinfo.value.available == 1
    assert stack.snapshot() == (7,)


def test_stack_underflow_is_an_index_error():
    with pytest.raises(IndexError, match="stack underflow"):
        OperandStack().pop()
    with pytest.raises(StackUnderflow):
        OperandStack().peek()


@pytest.mark.parametrize("word", [-1, UINT256_MAX + 1])
def test_stack_rejects_out_of_range_words(word):
    with pytest.raises(ValueError):
        OperandStack().push(word)


def test_stack_snapshot_is_top_to_bottom():
    stack = OperandStack()
    for word in (1, 2, 3):
        stack.push(word)
    assert stack.snapshot() == (3, 2, 1)


def test_gas_meter_consume_and_refund():
    meter = GasMeter(limit=10)
    meter.consume(4)
    assert meter.used == 4
    assert meter.remaining == 6
    assert meter.would_exceed(7)
    assert not meter.would_exceed(6)
    meter.refund(10)
    assert meter.used == 0


def test_gas_meter_raises_when_exhausted():
    meter = GasMeter(limit=3)
    meter.consume(3)
    with pytest.raises(OutOfGas) as excinfo:
        meter.consume(1)
    assert excinfo.value.remaining == 0
    assert meter.used == 3


def test_config_defaults():
    config = InterpreterConfig()
    assert config.unknown_opcode is UnknownOpcodePolicy.IGNORE
    assert config.gas_limit == 100_000_000
    assert dict(config.fee_schedule) == {}
    assert config.max_steps is None


def test_config_coerces_policy_and_freezes_schedule():
    schedule = {0x01: 3}
    config = InterpreterConfig(unknown_opcode="fault", fee_schedule=schedule)
    assert config.unknown_opcode is UnknownOpcodePolicy.FAULT
    schedule[0x02] = 5
    assert 0x02 not in config.fee_schedule
    with pytest.raises(TypeError):
        config.fee_schedule[0x01] = 9


@pytest.mark.parametrize(
    "kwargs",
    [{"gas_limit": -1}, {"max_steps": 0}, {"unknown_opcode": "explode"}],
)
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        InterpreterConfig(**kwargs)


@pytest.mark.parametrize("method", ["consume", "refund"])
def test_gas_meter_rejects_negative_amounts(method):
    meter = GasMeter(limit=10, used=4)
    with pytest.raises(ValueError, match="negative gas amount"):
        getattr(meter, method)(-5)
    assert meter.used == 4
    assert meter.remaining == 6


def test_config_rejects_negative_fees():
    with pytest.raises(ValueError, match="negative costs"):
        InterpreterConfig(fee_schedule={0x01: -3})

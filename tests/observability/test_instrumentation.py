#!filepath: tests/observability/test_instrumentation.py

import pytest

from console_timer.config import TimerConfig
from console_timer.observability.instrumentation import Instrumentation, NoOpInstrumentation
from console_timer.observability.timer import TimerRegistry


@pytest.fixture
def inst(clock):
    return Instrumentation(emit=False, registry=TimerRegistry(clock=clock))


def test_instrumentation_timer(inst, clock):
    with inst.timer("step_A"):
        clock.advance_ms(4)

    assert inst.last["step_A"] == pytest.approx(4.0)
    assert "step_A" not in inst.registry


def test_instrumentation_sample_inside_scope(inst, clock):
    with inst.timer("load"):
        clock.advance_ms(2)
        mid = inst.sample("load")
        clock.advance_ms(3)

    assert mid == pytest.approx(2.0)
    assert inst.last["load"] == pytest.approx(5.0)


def test_instrumentation_timer_stops_on_error(inst, clock):
    with pytest.raises(RuntimeError):
        with inst.timer("boom"):
            clock.advance_ms(1)
            raise RuntimeError("fail")

    assert "boom" not in inst.registry
    assert inst.last["boom"] == pytest.approx(1.0)


def test_instrumentation_timed_decorator(inst, clock):
    @inst.timed()
    def work(x):
        clock.advance_ms(6)
        return x * 2

    assert work(21) == 42
    assert inst.last[work.__qualname__] == pytest.approx(6.0)

    @inst.timed("custom")
    def other():
        return "ok"

    other()
    assert "custom" in inst.last


def test_instrumentation_emit(clock, capsys):
    inst = Instrumentation(registry=TimerRegistry(clock=clock))

    with inst.timer("phase_X"):
        clock.advance_ms(1.5)

    assert capsys.readouterr().err == "phase_X: 1.50ms\n"

    with inst.timer("quiet", emit=False):
        pass
    assert capsys.readouterr().err == ""


def test_instrumentation_disabled(clock):
    inst = Instrumentation(enabled=False, registry=TimerRegistry(clock=clock))

    with inst.timer("step"):
        assert inst.sample("step") == 0.0

    assert inst.last == {}
    assert len(inst.registry) == 0


def test_from_config():
    inst = Instrumentation.from_config(TimerConfig(enabled=False, emit=False))

    assert inst.enabled is False
    assert inst.emit is False
    assert isinstance(inst.registry, TimerRegistry)


def test_noop_instrumentation():
    inst = NoOpInstrumentation()

    with inst.timer("x"):
        pass

    @inst.timed()
    def f():
        return 1

    assert f() == 1
    assert inst.sample("x") == 0.0
    assert inst.last == {}


def test_recursive_timed_function(inst, clock):
    @inst.timed("fact")
    def fact(n):
        clock.advance_ms(1)
        return 1 if n <= 1 else n * fact(n - 1)

    assert fact(3) == 6
    # 只有最外层调用计时
    assert inst.last["fact"] == pytest.approx(3.0)
    assert "fact" not in inst.registry

    assert fact(2) == 2
    assert inst.last["fact"] == pytest.approx(2.0)


def test_nested_same_name_scopes(inst, clock):
    with inst.timer("step"):
        clock.advance_ms(1)
        with inst.timer("step"):
            clock.advance_ms(2)
        assert "step" in inst.registry
        clock.advance_ms(3)

    assert inst.last["step"] == pytest.approx(6.0)
    assert "step" not in inst.registry


def test_body_error_not_replaced_when_timer_gone(inst):
    with pytest.raises(ValueError):
        with inst.timer("a"):
            inst.registry.clear()
            raise ValueError("body failed")

    assert "a" not in inst.last


def test_sample_message_passthrough(clock, capsys):
    inst = Instrumentation(registry=TimerRegistry(clock=clock))

    with inst.timer("job", emit=False):
        clock.advance_ms(2)
        inst.sample("job", message="half way")

    assert capsys.readouterr().err == "job: 2.00ms - half way\n"

from __future__ import annotations

import pytest

from pymapsync._gate import LoadGate, run_when_ready


def test_operations_queued_until_load_then_run_in_order(surface) -> None:
    gate = LoadGate(surface)
    calls: list[int] = []

    for i in range(3):
        gate.run_when_ready(lambda i=i: calls.append(i))

    assert calls == []
    assert gate.pending == 3

    surface.fire("load")

    assert calls == [0, 1, 2]
    assert gate.is_ready
    assert gate.pending == 0


def test_runs_synchronously_after_load(surface) -> None:
    gate = LoadGate(surface)
    surface.fire("load")
    calls: list[str] = []

    run_when_ready(gate, lambda: calls.append("now"))

    assert calls == ["now"]
    assert gate.pending == 0


def test_second_load_event_does_not_rerun(surface) -> None:
    gate = LoadGate(surface)
    calls: list[str] = []
    gate.run_when_ready(lambda: calls.append("once"))

    surface.fire("load")
    surface.fire("load")

    assert calls == ["once"]


def test_same_operation_registered_twice_runs_twice(surface) -> None:
    gate = LoadGate(surface)
    calls: list[str] = []

    def op() -> None:
        calls.append("x")

    gate.run_when_ready(op)
    gate.run_when_ready(op)
    surface.fire("load")

    assert calls == ["x", "x"]


def test_gate_subscribes_to_load_once(surface) -> None:
    gate = LoadGate(surface)
    for _ in range(5):
        gate.run_when_ready(lambda: None)

    assert [event for event, _, _ in surface.handlers] == ["load"]


def test_operation_registered_while_draining_runs_after_current_queue(surface) -> None:
    gate = LoadGate(surface)
    calls: list[str] = []

    def first() -> None:
        calls.append("first")
        gate.run_when_ready(lambda: calls.append("nested"))

    gate.run_when_ready(first)
    gate.run_when_ready(lambda: calls.append("second"))
    surface.fire("load")

    assert calls == ["first", "second", "nested"]


def test_surface_already_loaded_runs_immediately(fakes) -> None:
    surface = fakes.Surface(loaded=True)
    gate = LoadGate(surface)
    calls: list[str] = []

    gate.run_when_ready(lambda: calls.append("now"))

    assert calls == ["now"]
    assert gate.is_ready


def test_failing_operation_does_not_drop_later_ones(surface) -> None:
    gate = LoadGate(surface)
    calls: list[str] = []

    def boom() -> None:
        raise RuntimeError("boom")

    gate.run_when_ready(boom)
    gate.run_when_ready(lambda: calls.append("after"))

    with pytest.raises(RuntimeError, match="boom"):
        surface.fire("load")

    assert calls == ["after"]
    assert gate.is_ready


def test_operation_runs_when_load_seen_late_and_queue_fails(fakes) -> None:
    surface = fakes.Surface()
    gate = LoadGate(surface)
    calls: list[str] = []

    def boom() -> None:
        raise RuntimeError("boom")

    gate.run_when_ready(boom)
    gate.run_when_ready(lambda: calls.append("queued"))
    # Engine finished loading but the event has not been dispatched yet.
    surface._loaded = True

    with pytest.raises(RuntimeError, match="boom"):
        gate.run_when_ready(lambda: calls.append("late"))

    assert calls == ["queued", "late"]
    assert gate.is_ready
    assert gate.pending == 0

    surface.fire("load")
    assert calls == ["queued", "late"]

import pytest

from sjf_cli.errors import DuplicateProcessError, EmptyInputError, InvalidArrivalTimeError, InvalidBurstTimeError
from sjf_cli.models import Process
from sjf_cli.process_table import ProcessTable


def test_add_assigns_ids_and_default_names():
    table = ProcessTable()
    p1 = table.add(5)
    p2 = table.add("3", "1", name="  ")
    p3 = table.add(1, 2, name="Compile")

    assert [p.pid for p in table] == ["1", "2", "3"]
    assert (p1.name, p2.name, p3.name) == ("P1", "P2", "Compile")
    assert (p2.arrival_time, p2.burst_time) == (1, 3)


def test_blank_arrival_defaults_to_zero():
    table = ProcessTable()
    assert table.add(4, "").arrival_time == 0
    assert table.add(4, None).arrival_time == 0


@pytest.mark.parametrize("burst", [None, "", "0", 0, -1, "abc", "2.5"])
def test_invalid_burst_rejected_and_table_unchanged(burst):
    table = ProcessTable()
    with pytest.raises(InvalidBurstTimeError):
        table.add(burst)
    assert len(table) == 0
    # Rejected submissions do not consume a default name.
    assert table.add(2).name == "P1"


@pytest.mark.parametrize("arrival", ["-1", -4, "soon"])
def test_invalid_arrival_rejected(arrival):
    with pytest.raises(InvalidArrivalTimeError):
        ProcessTable().add(3, arrival)


def test_remove_never_reuses_ids():
    table = ProcessTable()
    first = table.add(1)
    table.add(2)
    table.remove(first.pid)
    third = table.add(3)

    assert first.pid not in table
    assert third.pid == "3"
    assert [p.pid for p in table] == ["2", "3"]


def test_remove_unknown_id():
    with pytest.raises(KeyError):
        ProcessTable().remove("42")


def test_clear_resets_default_names():
    table = ProcessTable()
    table.add(1)
    table.add(2)
    table.clear()

    assert len(table) == 0
    p = table.add(3)
    assert p.name == "P1"
    assert p.pid == "3"


def test_add_process_rejects_duplicate_id():
    table = ProcessTable()
    table.add_process(Process(pid="x", name="X", arrival_time=0, burst_time=1))
    with pytest.raises(DuplicateProcessError):
        table.add_process(Process(pid="x", name="Y", arrival_time=0, burst_time=2))


def test_generated_ids_skip_existing():
    table = ProcessTable()
    table.add_process(Process(pid="1", name="Imported", arrival_time=0, burst_time=1))
    assert table.add(2).pid == "2"


def test_schedule_empty_table():
    with pytest.raises(EmptyInputError):
        ProcessTable().schedule()


def test_schedule_uses_insertion_order_for_metrics():
    table = ProcessTable()
    table.add(5, 0, name="A")
    table.add(3, 1, name="B")
    table.add(1, 2, name="C")

    res = table.schedule()
    assert [s.name for s in res.timeline] == ["A", "C", "B"]
    assert [s.name for s in res.processes] == ["A", "B", "C"]

from rich.console import Console
from rich.panel import Panel

from sjf_cli.algorithms import schedule_sjf
from sjf_cli.gantt import PALETTE, ColorMap, build_rich_gantt, render_gantt
from sjf_cli.models import Process


def _proc(name, arrival_time, burst_time):
    return Process(pid=name, name=name, arrival_time=arrival_time, burst_time=burst_time)


def test_render_gantt_widths_follow_burst():
    res = schedule_sjf([_proc("A", 0, 5), _proc("B", 1, 3), _proc("C", 2, 1)])
    lines = render_gantt(res.timeline, scale=2).splitlines()

    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "A BT:5    C B BT:3"
    assert lines[2] == "=" * 18
    assert lines[3].split() == ["0", "5", "6", "9"]
    assert lines[3].index("5") == 10
    assert lines[3].index("9") == 18


def test_render_gantt_marks_scale_one():
    res = schedule_sjf([_proc("A", 0, 5), _proc("B", 1, 3), _proc("C", 2, 1)])
    marks = render_gantt(res.timeline).splitlines()[3]
    # The 6 mark would touch the 5 mark, so it is dropped rather than shifted.
    assert marks.split() == ["0", "5", "9"]
    assert marks.index("5") == 5
    assert marks.index("9") == 9


def test_render_gantt_idle_gap():
    res = schedule_sjf([_proc("A", 10, 2)])
    lines = render_gantt(res.timeline).splitlines()
    assert lines[1] == " " * 10 + "A"
    assert lines[2] == "." * 10 + "=="
    assert lines[3].split() == ["0", "10", "12"]


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_color_map_is_keyed_by_id():
    colors = ColorMap()
    assert colors.color_for("7") == PALETTE[0]
    assert colors.color_for("3") == PALETTE[1]
    assert colors.color_for("7") == PALETTE[0]


def test_color_map_cycles():
    colors = ColorMap(["red", "blue"])
    assert [colors.color_for(str(i)) for i in range(3)] == ["red", "blue", "red"]


def test_build_rich_gantt_renders():
    res = schedule_sjf([_proc("A", 1, 2), _proc("B", 1, 1)])
    panel, marks = build_rich_gantt(res.timeline, scale=1)
    assert isinstance(panel, Panel)
    assert marks.split() == ["0", "2", "4"]

    console = Console(width=60, record=True)
    console.print(panel)
    text = console.export_text()
    assert "Gantt Chart" in text
    assert "B" in text and "A" in text


def test_build_rich_gantt_empty():
    panel, marks = build_rich_gantt([])
    assert isinstance(panel, Panel)
    assert marks == ""


def test_render_gantt_marks_do_not_drift():
    res = schedule_sjf([_proc("A", 0, 10), _proc("B", 10, 1), _proc("C", 11, 1)])
    marks = render_gantt(res.timeline).splitlines()[3]
    assert marks.split() == ["0", "10", "12"]
    assert marks.index("10") == 10

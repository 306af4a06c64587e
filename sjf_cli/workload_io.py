from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from .errors import WorkloadFormatError
from .models import Process
from .process_table import ProcessTable, parse_arrival_time, parse_burst_time

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> ProcessTable:
    """
    Load a workload from a JSON or CSV file into a ProcessTable.

    Each entry needs a ``burst_time``; ``arrival_time`` (default 0), ``name``
    and ``pid`` are optional.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        entries = _load_json(path)
    elif suffix == ".csv":
        entries = _load_csv(path)
    else:
        raise WorkloadFormatError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    table = ProcessTable()
    table.reserve(
        pid
        for pid in (_blank_to_none(e.get("pid")) for e in entries if isinstance(e, Mapping))
        if pid is not None
    )
    for entry in entries:
        _add_entry(table, entry)

    logger.info("loaded %d processes from %s", len(table), path)
    return table


def _load_json(path: Path) -> list:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise WorkloadFormatError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadFormatError("JSON workload must be a list of process objects")

    return raw


def _load_csv(path: Path) -> list:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        try:
            fieldnames = reader.fieldnames
            rows = list(reader)
        except (csv.Error, UnicodeDecodeError) as exc:
            raise WorkloadFormatError(f"Invalid CSV in {path}: {exc}") from exc

    if fieldnames is None or "burst_time" not in fieldnames:
        raise WorkloadFormatError("CSV workload needs a header row with a burst_time column")
    return rows


def _add_entry(table: ProcessTable, entry: Any) -> Process:
    if not isinstance(entry, Mapping) or "burst_time" not in entry:
        raise WorkloadFormatError(f"Invalid process entry: {entry!r}")

    name = _blank_to_none(entry.get("name"))
    pid = _blank_to_none(entry.get("pid"))

    if pid is None:
        return table.add(entry["burst_time"], entry.get("arrival_time"), name=name)

    label = name or f"P{len(table) + 1}"
    process = Process(
        pid=pid,
        name=label,
        arrival_time=parse_arrival_time(entry.get("arrival_time"), label),
        burst_time=parse_burst_time(entry["burst_time"], label),
    )
    return table.add_process(process)


def _blank_to_none(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def save_workload(processes: Iterable[Process], path: str | Path) -> None:
    """Write processes to a JSON workload file that load_workload can read back."""
    path = Path(path)
    data = [
        {"pid": p.pid, "name": p.name, "arrival_time": p.arrival_time, "burst_time": p.burst_time}
        for p in processes
    ]
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    logger.info("saved %d processes to %s", len(data), path)

"""YAML configuration and workload loading."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml  # pip install pyyaml

from staticsched.models import Task, Workload

DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "render": True,
    "verify": True,
    "workloads": [],
}


def default_config_path() -> Path:
    """Path of the sample configuration bundled with the package."""
    return Path(__file__).with_name("workloads.yaml")


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load a YAML configuration, filling in defaults for missing keys."""
    if path is None:
        path = default_config_path()
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: top level must be a mapping")

    config = dict(DEFAULTS)
    config.update(raw)
    return config


def _int_field(spec: Dict[str, Any], key: str, where: str, default: Any = None) -> Any:
    value = spec.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where}: {key} must be an integer, got {value!r}")
    return value


def task_from_dict(spec: Dict[str, Any], where: str = "task") -> Task:
    """Build a Task from a mapping with name, period, duration[, delay, deadline]."""
    if not isinstance(spec, dict):
        raise ValueError(f"{where}: expected a mapping, got {spec!r}")
    for key in ("name", "period", "duration"):
        if key not in spec:
            raise ValueError(f"{where}: missing required key '{key}'")

    return Task(
        name=str(spec["name"]),
        period=_int_field(spec, "period", where),
        duration=_int_field(spec, "duration", where),
        delay=_int_field(spec, "delay", where, default=0),
        deadline=_int_field(spec, "deadline", where),
    )


def load_workloads(config: Dict[str, Any]) -> List[Workload]:
    """Build Workload objects from the ``workloads`` section of a config."""
    workloads = []
    for i, entry in enumerate(config.get("workloads") or []):
        if not isinstance(entry, dict):
            raise ValueError(f"workloads[{i}]: expected a mapping, got {entry!r}")
        name = str(entry.get("name", f"Workload {i + 1}"))
        workload = Workload(name)
        for j, spec in enumerate(entry.get("tasks") or []):
            workload.add(task_from_dict(spec, where=f"{name}, tasks[{j}]"))
        workloads.append(workload)
    return workloads

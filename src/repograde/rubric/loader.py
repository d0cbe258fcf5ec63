"""Load and validate the rubric weight configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import ValidationError

from repograde.constants import NATIVE_MAXIMA, REQUIRED_TASKS
from repograde.resilience.errors import ConfigError
from repograde.rubric.schemas import Rubric, RubricWeight

logger = logging.getLogger(__name__)


def load_rubric(path: Path) -> Rubric:
    """Load ``path`` (JSON or YAML) into a :class:`Rubric`.

    Raises :class:`ConfigError` if the file is missing, is not valid
    structured data, or lacks one of the required tasks.
    """
    if not path.is_file():
        msg = f"Rubric not found: {path}"
        raise ConfigError(msg)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Rubric unreadable: {path}: {exc}"
        raise ConfigError(msg) from exc

    # JSON is a YAML subset, so one parser serves both formats
    try:
        raw: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        msg = f"Rubric is not valid structured data: {path}"
        raise ConfigError(msg) from exc

    rubric = parse_rubric(raw, source=str(path))
    logger.info(
        "event=rubric_loaded path=%s tasks=%d total_weight=%g",
        path,
        len(rubric.weights),
        rubric.total_weight,
    )
    return rubric


def parse_rubric(raw: Any, *, source: str = "<rubric>") -> Rubric:
    """Validate already-decoded rubric data."""
    if not isinstance(raw, dict):
        msg = f"Rubric {source} must be a mapping with a 'tasks' key"
        raise ConfigError(msg)

    tasks_raw = cast(dict[str, Any], raw).get("tasks")
    if not isinstance(tasks_raw, dict):
        msg = f"Rubric {source} has no 'tasks' mapping"
        raise ConfigError(msg)
    tasks = cast(dict[str, Any], tasks_raw)

    missing = [name for name in REQUIRED_TASKS if name not in tasks]
    if missing:
        msg = (
            f"Rubric {source} is missing required task(s): "
            f"{', '.join(missing)}"
        )
        raise ConfigError(msg)

    weights: list[RubricWeight] = []
    for name, entry in tasks.items():
        weights.append(_parse_entry(str(name), entry, source))

    return Rubric(weights=tuple(weights))


def _parse_entry(name: str, entry: Any, source: str) -> RubricWeight:
    """Build one :class:`RubricWeight`, filling ``max`` from native scales."""
    if not isinstance(entry, dict):
        msg = f"Rubric {source} task '{name}' must be a mapping"
        raise ConfigError(msg)
    item = cast(dict[str, Any], entry)

    weight = item.get("weight")
    # bool is an int subclass; "weight: true" is a typo, not a number
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        msg = f"Rubric {source} task '{name}' needs a numeric 'weight'"
        raise ConfigError(msg)

    native_max = item.get("max", NATIVE_MAXIMA.get(name, 1))
    if name in NATIVE_MAXIMA and native_max != NATIVE_MAXIMA[name]:
        msg = (
            f"Rubric {source} task '{name}' has a fixed native scale "
            f"of {NATIVE_MAXIMA[name]:g}; 'max' cannot change it"
        )
        raise ConfigError(msg)
    try:
        return RubricWeight(
            name=name,
            weight=weight,
            max=native_max,
            description=str(item.get("description", "")),
        )
    except ValidationError as exc:
        msg = f"Rubric {source} task '{name}' is invalid: {exc}"
        raise ConfigError(msg) from exc

"""
Loads schedule, leave and appointment snapshots exported from the document store.

A snapshot file is JSON or YAML with three optional top-level arrays:
``schedules``, ``leaveRequests`` and ``appointments``, each holding documents
in the shape the web application stores them.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, TypeVar

import yaml

from ..domain.exceptions import SalonSlotsError, SnapshotError
from ..domain.models import Appointment, LeaveRequest, ScheduleEntry
from ..services.booking import AvailabilitySnapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _SnapshotYamlLoader(yaml.SafeLoader):
    """SafeLoader that reads unquoted HH:MM values as strings, not base-60 integers."""


_SnapshotYamlLoader.yaml_implicit_resolvers = {
    key: list(resolvers)
    for key, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
for _digit in "0123456789":
    _SnapshotYamlLoader.yaml_implicit_resolvers.setdefault(_digit, []).insert(
        0, ("tag:yaml.org,2002:str", re.compile(r"^\d{1,2}:\d{2}$"))
    )


class SnapshotLoader:
    """
    Reads an ``AvailabilitySnapshot`` from a file on disk.

    Used by the CLI and by tests in place of live document-store reads.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> AvailabilitySnapshot:
        """
        Parse the snapshot file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            SnapshotError: If the content is not a valid snapshot
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Snapshot file not found: {self.path}")

        data = self._read()
        return snapshot_from_dict(data, source=str(self.path))

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                if self.path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.load(f, Loader=_SnapshotYamlLoader)
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
            raise SnapshotError(f"Could not parse snapshot {self.path}: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SnapshotError("Snapshot file must contain a mapping at the root level.")
        return data


def snapshot_from_dict(data: Mapping[str, Any], source: str = "<memory>") -> AvailabilitySnapshot:
    """Build a snapshot from already-decoded documents."""
    snapshot = AvailabilitySnapshot(
        schedules=_parse_items(data, "schedules", ScheduleEntry.from_dict, source),
        leave_requests=_parse_items(data, "leaveRequests", LeaveRequest.from_dict, source),
        appointments=_parse_items(data, "appointments", Appointment.from_dict, source),
    )

    logger.debug(
        "Loaded snapshot from %s: %d schedules, %d leave requests, %d appointments",
        source,
        len(snapshot.schedules),
        len(snapshot.leave_requests),
        len(snapshot.appointments),
    )
    return snapshot


def _parse_items(
    data: Mapping[str, Any],
    key: str,
    factory: Callable[[Mapping[str, Any]], T],
    source: str,
) -> List[T]:
    raw = data.get(key) or []
    if not isinstance(raw, list):
        raise SnapshotError(f"'{key}' in {source} must be a list")

    items: List[T] = []
    for position, item in enumerate(raw):
        if not isinstance(item, dict):
            raise SnapshotError(f"{key}[{position}] in {source} must be a mapping")
        try:
            items.append(factory(item))
        except KeyError as exc:
            raise SnapshotError(
                f"{key}[{position}] in {source} is missing field {exc}"
            ) from exc
        except (SalonSlotsError, ValueError, TypeError) as exc:
            raise SnapshotError(f"{key}[{position}] in {source} is invalid: {exc}") from exc

    return items

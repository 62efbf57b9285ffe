"""Version diff reporting for reconciled universes.

Classifies each common package name as SAME or DIFFERENT, renders the
line-oriented console report and exports it as JSON or CSV.
"""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from constants import OutputFormats
from errors import ExportError
from universe.models import Universe, format_path

logger = logging.getLogger(__name__)


class Status(Enum):
    SAME = "SAME"
    DIFFERENT = "DIFFERENT"


@dataclass(frozen=True)
class VersionRecord:
    """Comparison outcome for one package name."""
    name: str
    status: Status
    version_a: str
    version_b: str
    path_a: str = ""
    path_b: str = ""


@dataclass
class DiffReport:
    all_same: bool = True
    records: List[VersionRecord] = field(default_factory=list)

    @property
    def different(self) -> List[VersionRecord]:
        return [r for r in self.records if r.status is Status.DIFFERENT]


def compare(universe_a: Universe, universe_b: Universe, names: Iterable[str]) -> DiffReport:
    """Compare the versions bound to names in both universes, by ascending name.

    Every name must be present in both universes.
    """
    report = DiffReport()
    for name in sorted(names):
        entry_a = universe_a[name]
        entry_b = universe_b[name]
        if entry_a.version == entry_b.version:
            report.records.append(
                VersionRecord(name, Status.SAME, entry_a.version, entry_b.version)
            )
        else:
            report.records.append(
                VersionRecord(
                    name,
                    Status.DIFFERENT,
                    entry_a.version,
                    entry_b.version,
                    path_a=format_path(entry_a.path),
                    path_b=format_path(entry_b.path),
                )
            )
            report.all_same = False
    return report


def render(report: DiffReport) -> List[str]:
    """Console lines for the report, including the final verdict."""
    lines: List[str] = []
    for record in report.records:
        if record.status is Status.SAME:
            lines.append(f"SAME {record.name} {record.version_a}")
        else:
            lines.append(f"DIFFERENT {record.name} {record.version_a} vs. {record.version_b}")
            lines.append(f"  path A: {record.path_a}")
            lines.append(f"  path B: {record.path_b}")
    if report.all_same:
        lines.append("All packages have the same versions")
    else:
        lines.append("Some packages have different versions")
    return lines


def export_json(report: DiffReport, path: str) -> None:
    """Exports the report to a JSON file.

    Args:
        report (DiffReport): Comparison outcome.
        path (str): File path to export the JSON.
    """
    data = {
        "allSame": report.all_same,
        "packages": [
            {
                "name": r.name,
                "status": r.status.value,
                "versionA": r.version_a,
                "versionB": r.version_b,
                "pathA": r.path_a or None,
                "pathB": r.path_b or None,
            }
            for r in report.records
        ],
    }
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logger.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logger.error("JSON file couldn't be written to disk: %s", e)
        raise ExportError(f"could not write {path}: {e}") from e


def export_csv(report: DiffReport, path: str) -> None:
    """Exports the report to a CSV file.

    Args:
        report (DiffReport): Comparison outcome.
        path (str): File path to export the CSV.
    """
    rows = [["name", "status", "version_a", "version_b", "path_a", "path_b"]]
    for r in report.records:
        rows.append([r.name, r.status.value, r.version_a, r.version_b, r.path_a, r.path_b])
    try:
        with open(path, "w", newline="", encoding="utf-8") as file:
            csv.writer(file).writerows(rows)
        logger.info("CSV file has been successfully exported at: %s", path)
    except (OSError, csv.Error) as e:
        logger.error("CSV file couldn't be written to disk: %s", e)
        raise ExportError(f"could not write {path}: {e}") from e


def resolve_format(path: str, fmt: Optional[str] = None) -> str:
    """Pick the export format: explicit fmt, then the file extension, then JSON."""
    if fmt:
        return fmt.lower()
    if path.lower().endswith(".csv"):
        return OutputFormats.CSV.value
    return OutputFormats.JSON.value


def export(report: DiffReport, path: str, fmt: Optional[str] = None) -> Tuple[str, str]:
    """Write report to path in the resolved format; returns (format, path)."""
    resolved = resolve_format(path, fmt)
    if resolved == OutputFormats.CSV.value:
        export_csv(report, path)
    else:
        export_json(report, path)
    return resolved, path

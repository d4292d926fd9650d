"""Serialise acuity evaluations to JSON and CSV."""
from __future__ import annotations

import csv
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Iterable, List, Optional, Sequence

from ..core.engine import Evaluation
from ..core.levels import Level
from ..schemas.export import AcuityRecord, ExportBatch, ExportSummary, LevelReportRow
from ..schemas.vitals import Vitals

__all__ = [
    "CSV_COLUMNS",
    "LEVEL_REPORT_COLUMNS",
    "batch_to_json",
    "build_record",
    "compute_summary",
    "level_report",
    "read_batch_json",
    "read_record_json",
    "record_to_csv_row",
    "record_to_json",
    "write_batch_file",
    "write_csv",
    "write_csv_file",
    "write_level_report_csv",
]

CSV_COLUMNS = (
    "hr",
    "rr",
    "sbp",
    "dbp",
    "temp",
    "spo2",
    "gcs",
    "resource_count",
    "acuity",
    "level",
    "level_label",
    "timestamp",
    "id",
)

LEVEL_REPORT_COLUMNS = ("level", "level_label", "count", "pct", "mean_acuity", "min_acuity", "max_acuity")


def build_record(
    vitals: Vitals,
    resource_count: int,
    evaluation: Evaluation,
    *,
    timestamp: Optional[datetime] = None,
    record_id: Optional[str] = None,
) -> AcuityRecord:
    return AcuityRecord(
        **vitals.model_dump(),
        resource_count=resource_count,
        acuity=evaluation.acuity,
        level=int(evaluation.level),
        level_label=evaluation.level.label,
        timestamp=timestamp,
        id=record_id,
    )


def record_to_json(record: AcuityRecord) -> str:
    """Encode one record as a JSON object; unset timestamp and id are omitted."""

    return json.dumps(record.model_dump(mode="json", exclude_none=True), ensure_ascii=False)


def read_record_json(payload: str) -> AcuityRecord:
    return AcuityRecord.model_validate_json(payload)


def record_to_csv_row(record: AcuityRecord) -> List[str]:
    """Return the record's cells in :data:`CSV_COLUMNS` order."""

    return [
        str(record.hr),
        str(record.rr),
        str(record.sbp),
        str(record.dbp),
        repr(float(record.temp)),
        str(record.spo2),
        str(record.gcs),
        str(record.resource_count),
        repr(float(record.acuity)),
        str(record.level),
        record.level_label,
        record.timestamp.isoformat() if record.timestamp else "",
        record.id or "",
    ]


def write_csv(stream: IO[str], records: Iterable[AcuityRecord]) -> None:
    writer = csv.writer(stream)
    writer.writerow(CSV_COLUMNS)
    for record in records:
        writer.writerow(record_to_csv_row(record))


def batch_to_json(
    records: Sequence[AcuityRecord],
    *,
    source: Optional[str] = None,
    generated: Optional[datetime] = None,
) -> str:
    batch = ExportBatch(
        results=list(records),
        generated=generated or datetime.now(timezone.utc),
        source=source or None,
    )
    return json.dumps(batch.model_dump(mode="json", exclude_none=True), ensure_ascii=False, indent=2)


def read_batch_json(payload: str) -> ExportBatch:
    return ExportBatch.model_validate_json(payload)


def level_report(records: Iterable[AcuityRecord]) -> List[LevelReportRow]:
    """One row per level with count, percentage and acuity range."""

    by_level = {level: [] for level in Level}
    for record in records:
        level = Level.from_int(record.level)
        if level is not None:
            by_level[level].append(record.acuity)
    total = sum(len(scores) for scores in by_level.values())
    rows: List[LevelReportRow] = []
    for level, scores in by_level.items():
        rows.append(
            LevelReportRow(
                level=int(level),
                level_label=level.label,
                count=len(scores),
                pct=len(scores) / total * 100 if total else 0.0,
                mean_acuity=sum(scores) / len(scores) if scores else 0.0,
                min_acuity=min(scores) if scores else 0.0,
                max_acuity=max(scores) if scores else 0.0,
            )
        )
    return rows


def write_level_report_csv(stream: IO[str], records: Iterable[AcuityRecord]) -> None:
    writer = csv.writer(stream)
    writer.writerow(LEVEL_REPORT_COLUMNS)
    for row in level_report(records):
        writer.writerow(
            [
                str(row.level),
                row.level_label,
                str(row.count),
                f"{row.pct:.2f}",
                f"{row.mean_acuity:.4f}",
                f"{row.min_acuity:.4f}",
                f"{row.max_acuity:.4f}",
            ]
        )


def compute_summary(records: Sequence[AcuityRecord]) -> ExportSummary:
    if not records:
        return ExportSummary()
    scores = [record.acuity for record in records]
    dist = {int(level): 0 for level in Level}
    for record in records:
        if record.level in dist:
            dist[record.level] += 1
    return ExportSummary(
        n=len(records),
        mean_acuity=sum(scores) / len(scores),
        min_acuity=min(scores),
        max_acuity=max(scores),
        level_dist=dist,
    )


def write_batch_file(path: Path, records: Sequence[AcuityRecord], *, source: Optional[str] = None) -> Path:
    """Write a JSON batch document to *path*; the source defaults to ``ACUITY_EXPORT_SOURCE``."""

    if source is None:
        from ..config import get_settings

        source = get_settings().export_source
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(batch_to_json(records, source=source), encoding="utf-8")
    return path


def write_csv_file(path: Path, records: Iterable[AcuityRecord]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as fh:
        write_csv(fh, records)
    return path

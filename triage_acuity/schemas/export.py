"""Schemas defining the exported result contract."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .vitals import Vitals


class AcuityRecord(BaseModel):
    """One evaluation flattened for JSON or CSV export."""

    model_config = ConfigDict(extra="forbid")

    hr: int = 0
    rr: int = 0
    sbp: int = 0
    dbp: int = 0
    temp: float = 0.0
    spo2: int = 0
    gcs: int = 0
    resource_count: int = 0
    acuity: float = Field(ge=0, le=1)
    level: int = Field(ge=1, le=5)
    level_label: str
    timestamp: Optional[datetime] = None
    id: Optional[str] = None

    def to_vitals(self) -> Vitals:
        return Vitals(
            hr=self.hr,
            rr=self.rr,
            sbp=self.sbp,
            dbp=self.dbp,
            temp=self.temp,
            spo2=self.spo2,
            gcs=self.gcs,
        )


class ExportBatch(BaseModel):
    results: List[AcuityRecord]
    generated: datetime
    source: Optional[str] = None


class LevelReportRow(BaseModel):
    level: int
    level_label: str
    count: int
    pct: float
    mean_acuity: float
    min_acuity: float
    max_acuity: float


class ExportSummary(BaseModel):
    n: int = 0
    mean_acuity: float = 0.0
    min_acuity: float = 0.0
    max_acuity: float = 0.0
    level_dist: Dict[int, int] = Field(default_factory=dict)

"""Common schema utilities for triage acuity scoring."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base model forbidding unexpected fields and mutation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

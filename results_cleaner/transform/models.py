from __future__ import annotations

"""Domain models for a cleaning run."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResultsDocument(BaseModel):
    """Shape the input document has to satisfy; every other key is ignored."""

    model_config = ConfigDict(extra="ignore")

    results: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Records to project; null or absent means none"
    )


@dataclass(slots=True)
class CleanReport:
    input_path: Path
    output_path: Path
    records: int
    profiles_removed: int
    bytes_written: int

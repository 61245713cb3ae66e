from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

import pandas as pd

from job_analytics.config.settings import Settings


class Stage(str, Enum):
    """Pipeline stage a job application can occupy."""

    INTERESTED = "Interested"
    APPLIED = "Applied"
    PHONE_SCREEN = "Phone Screen"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


STAGE_ORDER = list(Stage)


@dataclass(frozen=True)
class JobRecord:
    id: object
    createdAt: datetime
    status: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    jobType: Optional[str] = None
    statusChangedAt: Optional[datetime] = None
    applicationDeadline: Optional[datetime] = None


@dataclass(frozen=True)
class ConversionMetrics:
    applied: int
    phone_screens: int
    interviews: int
    offers: int
    applied_to_phone: float
    phone_to_interview: float
    interview_to_offer: float
    applied_to_interview: float


@dataclass(frozen=True)
class GroupedAverage:
    key: str
    avg_days: float
    count: int


@dataclass(frozen=True)
class SuccessRate:
    key: str
    offers: int
    total: int
    rate: float


@dataclass(frozen=True)
class BenchmarkComparison:
    key: str
    user_rate: float
    benchmark_rate: float
    delta: float
    offers: int
    total: int


@dataclass(frozen=True)
class TimeSeriesPoint:
    label: str
    count: int


@dataclass(frozen=True)
class DeadlineStats:
    met: int
    missed: int
    adherence: float

    @property
    def total(self) -> int:
        return self.met + self.missed


FunnelCounts = Dict[Stage, int]


@dataclass
class Context:
    settings: Settings
    records: pd.DataFrame
    results: Dict[str, pd.DataFrame] = field(default_factory=dict)

    def add_result(self, name: str, df: pd.DataFrame) -> None:
        self.results[name] = df

    def get(self, name: str) -> pd.DataFrame:
        return self.results[name]

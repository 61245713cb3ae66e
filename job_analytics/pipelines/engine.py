from __future__ import annotations

import hashlib
import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Hashable, Mapping

import pandas as pd

from job_analytics.config.constants import RECORD_COLUMNS
from job_analytics.config.policy import DEFAULT_INSIGHT_POLICY, InsightPolicy
from job_analytics.features.funnel import compute_conversion_metrics, compute_funnel_counts, safe_ratio
from job_analytics.features.grouped import (
    compare_to_benchmarks,
    compute_grouped_average,
    compute_success_rates,
    rank_success_rates,
)
from job_analytics.features.insights import generate_insights
from job_analytics.features.outcomes import compute_deadline_adherence, compute_response_rate, compute_time_to_offer
from job_analytics.features.trends import (
    compute_avg_stage_durations,
    compute_monthly_applications,
    count_applications_this_week,
)
from job_analytics.io.loaders import Records, records_to_frame
from job_analytics.models.schema import (
    BenchmarkComparison,
    ConversionMetrics,
    DeadlineStats,
    GroupedAverage,
    Stage,
    SuccessRate,
    TimeSeriesPoint,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsBundle:
    total_records: int
    funnel: Mapping[Stage, int]
    conversion: ConversionMetrics
    response_rate: float
    response_by_company: tuple[GroupedAverage, ...]
    response_by_industry: tuple[GroupedAverage, ...]
    success_by_industry: tuple[SuccessRate, ...]
    benchmarks: tuple[BenchmarkComparison, ...]
    stage_durations: Mapping[Stage, float]
    trend: tuple[TimeSeriesPoint, ...]
    deadline: DeadlineStats
    time_to_offer_days: float
    weekly_goal: int
    this_week_count: int
    insights: tuple[str, ...]

    @property
    def offer_rate(self) -> float:
        return safe_ratio(self.funnel.get(Stage.OFFER, 0), self.total_records)


def compute_analytics(
    records: Records,
    weekly_goal: int = 5,
    period_count: int = 12,
    period: str = "month",
    group_limit: int = 10,
    now: datetime | pd.Timestamp | str | None = None,
    policy: InsightPolicy = DEFAULT_INSIGHT_POLICY,
    this_week_count: int | None = None,
) -> AnalyticsBundle:
    frame = records_to_frame(records)

    funnel = compute_funnel_counts(frame)
    conversion = compute_conversion_metrics(frame)
    response_rate = compute_response_rate(frame)
    industries = compute_success_rates(frame, "industry", ranked=False)
    success_by_industry = rank_success_rates(industries)
    deadline = compute_deadline_adherence(frame)
    time_to_offer_days = compute_time_to_offer(frame)
    if this_week_count is None:
        this_week_count = count_applications_this_week(frame, now=now)

    insights = generate_insights(
        funnel,
        conversion,
        response_rate,
        deadline,
        time_to_offer_days,
        weekly_goal,
        this_week_count,
        industries,
        policy=policy,
    )

    logger.debug(f"Computed analytics for {len(frame)} records ({len(insights)} insights)")
    return AnalyticsBundle(
        total_records=len(frame),
        funnel=MappingProxyType(funnel),
        conversion=conversion,
        response_rate=response_rate,
        response_by_company=tuple(compute_grouped_average(frame, "company", group_limit)),
        response_by_industry=tuple(compute_grouped_average(frame, "industry", group_limit)),
        success_by_industry=tuple(success_by_industry),
        benchmarks=tuple(compare_to_benchmarks(success_by_industry)),
        stage_durations=MappingProxyType(compute_avg_stage_durations(frame)),
        trend=tuple(compute_monthly_applications(frame, period_count=period_count, period=period, now=now)),
        deadline=deadline,
        time_to_offer_days=time_to_offer_days,
        weekly_goal=weekly_goal,
        this_week_count=this_week_count,
        insights=tuple(insights),
    )


def records_signature(frame: pd.DataFrame) -> str:
    """Content hash of the record columns, sensitive to row order."""
    hashed = pd.util.hash_pandas_object(frame[RECORD_COLUMNS], index=False)
    digest = hashlib.sha256("|".join(RECORD_COLUMNS).encode("utf-8"))
    digest.update(hashed.to_numpy().tobytes())
    return digest.hexdigest()


class AnalyticsCache:
    """
    Memoizes ``compute_analytics`` by record content and parameters.

    Entries are keyed by ``records_signature`` unless the caller passes its own
    ``version`` (for example a collection revision counter). A call with ``now=None``
    caches the trend window of its first computation until ``invalidate`` is called.
    """

    def __init__(self, maxsize: int = 32):
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[tuple[Hashable, ...], AnalyticsBundle] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(self, records: Records, version: Hashable | None = None, **params: Any) -> AnalyticsBundle:
        frame = records_to_frame(records)
        identity = version if version is not None else records_signature(frame)
        key = (identity, *sorted(params.items()))

        if key in self._entries:
            self.hits += 1
            self._entries.move_to_end(key)
            logger.debug(f"Analytics cache hit for {identity}")
            return self._entries[key]

        self.misses += 1
        bundle = compute_analytics(frame, **params)
        self._entries[key] = bundle
        if len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)
        return bundle

    def invalidate(self, version: Hashable | None = None) -> None:
        if version is None:
            self._entries.clear()
            return
        for key in [key for key in self._entries if key[0] == version]:
            del self._entries[key]

from __future__ import annotations

from typing import Iterable, Mapping

import numpy as np
import pandas as pd

from job_analytics.config.constants import GROUP_DIMENSIONS, INDUSTRY_BENCHMARKS, UNSPECIFIED_KEY
from job_analytics.features.status import stage_labels
from job_analytics.io.loaders import Records, records_to_frame, whole_days
from job_analytics.io.writers import safe_label
from job_analytics.models.schema import BenchmarkComparison, GroupedAverage, Stage, SuccessRate


def _group_label(value: object) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return UNSPECIFIED_KEY
    return safe_label(str(value), default=UNSPECIFIED_KEY)


def group_keys(frame: pd.DataFrame, dimension_key: str) -> pd.Series:
    if dimension_key not in GROUP_DIMENSIONS:
        raise ValueError(f"Invalid dimension. Must be one of: {', '.join(GROUP_DIMENSIONS)}")
    return frame[dimension_key].map(_group_label).astype(object)


def compute_grouped_average(records: Records, dimension_key: str = "company", limit: int = 10) -> list[GroupedAverage]:
    """
    Average response latency in whole days, truncated toward zero, per dimension value.

    Records without a status change are left out of the mean but still form their
    group. Groups are ranked by sample count, descending; equal counts keep the order
    in which each key first appears in the records. Negative or zero latencies from
    malformed timestamps are averaged as they are.
    """
    frame = records_to_frame(records)
    keys = group_keys(frame, dimension_key)
    if frame.empty or limit <= 0:
        return []

    work = pd.DataFrame({"key": keys, "days": whole_days(frame["createdAt"], frame["statusChangedAt"])})
    grouped = work.groupby("key", sort=False).agg(
        totalDays=("days", "sum"),
        sampleCount=("days", "count"),
    ).reset_index()
    grouped["avgDays"] = np.where(grouped["sampleCount"] > 0, grouped["totalDays"] / grouped["sampleCount"].replace(0, np.nan), 0.0)
    grouped = grouped.sort_values("sampleCount", ascending=False, kind="stable").head(limit)

    return [
        GroupedAverage(key=str(row.key), avg_days=float(row.avgDays), count=int(row.sampleCount))
        for row in grouped.itertuples(index=False)
    ]


def rank_success_rates(groups: Iterable[SuccessRate]) -> list[SuccessRate]:
    return sorted(groups, key=lambda group: group.rate, reverse=True)


def compute_success_rates(records: Records, dimension_key: str = "industry", ranked: bool = True) -> list[SuccessRate]:
    """Offer rate per dimension value, by descending rate or in first-seen order when ``ranked`` is false."""
    frame = records_to_frame(records)
    keys = group_keys(frame, dimension_key)
    if frame.empty:
        return []

    work = pd.DataFrame({"key": keys, "isOffer": stage_labels(frame["status"]) == Stage.OFFER.value})
    grouped = work.groupby("key", sort=False).agg(
        offers=("isOffer", "sum"),
        total=("isOffer", "size"),
    ).reset_index()
    grouped["rate"] = np.where(grouped["total"] > 0, grouped["offers"] / grouped["total"].replace(0, np.nan), 0.0)

    groups = [
        SuccessRate(key=str(row.key), offers=int(row.offers), total=int(row.total), rate=float(row.rate))
        for row in grouped.itertuples(index=False)
    ]
    return rank_success_rates(groups) if ranked else groups


def compare_to_benchmarks(
    success_rates: Iterable[SuccessRate],
    benchmarks: Mapping[str, Mapping[str, float]] = INDUSTRY_BENCHMARKS,
) -> list[BenchmarkComparison]:
    fallback = benchmarks[UNSPECIFIED_KEY]
    comparisons = []
    for item in success_rates:
        benchmark_rate = float(benchmarks.get(item.key, fallback)["offerRate"])
        comparisons.append(
            BenchmarkComparison(
                key=item.key,
                user_rate=item.rate,
                benchmark_rate=benchmark_rate,
                delta=item.rate - benchmark_rate,
                offers=item.offers,
                total=item.total,
            )
        )
    return sorted(comparisons, key=lambda c: c.delta, reverse=True)

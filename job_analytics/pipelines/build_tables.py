from __future__ import annotations

import logging
from dataclasses import asdict, fields

import pandas as pd

from job_analytics.io.writers import ensure_dirs, save_table
from job_analytics.models.schema import (
    BenchmarkComparison,
    Context,
    GroupedAverage,
    SuccessRate,
    TimeSeriesPoint,
)
from job_analytics.pipelines.engine import AnalyticsBundle

logger = logging.getLogger(__name__)


def _frame(items, item_type) -> pd.DataFrame:
    columns = [f.name for f in fields(item_type)]
    return pd.DataFrame([asdict(item) for item in items], columns=columns)


def bundle_tables(bundle: AnalyticsBundle) -> dict[str, pd.DataFrame]:
    funnel = pd.DataFrame(
        {"stage": [stage.value for stage in bundle.funnel], "count": list(bundle.funnel.values())}
    )
    conversion = pd.DataFrame([asdict(bundle.conversion)])
    stage_durations = pd.DataFrame(
        {
            "stage": [stage.value for stage in bundle.stage_durations],
            "avgDays": list(bundle.stage_durations.values()),
        }
    )
    summary = pd.DataFrame(
        [
            {"metric": "total_records", "value": bundle.total_records},
            {"metric": "response_rate", "value": bundle.response_rate},
            {"metric": "offer_rate", "value": bundle.offer_rate},
            {"metric": "time_to_offer_days", "value": bundle.time_to_offer_days},
            {"metric": "deadlines_met", "value": bundle.deadline.met},
            {"metric": "deadlines_missed", "value": bundle.deadline.missed},
            {"metric": "deadline_adherence", "value": bundle.deadline.adherence},
            {"metric": "weekly_goal", "value": bundle.weekly_goal},
            {"metric": "applications_this_week", "value": bundle.this_week_count},
        ]
    )

    return {
        "summary_metrics": summary,
        "funnel_counts": funnel,
        "conversion_metrics": conversion,
        "response_by_company": _frame(bundle.response_by_company, GroupedAverage),
        "response_by_industry": _frame(bundle.response_by_industry, GroupedAverage),
        "success_by_industry": _frame(bundle.success_by_industry, SuccessRate),
        "benchmark_comparison": _frame(bundle.benchmarks, BenchmarkComparison),
        "stage_durations": stage_durations,
        "applications_by_period": _frame(bundle.trend, TimeSeriesPoint),
        "insights": pd.DataFrame({"rank": range(1, len(bundle.insights) + 1), "insight": list(bundle.insights)}),
    }


def build_tables(ctx: Context, bundle: AnalyticsBundle) -> None:
    settings = ctx.settings
    ensure_dirs(settings.table_dir)

    for name, df in bundle_tables(bundle).items():
        save_table(df, settings.table_dir / f"{name}.csv")
        ctx.add_result(name, df)

    logger.info(f"Wrote {len(ctx.results)} tables to {settings.table_dir}")

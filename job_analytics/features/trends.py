from __future__ import annotations

from datetime import datetime

import pandas as pd

from job_analytics.config.constants import PERIOD_FREQUENCIES, PERIOD_LABEL_FORMATS
from job_analytics.features.status import stage_labels
from job_analytics.io.loaders import Records, elapsed_days, period_start, records_to_frame
from job_analytics.models.schema import STAGE_ORDER, Stage, TimeSeriesPoint


def resolve_now(now: datetime | pd.Timestamp | str | None = None) -> pd.Timestamp:
    """Return ``now`` as a naive UTC timestamp, defaulting to the current instant."""
    current = pd.Timestamp.now(tz="UTC") if now is None else pd.Timestamp(now)
    if current.tzinfo is not None:
        current = current.tz_convert(None)
    return current


def compute_monthly_applications(
    records: Records,
    period_count: int = 12,
    period: str = "month",
    now: datetime | pd.Timestamp | str | None = None,
) -> list[TimeSeriesPoint]:
    """
    Count records per period over the last ``period_count`` periods ending at ``now``.

    Every period in the window is present, oldest first, with zero for empty periods.
    Records created outside the window or after ``now`` are ignored, matching
    ``count_applications_this_week``.
    """
    if period not in PERIOD_FREQUENCIES:
        raise ValueError(f"Invalid period. Must be one of: {', '.join(PERIOD_FREQUENCIES)}")
    if period_count < 1:
        raise ValueError("period_count must be at least 1")

    freq = PERIOD_FREQUENCIES[period]
    label_format = PERIOD_LABEL_FORMATS[period]
    current = resolve_now(now)
    window = pd.period_range(end=current.to_period(freq), periods=period_count, freq=freq)

    frame = records_to_frame(records)
    created_at = frame["createdAt"]
    created = period_start(created_at[created_at <= current], freq)
    counts = created[created.isin(window)].value_counts().reindex(window, fill_value=0)

    return [
        TimeSeriesPoint(label=bucket.start_time.strftime(label_format), count=int(count))
        for bucket, count in counts.items()
    ]


def count_applications_this_week(records: Records, now: datetime | pd.Timestamp | str | None = None) -> int:
    """Records created between Sunday 00:00 of the current week and ``now``."""
    current = resolve_now(now)
    week_start = current.to_period(PERIOD_FREQUENCIES["week"]).start_time
    created = records_to_frame(records)["createdAt"]
    return int(((created >= week_start) & (created <= current)).sum())


def compute_avg_stage_durations(records: Records) -> dict[Stage, float]:
    """
    Mean days between ``createdAt`` and ``statusChangedAt`` for records currently in each stage.

    The last status change stands in for the moment the current stage was entered, so
    records that moved through several stages report their total time since creation.
    Stages without qualifying records report 0.0.
    """
    frame = records_to_frame(records)
    work = pd.DataFrame(
        {
            "stage": stage_labels(frame["status"]),
            "days": elapsed_days(frame["createdAt"], frame["statusChangedAt"]),
        }
    )
    means = work.dropna(subset=["days"]).groupby("stage", sort=False)["days"].mean()
    return {stage: float(means.get(stage.value, 0.0)) for stage in STAGE_ORDER}

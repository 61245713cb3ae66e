from __future__ import annotations

from job_analytics.features.funnel import safe_ratio
from job_analytics.features.status import stage_labels
from job_analytics.io.loaders import Records, elapsed_days, records_to_frame
from job_analytics.models.schema import DeadlineStats, Stage


def compute_deadline_adherence(records: Records) -> DeadlineStats:
    frame = records_to_frame(records)
    deadlines = frame["applicationDeadline"]
    has_deadline = deadlines.notna()

    # A missing createdAt compares False and lands in "missed".
    met = int((has_deadline & (frame["createdAt"] <= deadlines)).sum())
    missed = int(has_deadline.sum()) - met
    return DeadlineStats(met=met, missed=missed, adherence=safe_ratio(met, met + missed))


def compute_time_to_offer(records: Records) -> float:
    frame = records_to_frame(records)
    offers = frame[stage_labels(frame["status"]) == Stage.OFFER.value]
    days = elapsed_days(offers["createdAt"], offers["statusChangedAt"]).dropna()
    if days.empty:
        return 0.0
    return float(days.mean())


def compute_response_rate(records: Records) -> float:
    frame = records_to_frame(records)
    responded = int(frame["statusChangedAt"].notna().sum())
    return safe_ratio(responded, len(frame))

from __future__ import annotations

import logging

from job_analytics.config.constants import (
    APPLIED_STAGES,
    INTERVIEW_STAGES,
    OFFER_STAGES,
    PHONE_SCREEN_STAGES,
)
from job_analytics.features.status import stage_labels
from job_analytics.io.loaders import Records, records_to_frame
from job_analytics.models.schema import STAGE_ORDER, ConversionMetrics, FunnelCounts

logger = logging.getLogger(__name__)


def safe_ratio(numerator: float, denominator: float) -> float:
    return float(numerator) / float(denominator) if denominator else 0.0


def compute_funnel_counts(records: Records) -> FunnelCounts:
    frame = records_to_frame(records)
    counts = stage_labels(frame["status"]).value_counts()
    funnel = {stage: int(counts.get(stage.value, 0)) for stage in STAGE_ORDER}
    logger.debug(f"Funnel counts over {len(frame)} records: {funnel}")
    return funnel


def compute_conversion_metrics(records: Records) -> ConversionMetrics:
    frame = records_to_frame(records)
    labels = stage_labels(frame["status"])

    applied = int(labels.isin(APPLIED_STAGES).sum())
    phone_screens = int(labels.isin(PHONE_SCREEN_STAGES).sum())
    interviews = int(labels.isin(INTERVIEW_STAGES).sum())
    offers = int(labels.isin(OFFER_STAGES).sum())

    return ConversionMetrics(
        applied=applied,
        phone_screens=phone_screens,
        interviews=interviews,
        offers=offers,
        applied_to_phone=safe_ratio(phone_screens, applied),
        phone_to_interview=safe_ratio(interviews, phone_screens),
        interview_to_offer=safe_ratio(offers, interviews),
        applied_to_interview=safe_ratio(interviews, applied),
    )

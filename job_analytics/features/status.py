from __future__ import annotations

import pandas as pd

from job_analytics.config.constants import STATUS_LOOKUP
from job_analytics.models.schema import Stage


def normalize_status(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def classify_status(value: object) -> Stage:
    """Map a free-form status label to its pipeline stage; unmatched labels are UNKNOWN."""
    label = STATUS_LOOKUP.get(normalize_status(value))
    return Stage(label) if label else Stage.UNKNOWN


def classify_statuses(statuses: pd.Series) -> pd.Series:
    return statuses.map(classify_status).astype(object)


def stage_labels(statuses: pd.Series) -> pd.Series:
    return classify_statuses(statuses).map(lambda stage: stage.value).astype(object)

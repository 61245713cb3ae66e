from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Union

import numpy as np
import pandas as pd

from job_analytics.config.constants import DATE_COLUMNS, RECORD_COLUMNS, SOURCE_COLUMN_ALIASES
from job_analytics.exceptions import RecordLoadError
from job_analytics.models.schema import JobRecord

logger = logging.getLogger(__name__)

Records = Union[pd.DataFrame, Iterable[Union[JobRecord, Mapping[str, Any]]]]


def to_datetime(df: pd.DataFrame, cols: list[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            values = df[col]
            # Empty CSV columns arrive as float NaN.
            if not pd.api.types.is_datetime64_any_dtype(values):
                values = values.astype(object)
            parsed = pd.to_datetime(values, errors="coerce", utc=True, format="mixed")
            df[col] = parsed.dt.tz_convert(None)
    return df


def period_start(series: pd.Series, freq: str) -> pd.Series:
    return series.dt.to_period(freq)


def elapsed_days(start: pd.Series, end: pd.Series) -> pd.Series:
    return (end - start) / pd.Timedelta(days=1)


def whole_days(start: pd.Series, end: pd.Series) -> pd.Series:
    return np.trunc(elapsed_days(start, end))


def records_to_frame(records: Records) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        frame = records.copy()
    else:
        rows = [asdict(r) if is_dataclass(r) else dict(r) for r in records]
        frame = pd.DataFrame(rows)

    renames = {
        source: target
        for source, target in SOURCE_COLUMN_ALIASES.items()
        if source in frame.columns and target not in frame.columns
    }
    frame = frame.rename(columns=renames)
    for col in RECORD_COLUMNS:
        if col not in frame.columns:
            frame[col] = None

    frame = to_datetime(frame, DATE_COLUMNS)
    return frame.reset_index(drop=True)


def _read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".pkl":
        return pd.read_pickle(path)
    if suffix == ".csv":
        return pd.read_csv(path, dtype={"id": str})
    if suffix == ".json":
        return pd.read_json(path, orient="records", convert_dates=False, dtype=False)
    raise RecordLoadError(f"Unsupported record file type '{suffix}'", path)


def load_records(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise RecordLoadError("Job record file not found", path)
    try:
        raw = _read_frame(path)
    except RecordLoadError:
        raise
    except (ValueError, OSError, pd.errors.ParserError) as exc:
        raise RecordLoadError(f"Could not parse job records ({exc})", path) from exc

    frame = records_to_frame(raw)
    logger.info(f"Loaded {len(frame)} job records from {path}")
    return frame

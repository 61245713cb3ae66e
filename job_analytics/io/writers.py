from __future__ import annotations

from pathlib import Path
import pandas as pd


def ensure_dirs(*dirs: Path) -> None:
    for directory in dirs:
        directory.mkdir(parents=True, exist_ok=True)


def save_table(df: pd.DataFrame, path: Path) -> None:
    df.to_csv(path, index=False)


def fmt_pct(value: float | int | None) -> str:
    if value is None or pd.isna(value):
        return "n/a"
    return f"{value * 100:.1f}%"


def fmt_days(value: float | int | None) -> str:
    if value is None or pd.isna(value):
        return "n/a"
    return f"{value:.1f}"


def fmt_int(value: float | int | None) -> str:
    if value is None or pd.isna(value):
        return "n/a"
    return f"{int(value)}"


def safe_label(primary: object, fallback: object = None, default: str = "Unknown") -> str:
    def _clean(val: object) -> str | None:
        if not isinstance(val, str):
            return None
        # Normalize NBSP and its mis-decoded "\u00c2" prefix from spreadsheet exports.
        val = val.replace("\u00c2", "").replace("\u00a0", " ").strip()
        val = " ".join(val.split())
        if not val or val.lower() in {"nan", "none"}:
            return None
        return val

    primary_clean = _clean(primary)
    if primary_clean:
        return primary_clean
    fallback_clean = _clean(fallback)
    if fallback_clean:
        return fallback_clean
    return default

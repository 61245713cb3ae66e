from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os


def _load_env(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip().lstrip("\ufeff")
        value = value.strip().strip("\"").strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    base_dir: Path
    data_dir: Path
    output_dir: Path
    table_dir: Path
    records_path: Path
    export_path: Path
    weekly_goal: int
    trend_periods: int
    trend_period: str
    group_limit: int
    max_insights: int
    log_level: str


def get_settings(base_dir: Path | None = None) -> Settings:
    base_dir = base_dir or Path.cwd()
    _load_env(base_dir / ".env")
    data_dir = base_dir / "db"
    output_dir = Path(os.getenv("OUTPUT_DIR", str(base_dir / "output")))
    table_dir = output_dir / "tables"

    return Settings(
        base_dir=base_dir,
        data_dir=data_dir,
        output_dir=output_dir,
        table_dir=table_dir,
        records_path=Path(os.getenv("JOB_RECORDS_PATH", str(data_dir / "jobs.csv"))),
        export_path=output_dir / "jobs_analytics.csv",
        weekly_goal=_env_int("WEEKLY_GOAL", 5),
        trend_periods=_env_int("TREND_PERIODS", 12),
        trend_period=os.getenv("TREND_PERIOD", "month").strip().lower(),
        group_limit=_env_int("GROUP_LIMIT", 10),
        max_insights=_env_int("MAX_INSIGHTS", 5),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

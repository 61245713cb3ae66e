from __future__ import annotations

import logging

from job_analytics.config.policy import DEFAULT_INSIGHT_POLICY
from job_analytics.config.settings import get_settings
from job_analytics.io.loaders import load_records
from job_analytics.models.schema import Context
from job_analytics.pipelines.build_tables import build_tables
from job_analytics.pipelines.engine import compute_analytics
from job_analytics.pipelines.export_csv import export_csv

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    records = load_records(settings.records_path)
    ctx = Context(settings=settings, records=records)
    policy = DEFAULT_INSIGHT_POLICY
    if settings.max_insights != policy.max_insights:
        policy = policy.with_overrides(max_insights=settings.max_insights)

    bundle = compute_analytics(
        records,
        weekly_goal=settings.weekly_goal,
        period_count=settings.trend_periods,
        period=settings.trend_period,
        group_limit=settings.group_limit,
        policy=policy,
    )

    build_tables(ctx, bundle)
    export_path = export_csv(bundle, settings.export_path)
    logger.info(f"Exported analytics summary to {export_path}")

    for insight in bundle.insights:
        logger.info(f"Insight: {insight}")

    print("Analytics pipeline completed.")


if __name__ == "__main__":
    main()

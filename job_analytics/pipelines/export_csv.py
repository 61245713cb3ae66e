"""Single-file CSV export of the analytics bundle: ``Metric,Value`` rows plus labeled sub-tables."""

from __future__ import annotations

import csv
import io
from pathlib import Path

from job_analytics.io.writers import ensure_dirs, fmt_days, fmt_int, fmt_pct
from job_analytics.pipelines.engine import AnalyticsBundle


def bundle_to_rows(bundle: AnalyticsBundle) -> list[list[str]]:
    conversion = bundle.conversion
    deadline = bundle.deadline

    rows = [
        ["Metric", "Value"],
        ["Total jobs", fmt_int(bundle.total_records)],
        ["Offers", fmt_int(conversion.offers)],
        ["Offer rate", fmt_pct(bundle.offer_rate)],
        ["Applied to interview rate", fmt_pct(conversion.applied_to_interview)],
        ["Response rate", fmt_pct(bundle.response_rate)],
        ["Average time to offer (days)", fmt_days(bundle.time_to_offer_days)],
        ["Deadline adherence", fmt_pct(deadline.adherence)],
        ["Deadlines met", fmt_int(deadline.met)],
        ["Deadlines missed", fmt_int(deadline.missed)],
        ["Weekly goal", fmt_int(bundle.weekly_goal)],
        ["Applications this week", fmt_int(bundle.this_week_count)],
        [],
        ["Funnel breakdown"],
    ]
    rows += [[stage.value, fmt_int(count)] for stage, count in bundle.funnel.items()]

    rows += [
        [],
        ["Conversion metrics"],
        ["Applied", fmt_int(conversion.applied)],
        ["Phone screens", fmt_int(conversion.phone_screens)],
        ["Interviews", fmt_int(conversion.interviews)],
        ["Applied to phone screen", fmt_pct(conversion.applied_to_phone)],
        ["Phone screen to interview", fmt_pct(conversion.phone_to_interview)],
        ["Interview to offer", fmt_pct(conversion.interview_to_offer)],
        [],
        ["Avg response by company (days)"],
    ]
    rows += [[r.key, fmt_days(r.avg_days), fmt_int(r.count)] for r in bundle.response_by_company]

    rows += [[], ["Avg response by industry (days)"]]
    rows += [[r.key, fmt_days(r.avg_days), fmt_int(r.count)] for r in bundle.response_by_industry]

    rows += [[], ["Success by industry"]]
    rows += [[r.key, fmt_pct(r.rate), fmt_int(r.offers), fmt_int(r.total)] for r in bundle.success_by_industry]

    rows += [[], ["Average days per stage"]]
    rows += [[stage.value, fmt_days(days)] for stage, days in bundle.stage_durations.items()]

    rows += [[], ["Applications by period"]]
    rows += [[point.label, fmt_int(point.count)] for point in bundle.trend]

    rows += [[], ["Insights"]]
    rows += [[insight] for insight in bundle.insights]
    return rows


def render_csv(bundle: AnalyticsBundle) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    writer.writerows(bundle_to_rows(bundle))
    return buffer.getvalue()


def export_csv(bundle: AnalyticsBundle, path: Path) -> Path:
    ensure_dirs(path.parent)
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(render_csv(bundle))
    return path

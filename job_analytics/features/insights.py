from __future__ import annotations

import logging
from typing import Any, Iterable

from job_analytics.config.policy import DEFAULT_INSIGHT_POLICY, InsightPolicy
from job_analytics.exceptions import PolicyError
from job_analytics.features.funnel import safe_ratio
from job_analytics.models.schema import ConversionMetrics, DeadlineStats, FunnelCounts, Stage, SuccessRate

logger = logging.getLogger(__name__)


def _top_group(groups: Iterable[SuccessRate]) -> tuple[str, int]:
    top_key, top_total = "", 0
    for group in groups:
        if group.total > top_total:
            top_key, top_total = group.key, group.total
    return top_key, top_total


def build_signals(
    funnel: FunnelCounts,
    conversion: ConversionMetrics,
    response_rate: float,
    deadline: DeadlineStats,
    time_to_offer_days: float,
    weekly_goal: int,
    this_week_count: int,
    success_by_industry: Iterable[SuccessRate] = (),
) -> dict[str, Any]:
    """
    Flatten the computed metrics into the named values insight rules are written against.

    ``success_by_industry`` is read in first-seen order, so the earliest industry wins a
    tie for ``top_industry``.
    """
    total = sum(funnel.values())
    shortfall = max(weekly_goal - this_week_count, 0)
    top_industry, top_industry_count = _top_group(success_by_industry)

    return {
        "total_records": total,
        "applied_count": conversion.applied,
        "phone_screen_count": conversion.phone_screens,
        "interview_count": conversion.interviews,
        "offer_count": funnel.get(Stage.OFFER, 0),
        "rejected_count": funnel.get(Stage.REJECTED, 0),
        "applied_to_phone": conversion.applied_to_phone,
        "phone_to_interview": conversion.phone_to_interview,
        "interview_to_offer": conversion.interview_to_offer,
        "applied_to_interview": conversion.applied_to_interview,
        "offer_rate": safe_ratio(funnel.get(Stage.OFFER, 0), total),
        "response_rate": response_rate,
        "deadline_adherence": deadline.adherence,
        "deadline_records": deadline.total,
        "deadlines_met": deadline.met,
        "deadlines_missed": deadline.missed,
        "time_to_offer_days": time_to_offer_days,
        "weekly_goal": weekly_goal,
        "this_week_count": this_week_count,
        "weekly_shortfall": shortfall,
        "weekly_shortfall_noun": "application" if shortfall == 1 else "applications",
        "top_industry": top_industry,
        "top_industry_count": top_industry_count,
        "top_industry_share": safe_ratio(top_industry_count, total),
    }


def generate_insights(
    funnel: FunnelCounts,
    conversion: ConversionMetrics,
    response_rate: float,
    deadline: DeadlineStats,
    time_to_offer_days: float,
    weekly_goal: int,
    this_week_count: int,
    success_by_industry: Iterable[SuccessRate] = (),
    policy: InsightPolicy = DEFAULT_INSIGHT_POLICY,
) -> list[str]:
    """
    Evaluate the policy rules in declared order and return their sentences.

    Every rule is checked independently. When more rules fire than
    ``policy.max_insights`` allows, the earliest-declared ones are kept. The policy
    fallback sentence is returned when no rule fires.
    """
    signals = build_signals(
        funnel,
        conversion,
        response_rate,
        deadline,
        time_to_offer_days,
        weekly_goal,
        this_week_count,
        success_by_industry,
    )
    unknown = {name for rule in policy.rules for name in rule.signals} - signals.keys()
    if unknown:
        raise PolicyError(f"Policy {policy.version} references unknown signals: {', '.join(sorted(unknown))}")

    fired = [rule for rule in policy.rules if rule.fires(signals)]
    logger.debug(f"Insight rules fired under policy {policy.version}: {[rule.name for rule in fired]}")

    insights = [rule.render(signals) for rule in fired]
    if not insights and policy.fallback:
        insights = [policy.fallback]
    return insights[: policy.max_insights]

"""
Insight rule policy.

Thresholds and wording for the job search recommendations live here as data so they
can be tuned or tested without touching the evaluation logic. Templates are
``str.format`` strings over the signal names built by
``job_analytics.features.insights.build_signals``.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Mapping

from job_analytics.exceptions import PolicyError

OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
}


@dataclass(frozen=True)
class Condition:
    signal: str
    op: str
    threshold: float

    def __post_init__(self) -> None:
        if self.op not in OPERATORS:
            raise PolicyError(f"Unsupported operator '{self.op}' for signal '{self.signal}'")

    def holds(self, signals: Mapping[str, Any]) -> bool:
        if self.signal not in signals:
            raise PolicyError(f"Unknown signal '{self.signal}'")
        return bool(OPERATORS[self.op](signals[self.signal], self.threshold))


@dataclass(frozen=True)
class InsightRule:
    name: str
    signal: str
    op: str
    threshold: float
    template: str
    guards: tuple[Condition, ...] = ()

    @property
    def condition(self) -> Condition:
        return Condition(self.signal, self.op, self.threshold)

    @property
    def signals(self) -> set[str]:
        return {self.signal, *(guard.signal for guard in self.guards)}

    def fires(self, signals: Mapping[str, Any]) -> bool:
        return self.condition.holds(signals) and all(guard.holds(signals) for guard in self.guards)

    def render(self, signals: Mapping[str, Any]) -> str:
        try:
            return self.template.format(**signals)
        except KeyError as exc:
            raise PolicyError(f"Rule '{self.name}' references unknown signal {exc}") from exc


@dataclass(frozen=True)
class InsightPolicy:
    version: str
    rules: tuple[InsightRule, ...]
    max_insights: int = 5
    fallback: str = "Your metrics look healthy. Keep monitoring trends and applying consistently."

    def rule(self, name: str) -> InsightRule:
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise PolicyError(f"Unknown insight rule '{name}'")

    def with_overrides(
        self,
        thresholds: Mapping[str, float] | None = None,
        templates: Mapping[str, str] | None = None,
        disabled: Iterable[str] = (),
        max_insights: int | None = None,
        version: str | None = None,
    ) -> "InsightPolicy":
        """Return a copy with rule thresholds, wording, or the cap replaced."""
        thresholds = dict(thresholds or {})
        templates = dict(templates or {})
        disabled = set(disabled)
        for name in [*thresholds, *templates, *disabled]:
            self.rule(name)

        rules = []
        for rule in self.rules:
            if rule.name in disabled:
                continue
            if rule.name in thresholds:
                rule = replace(rule, threshold=thresholds[rule.name])
            if rule.name in templates:
                rule = replace(rule, template=templates[rule.name])
            rules.append(rule)

        if max_insights is not None and max_insights < 0:
            raise PolicyError("max_insights cannot be negative")

        return replace(
            self,
            rules=tuple(rules),
            max_insights=self.max_insights if max_insights is None else max_insights,
            version=version or f"{self.version}+custom",
        )


DEFAULT_INSIGHT_POLICY = InsightPolicy(
    version="1",
    rules=(
        InsightRule(
            name="no_data",
            signal="total_records",
            op="==",
            threshold=0,
            template=(
                "No applications tracked yet. Add the roles you are pursuing to start "
                "building your job search funnel."
            ),
        ),
        InsightRule(
            name="low_interview_conversion",
            signal="applied_to_interview",
            op="<",
            threshold=0.15,
            guards=(Condition("applied_count", ">", 0),),
            template=(
                "Only {applied_to_interview:.1%} of your applications reach the interview stage. "
                "Review your resume and targeting so each application matches the role requirements more closely."
            ),
        ),
        InsightRule(
            name="low_response_rate",
            signal="response_rate",
            op="<",
            threshold=0.2,
            guards=(Condition("total_records", ">", 0),),
            template=(
                "Low response rate ({response_rate:.1%}). Broaden your search criteria to include "
                "related roles, industries, or locations."
            ),
        ),
        InsightRule(
            name="behind_weekly_goal",
            signal="weekly_shortfall",
            op=">",
            threshold=0,
            template=(
                "You're {weekly_shortfall} {weekly_shortfall_noun} behind your weekly goal of {weekly_goal}. "
                "Block focused time today to increase your application volume."
            ),
        ),
        InsightRule(
            name="missed_deadlines",
            signal="deadline_adherence",
            op="<",
            threshold=0.8,
            guards=(Condition("deadline_records", ">", 0),),
            template=(
                "You met {deadlines_met} of {deadline_records} application deadlines ({deadline_adherence:.1%}). "
                "Set calendar reminders 2-3 days before each deadline."
            ),
        ),
        InsightRule(
            name="low_offer_rate",
            signal="offer_rate",
            op="<",
            threshold=0.05,
            guards=(Condition("total_records", ">", 10),),
            template=(
                "Low offer rate ({offer_rate:.1%}). Tailor resumes closely to job requirements and apply to "
                "positions that match your experience level."
            ),
        ),
        InsightRule(
            name="phone_screen_stall",
            signal="phone_to_interview",
            op="<",
            threshold=0.5,
            guards=(Condition("phone_screen_count", ">", 5),),
            template=(
                "You're getting phone screens but only {phone_to_interview:.1%} advance to interviews. "
                "Research each company before the call and practice articulating your value proposition."
            ),
        ),
        InsightRule(
            name="interview_stall",
            signal="interview_to_offer",
            op="<",
            threshold=0.3,
            guards=(Condition("interview_count", ">", 3),),
            template=(
                "You're reaching interviews but only {interview_to_offer:.1%} convert to offers. "
                "Ask interviewers for feedback and practice technical and behavioral questions in more depth."
            ),
        ),
        InsightRule(
            name="slow_time_to_offer",
            signal="time_to_offer_days",
            op=">",
            threshold=30,
            guards=(Condition("offer_count", ">", 0),),
            template=(
                "Your average time to offer is {time_to_offer_days:.0f} days. Long hiring processes are normal, "
                "but consider prioritizing companies with faster decision cycles."
            ),
        ),
        InsightRule(
            name="industry_concentration",
            signal="top_industry_share",
            op=">",
            threshold=0.4,
            guards=(Condition("total_records", ">", 5),),
            template=(
                "You're focusing heavily on {top_industry} ({top_industry_count} applications). "
                "Consider diversifying into related industries to increase opportunities."
            ),
        ),
        InsightRule(
            name="strong_response_rate",
            signal="response_rate",
            op=">=",
            threshold=0.3,
            guards=(Condition("total_records", ">", 0),),
            template=(
                "Strong response rate ({response_rate:.1%}). Your applications are getting noticed, "
                "so shift more time to interview preparation."
            ),
        ),
        InsightRule(
            name="weekly_goal_met",
            signal="weekly_shortfall",
            op="==",
            threshold=0,
            guards=(Condition("weekly_goal", ">", 0),),
            template=(
                "You've met your weekly goal of {weekly_goal} applications. "
                "Consider raising it for next week."
            ),
        ),
        InsightRule(
            name="excellent_offer_rate",
            signal="offer_rate",
            op=">=",
            threshold=0.1,
            guards=(Condition("total_records", ">", 5),),
            template="Excellent offer rate ({offer_rate:.1%}). Keep applying the same tailoring approach.",
        ),
    ),
)

"""
Root pytest configuration and shared fixtures.

Record factories and the reference collections used across the unit tests.
"""

import pandas as pd
import pytest

NOW = pd.Timestamp("2026-10-16 12:00:00")


def make_record(
    record_id,
    status="Applied",
    created="2026-10-01",
    changed=None,
    deadline=None,
    company="Acme",
    industry="Software",
    job_type="Full-time",
):
    return {
        "id": record_id,
        "company": company,
        "industry": industry,
        "jobType": job_type,
        "createdAt": created,
        "status": status,
        "statusChangedAt": changed,
        "applicationDeadline": deadline,
    }


@pytest.fixture
def now():
    """Fixed reference instant (a Friday)."""
    return NOW


@pytest.fixture
def record_factory():
    """Factory for JobRecord-shaped dicts."""
    return make_record


@pytest.fixture
def scenario_a_records():
    """4 Applied, 2 Phone Screen, 2 Interview, 1 Offer, 1 unrecognized status."""
    statuses = ["Applied"] * 4 + ["Phone Screen"] * 2 + ["Interview"] * 2 + ["Offer", "Ghosted"]
    return [
        make_record(i, status=status, created="2026-09-01", changed="2026-09-11" if i % 2 else None)
        for i, status in enumerate(statuses)
    ]


@pytest.fixture
def scenario_a_frame(scenario_a_records):
    """Scenario A records as a DataFrame in the data layer's snake_case shape."""
    frame = pd.DataFrame(scenario_a_records)
    return frame.rename(
        columns={
            "company": "company_name",
            "jobType": "job_type",
            "createdAt": "created_at",
            "status": "job_status",
            "statusChangedAt": "status_changed_at",
            "applicationDeadline": "application_deadline",
        }
    )

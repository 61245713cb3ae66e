"""
Unit tests for record loading and normalization.
"""

import json

import pandas as pd
import pytest

from job_analytics.exceptions import RecordLoadError
from job_analytics.io.loaders import load_records, records_to_frame
from job_analytics.models.schema import JobRecord


class TestRecordsToFrame:
    """Test normalization of the supported input shapes."""

    def test_snake_case_columns_renamed(self):
        """Test data layer column names map onto record fields."""
        frame = records_to_frame(
            [{"id": 1, "company_name": "Acme", "job_status": "Applied", "created_at": "2026-10-01T10:00:00Z"}]
        )

        assert frame.loc[0, "company"] == "Acme"
        assert frame.loc[0, "status"] == "Applied"
        assert frame.loc[0, "createdAt"] == pd.Timestamp("2026-10-01 10:00")
        assert pd.isna(frame.loc[0, "statusChangedAt"])

    def test_offsets_converted_to_naive_utc(self):
        """Test aware timestamps become naive UTC."""
        frame = records_to_frame([{"id": 1, "createdAt": "2026-01-01T05:00:00+05:00"}])

        assert frame.loc[0, "createdAt"] == pd.Timestamp("2026-01-01 00:00")

    def test_unparseable_dates_are_missing(self):
        """Test garbage timestamps become NaT instead of raising."""
        frame = records_to_frame([{"id": 1, "createdAt": "2026-01-01", "statusChangedAt": "not a date"}])

        assert pd.isna(frame.loc[0, "statusChangedAt"])

    def test_dataclass_records(self):
        """Test JobRecord instances are accepted."""
        frame = records_to_frame([JobRecord(id="a", createdAt=pd.Timestamp("2026-01-01"), status="Offer")])

        assert frame.loc[0, "status"] == "Offer"
        assert pd.isna(frame.loc[0, "applicationDeadline"])

    def test_input_not_mutated(self):
        """Test the caller's frame keeps its original columns and values."""
        source = pd.DataFrame([{"id": 1, "created_at": "2026-01-01"}])

        records_to_frame(source)

        assert list(source.columns) == ["id", "created_at"]
        assert source.loc[0, "created_at"] == "2026-01-01"


class TestLoadRecords:
    """Test reading record dumps from disk."""

    def test_csv(self, tmp_path):
        """Test CSV dumps, including an all-empty date column."""
        path = tmp_path / "jobs.csv"
        path.write_text(
            "id,company_name,job_status,created_at,status_changed_at,application_deadline\n"
            "1,Acme,Applied,2026-10-01,2026-10-03,\n"
            "2,Globex,Offer,2026-09-01,,\n",
            encoding="utf-8",
        )

        frame = load_records(path)

        assert len(frame) == 2
        assert frame["applicationDeadline"].isna().all()
        assert frame.loc[0, "statusChangedAt"] == pd.Timestamp("2026-10-03")

    def test_json(self, tmp_path):
        """Test JSON record lists."""
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps([{"id": "x1", "status": "Interview", "createdAt": "2026-10-01"}]), encoding="utf-8")

        frame = load_records(path)

        assert frame.loc[0, "status"] == "Interview"

    def test_missing_file(self, tmp_path):
        """Test a missing dump raises a load error naming the path."""
        with pytest.raises(RecordLoadError, match="not found") as excinfo:
            load_records(tmp_path / "absent.csv")

        assert excinfo.value.path == tmp_path / "absent.csv"

    def test_unsupported_suffix(self, tmp_path):
        """Test unknown file types are rejected."""
        path = tmp_path / "jobs.xlsx"
        path.write_bytes(b"")

        with pytest.raises(RecordLoadError, match="Unsupported"):
            load_records(path)

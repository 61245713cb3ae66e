from __future__ import annotations

RECORD_COLUMNS = [
    "id",
    "company",
    "industry",
    "jobType",
    "createdAt",
    "status",
    "statusChangedAt",
    "applicationDeadline",
]
DATE_COLUMNS = ["createdAt", "statusChangedAt", "applicationDeadline"]

# Column names used by the job data layer.
SOURCE_COLUMN_ALIASES = {
    "company_name": "company",
    "job_type": "jobType",
    "created_at": "createdAt",
    "job_status": "status",
    "status_changed_at": "statusChangedAt",
    "application_deadline": "applicationDeadline",
}

GROUP_DIMENSIONS = ["company", "industry", "jobType"]
UNSPECIFIED_KEY = "Unspecified"

STATUS_LOOKUP = {
    "interested": "Interested",
    "wishlist": "Interested",
    "saved": "Interested",
    "applied": "Applied",
    "submitted": "Applied",
    "phone screen": "Phone Screen",
    "phone_screen": "Phone Screen",
    "phone-screen": "Phone Screen",
    "phonescreen": "Phone Screen",
    "screening": "Phone Screen",
    "interview": "Interview",
    "interviewing": "Interview",
    "offer": "Offer",
    "offered": "Offer",
    "rejected": "Rejected",
    "declined": "Rejected",
}

# Stages counted as having reached each step of the conversion funnel.
APPLIED_STAGES = ["Applied", "Phone Screen", "Interview", "Offer", "Rejected"]
PHONE_SCREEN_STAGES = ["Phone Screen", "Interview", "Offer"]
INTERVIEW_STAGES = ["Interview", "Offer"]
OFFER_STAGES = ["Offer"]

PERIOD_FREQUENCIES = {
    "month": "M",
    "week": "W-SAT",
    "day": "D",
}
PERIOD_LABEL_FORMATS = {
    "month": "%Y-%m",
    "week": "%Y-%m-%d",
    "day": "%Y-%m-%d",
}

INDUSTRY_BENCHMARKS = {
    "Software": {"avgResponseDays": 10, "offerRate": 0.08},
    "Finance": {"avgResponseDays": 12, "offerRate": 0.06},
    "Healthcare": {"avgResponseDays": 9, "offerRate": 0.07},
    "Education": {"avgResponseDays": 7, "offerRate": 0.05},
    UNSPECIFIED_KEY: {"avgResponseDays": 11, "offerRate": 0.06},
}

from __future__ import annotations

from job_analytics.main import main


if __name__ == "__main__":
    main()

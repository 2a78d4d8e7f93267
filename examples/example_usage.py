"""Example: call the analytics service directly (no Flask).

Controllers are a thin layer; every metric is available from the service.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.staff_analytics.staff_analytics.common.datetime_utils import DateRange
from src.staff_analytics.staff_analytics.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    service = container.analytics_service

    week = DateRange.of(date(2024, 3, 4), date(2024, 3, 8))
    for record in service.detect_late_arrivals("org-demo", week, threshold_minutes=5):
        print(record.staff_name, record.work_date, f"+{record.deviation_minutes} min")

    comparison = service.compare_branches("org-demo", week)
    for branch in comparison.branches:
        print(branch.branch_name, branch.normalized_hours, branch.peak_hour_formatted)

    print(service.export_flat_file("org-demo", week))


if __name__ == "__main__":
    main()

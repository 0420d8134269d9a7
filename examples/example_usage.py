"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the salary rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from hr_payroll.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    month = date.today().replace(day=1)
    report = container.payroll_report_service.fetch_report_data("demo-co", month)
    for row in report.employee_data:
        print(f"{row.employee_name:<20} {row.actual_working_days:>5} days  {row.calculated_salary:>12.2f}")
    print("total", round(report.stats.total_calculated_salary, 2))


if __name__ == "__main__":
    main()

"""Example: use the service layer and the view engine without Flask."""

import importlib
from datetime import date

from config import get_settings_module

from src.ravisabha_attendance.ravisabha_attendance.attendance.scope import Scope
from src.ravisabha_attendance.ravisabha_attendance.container import AppSettings, build_container
from src.ravisabha_attendance.ravisabha_attendance.export.csv_serializer import serialize_csv
from src.ravisabha_attendance.ravisabha_attendance.views.context import AttendanceContext


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=AppSettings.from_module(settings))

    context = AttendanceContext(container.attendance_service.fetch_records)
    context.set_scope(Scope.for_day(date.today()))
    context.view.set_filters(status="Present")

    page = context.view.result()
    print(f"page {page.page}/{max(page.total_pages, 1)}: {page.total_filtered} present, {page.gender.to_dict()}")
    print(serialize_csv(context.view.filtered_sorted()))


if __name__ == "__main__":
    main()

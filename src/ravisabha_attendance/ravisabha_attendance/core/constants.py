"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import SortDirection, SortKey

DEFAULT_PAGE_SIZE = 15
DEFAULT_SORT_KEY = SortKey.DATE_TIME
DEFAULT_SORT_DIRECTION = SortDirection.DESC
STATUS_FILTER_ALL = "All"

CSV_HEADERS = [
    "First Name",
    "Middle Name",
    "Last Name",
    "SMK No",
    "Mobile No",
    "Status",
    "Gender",
    "Date",
    "Time",
]
CSV_EXTENDED_HEADERS = [
    "First Name (Gujarati)",
    "Middle Name (Gujarati)",
    "Last Name (Gujarati)",
    "Age",
    "Village",
]
CSV_DEFAULT_FILENAME = "attendance_export.csv"

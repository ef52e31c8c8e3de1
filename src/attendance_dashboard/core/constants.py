"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Dhaka"
DEFAULT_ITEMS_PER_PAGE = 20
DEFAULT_API_TIMEOUT_SECONDS = 20

DEFAULT_ANNUAL_QUOTA = 15
DEFAULT_CASUAL_QUOTA = 10
DEFAULT_SICK_QUOTA = 14

HOURS_CHART_DAYS = 30
HOURS_CHART_MAX = 12
LONG_DAY_HOURS = 9

MINUTES_PER_DAY = 24 * 60

UNCONFIGURED_API_URL = "YOUR_APPS_SCRIPT_WEB_APP_URL_HERE"
AVATAR_URL_TEMPLATE = "https://ui-avatars.com/api/?name={name}&size=200&background=4f46e5&color=fff"

PREF_EMPLOYEE_ID = "currentEmployeeId"
PREF_FILTERS = "attendanceFilters"

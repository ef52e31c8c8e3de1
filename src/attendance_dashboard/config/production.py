import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_BASE_URL = os.getenv("API_BASE_URL", "YOUR_APPS_SCRIPT_WEB_APP_URL_HERE")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "20"))

TIMEZONE = os.getenv("TIMEZONE", "Asia/Dhaka")
ITEMS_PER_PAGE = int(os.getenv("ITEMS_PER_PAGE", "20"))

PREFERENCES_PATH = os.getenv("PREFERENCES_PATH", "/var/lib/attendance-dashboard/preferences.json")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

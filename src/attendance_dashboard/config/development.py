import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Google Apps Script web app exposing the attendance spreadsheet
API_BASE_URL = os.getenv("API_BASE_URL", "YOUR_APPS_SCRIPT_WEB_APP_URL_HERE")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "20"))

TIMEZONE = os.getenv("TIMEZONE", "Asia/Dhaka")
ITEMS_PER_PAGE = int(os.getenv("ITEMS_PER_PAGE", "20"))

PREFERENCES_PATH = os.getenv("PREFERENCES_PATH", ".attendance_preferences.json")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

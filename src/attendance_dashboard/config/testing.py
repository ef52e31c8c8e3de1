import os

SECRET_KEY = "test-secret"

API_BASE_URL = os.getenv("API_BASE_URL", "http://attendance-api.test/exec")
API_TIMEOUT_SECONDS = 5.0

TIMEZONE = "Asia/Dhaka"
ITEMS_PER_PAGE = 20

# Empty path keeps preferences in memory only
PREFERENCES_PATH = ""

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

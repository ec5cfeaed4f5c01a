import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

FIRESTORE_CONFIG = {
    "project_id": os.getenv("FIRESTORE_PROJECT_ID", ""),
    "credentials_file": os.getenv("GOOGLE_APPLICATION_CREDENTIALS", ""),
    "emulator_host": os.getenv("FIRESTORE_EMULATOR_HOST", ""),
}

DEFAULT_INSTITUTION = os.getenv("DEFAULT_INSTITUTION", "formal")
TIMEZONE = os.getenv("TIMEZONE", "Asia/Jakarta")

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "json")

AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

FIRESTORE_CONFIG = {
    "project_id": os.getenv("FIRESTORE_PROJECT_ID", "class-attendant-dev"),
    "credentials_file": os.getenv("GOOGLE_APPLICATION_CREDENTIALS", ""),
    # e.g. "localhost:8080" when running against the Firestore emulator
    "emulator_host": os.getenv("FIRESTORE_EMULATOR_HOST", "localhost:8080"),
}

DEFAULT_INSTITUTION = os.getenv("DEFAULT_INSTITUTION", "formal")
TIMEZONE = os.getenv("TIMEZONE", "Asia/Jakarta")

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")

# Seed demo classes/students/subjects on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

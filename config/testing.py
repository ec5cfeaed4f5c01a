import os

SECRET_KEY = "test-secret"

FIRESTORE_CONFIG = {
    "project_id": os.getenv("FIRESTORE_PROJECT_ID", "class-attendant-test"),
    "credentials_file": "",
    "emulator_host": os.getenv("FIRESTORE_EMULATOR_HOST", "localhost:8080"),
}

DEFAULT_INSTITUTION = "formal"
TIMEZONE = "Asia/Jakarta"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_FORMAT = "text"

AUTO_SEED_DB = False

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.class_attendance.class_attendance.common.logging import setup_logging
from src.class_attendance.class_attendance.database.connection import FirestoreConfig, FirestoreConnection
from src.class_attendance.class_attendance.database.seed import seed_demo_data


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo classes, students, subjects and attendance.")
    parser.add_argument("--force", action="store_true", help="write even if an institution already has classes")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))

    fs_config = FirestoreConfig(**settings.FIRESTORE_CONFIG)
    client = FirestoreConnection.get_instance(fs_config).client()
    written = seed_demo_data(client, force=args.force)

    logging.getLogger("seed").info(
        "Seeded Firestore project %s -> %s", fs_config.project_id, ", ".join(f"{k}={v}" for k, v in written.items())
    )


if __name__ == "__main__":
    main()

"""Development server entry point: `python -m src.class_attendance.class_attendance.main`."""
from __future__ import annotations

import os

from . import create_app


def main() -> None:
    app = create_app()
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), debug=app.config["DEBUG"])


if __name__ == "__main__":
    main()

# scripts/migrate_patients.py

import os
import sys

# Run from anywhere: put the project root on the import path
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, BASE_DIR)

from sqlalchemy import inspect  # noqa: E402

from core.config import configure_logging  # noqa: E402
from core.database import database  # noqa: E402
from core.exceptions import HealthHubError  # noqa: E402


def main():
    configure_logging()
    print(f"Database: {database.path}")
    try:
        engine = database.get_engine()
    except HealthHubError as e:
        print(f"Migration failed: {e.message}")
        return 1

    cols = [col["name"] for col in inspect(engine).get_columns("patients")]
    print("patients columns:", cols)
    print("Migration complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

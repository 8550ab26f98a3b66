import logging
import os
from dotenv import load_dotenv

load_dotenv()

# Path: project_root/data/healthhub.db
BASE_DIR = os.path.dirname(os.path.dirname(__file__))


class Config:
    """Application settings read from the environment (.env supported)."""

    DB_PATH = os.getenv("HEALTHHUB_DB_PATH") or os.path.join(BASE_DIR, "data", "healthhub.db")
    SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # How long the "patient registered" banner stays up
    SUCCESS_MESSAGE_SECONDS = float(os.getenv("SUCCESS_MESSAGE_SECONDS", "3"))


config = Config()


def configure_logging(level=None):
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s: %(message)s",
    )

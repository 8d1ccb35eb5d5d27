import os
from pathlib import Path

from dotenv import load_dotenv

APP_DIR = Path(__file__).resolve().parent

# Load .env next to this file (for SECRET_KEY, FORTUNES_DB_PATH, LOG_LEVEL)
load_dotenv(dotenv_path=APP_DIR / ".env")

# default: data/fortunes.db i prosjektroten
DB_PATH = Path(os.getenv("FORTUNES_DB_PATH") or APP_DIR.parent / "data" / "fortunes.db")
SECRET_KEY = os.getenv("SECRET_KEY", "dev-key")  # session cookie key (set a strong one in prod!)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("LOG_JSON", "true").lower() not in {"0", "false", "no"}

# config.py
import os
from dotenv import load_dotenv

load_dotenv()


def _optional_float(name):
    value = os.getenv(name)
    if not value:
        return None
    return float(value)


TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000/api")
# None = no timeout, requests waits for the server indefinitely
API_TIMEOUT = _optional_float("API_TIMEOUT")
NOTIFICATION_TTL = float(os.getenv("NOTIFICATION_TTL", "5"))
BOOKING_DAYS = int(os.getenv("BOOKING_DAYS", "14"))
DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "vi")
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

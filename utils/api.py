# utils/api.py
import logging

import requests
from asgiref.sync import sync_to_async

from config import API_BASE_URL, API_TIMEOUT
from utils.models import Service

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "API call failed"
INVALID_RESPONSE_MESSAGE = "Invalid response from server"


class ApiError(Exception):
    """Any failed call to the Hair Studio API: transport, non-2xx answer or malformed body."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_detail(result):
    """
    Text of the server's "detail" field.
    FastAPI validation errors come as a list of {"loc", "msg", ...}.
    """
    if not isinstance(result, dict):
        return None
    detail = result.get("detail")
    if not detail:
        return None
    if isinstance(detail, list):
        messages = [item.get("msg", str(item)) if isinstance(item, dict) else str(item) for item in detail]
        return "; ".join(messages)
    return str(detail)


class HairStudioAPI:
    def __init__(self, base_url=API_BASE_URL, timeout=API_TIMEOUT, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def api_call(self, endpoint, method="GET", data=None, params=None):
        url = f"{self.base_url}{endpoint}"
        try:
            # json=None -> no body, requests sets Content-Type only when there is one
            r = self.session.request(method, url, json=data, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("API Error: %s %s -> %s", method, url, e)
            raise ApiError(str(e) or DEFAULT_ERROR_MESSAGE) from e

        try:
            result = r.json()
        except ValueError as e:
            if r.ok:
                logger.error("API Error: %s %s -> invalid JSON (%s)", method, url, r.status_code)
                raise ApiError(f"{INVALID_RESPONSE_MESSAGE} ({r.status_code})", r.status_code) from e
            result = None

        if not r.ok:
            message = _error_detail(result) or DEFAULT_ERROR_MESSAGE
            logger.error("API Error: %s %s -> %s %s", method, url, r.status_code, message)
            raise ApiError(message, r.status_code)

        return result

    def get_services(self):
        return _expect(self.api_call("/services"), list, "/services")

    def get_service(self, service_id):
        endpoint = f"/services/{service_id}"
        return _expect(self.api_call(endpoint), dict, endpoint)

    def create_booking(self, booking_data):
        return _expect(self.api_call("/bookings", "POST", booking_data), dict, "/bookings")

    def send_contact(self, contact_data):
        return _expect(self.api_call("/contact", "POST", contact_data), dict, "/contact")

    def get_available_times(self, date):
        result = self.api_call("/available-times", params={"date": date})
        parse_available_times(result)
        return result


def _expect(result, kind, endpoint):
    """2xx body of the wrong JSON type is reported like any other API failure."""
    if not isinstance(result, kind):
        logger.error("API Error: %s -> expected %s, got %s", endpoint, kind.__name__, type(result).__name__)
        raise ApiError(INVALID_RESPONSE_MESSAGE)
    return result


def parse_service(data):
    """Service from an API record, ApiError if the record is malformed."""
    try:
        return Service.from_dict(data)
    except (KeyError, TypeError, ValueError, ArithmeticError) as e:
        # ArithmeticError covers decimal.InvalidOperation from a bad price
        logger.error("API Error: malformed service %r (%s)", data, e)
        raise ApiError(INVALID_RESPONSE_MESSAGE) from e


def parse_services(items):
    return [parse_service(item) for item in _expect(items, list, "/services")]


def parse_available_times(result):
    """{"available_times": [...]} -> list of time strings, ApiError for any other shape."""
    times = _expect(result, dict, "/available-times").get("available_times")
    return [str(t) for t in _expect(times, list, "/available-times")]


async def run_api(func, *args):
    """Awaits a blocking client call from a handler without stalling the bot loop."""
    return await sync_to_async(func, thread_sensitive=False)(*args)

# utils/forms.py
import logging
import re

from telegram.error import BadRequest

from handlers.alerts import show_alert
from utils.api import ApiError, run_api
from utils.localization import get_texts
from utils.models import missing_fields
from utils.session import clear_form, get_form, get_user_language, is_submitting, set_submitting

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s().-]{7,20}$")


def is_valid_email(value):
    return bool(value) and EMAIL_RE.match(value) is not None


def is_valid_phone(value):
    return bool(value) and PHONE_RE.match(value) is not None


async def submit_form(update, context, form_key, request_cls, send):
    """
    Sends the form collected under user_data[form_key].

    request_cls builds the request record from the form (BookingRequest / ContactRequest),
    send is the client method that posts it. On success the server's message is shown
    and the form is cleared; on failure the error is shown and the fields stay for a retry.
    Returns True only when the server accepted the form.
    """
    chat_id = update.effective_chat.id
    texts = get_texts(get_user_language(context))

    if is_submitting(context, form_key):
        logger.info("Submit of %s already in flight, ignoring", form_key)
        return False

    form = get_form(context, form_key)
    missing = missing_fields(form, request_cls.REQUIRED)
    if missing:
        await show_alert(context, chat_id, "error", texts["missing_fields"].format(fields=", ".join(missing)))
        return False

    try:
        request = request_cls.from_form(form)
    except (TypeError, ValueError) as e:
        logger.warning("Invalid %s: %s", form_key, e)
        await show_alert(context, chat_id, "error", texts["error_prefix"] + str(e))
        return False

    set_submitting(context, form_key, True)
    try:
        result = await run_api(send, request.to_payload())
    except ApiError as e:
        await show_alert(context, chat_id, "error", texts["error_prefix"] + e.message)
        return False
    finally:
        set_submitting(context, form_key, False)

    message = result.get("message") if isinstance(result, dict) else None
    await show_alert(context, chat_id, "success", message or texts["success_default"])
    clear_form(context, form_key)
    return True


async def drop_keyboard(query):
    """Removes the confirm/cancel buttons; the message may be too old to edit."""
    try:
        await query.edit_message_reply_markup(reply_markup=None)
    except BadRequest as e:
        logger.debug("Could not remove keyboard: %s", e)

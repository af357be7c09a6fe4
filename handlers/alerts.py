# handlers/alerts.py
import html
import logging

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import BadRequest
from telegram.ext import CallbackContext

from config import NOTIFICATION_TTL

logger = logging.getLogger(__name__)

ALERT_KEY = "alert_message_id"
ALERT_CLOSE = "alert_close"
ALERT_ICONS = {"success": "✓", "error": "⚠"}


def _job_name(chat_id):
    return f"alert:{chat_id}"

def _cancel_expiry(context: CallbackContext, chat_id):
    if context.job_queue is None:
        return
    for job in context.job_queue.get_jobs_by_name(_job_name(chat_id)):
        job.schedule_removal()

async def _delete_quietly(bot, chat_id, message_id):
    # Closed by the user and expired by the timer may race; the loser finds nothing to delete.
    try:
        await bot.delete_message(chat_id=chat_id, message_id=message_id)
    except BadRequest as e:
        logger.debug("Alert %s in chat %s already gone: %s", message_id, chat_id, e)

async def show_alert(context: CallbackContext, chat_id, kind, message):
    """
    Shows a notification banner in the chat.
    Any banner still visible there is removed first, so at most one exists per chat.
    The banner disappears after NOTIFICATION_TTL seconds or when "×" is pressed.
    """
    previous_id = context.chat_data.pop(ALERT_KEY, None)
    _cancel_expiry(context, chat_id)
    if previous_id is not None:
        await _delete_quietly(context.bot, chat_id, previous_id)

    icon = ALERT_ICONS.get(kind, "ℹ")
    markup = InlineKeyboardMarkup([[InlineKeyboardButton("×", callback_data=ALERT_CLOSE)]])
    sent = await context.bot.send_message(
        chat_id=chat_id,
        text=f"{icon} {html.escape(str(message))}",
        reply_markup=markup
    )
    context.chat_data[ALERT_KEY] = sent.message_id

    if context.job_queue is not None:
        context.job_queue.run_once(
            expire_alert,
            NOTIFICATION_TTL,
            chat_id=chat_id,
            data=sent.message_id,
            name=_job_name(chat_id)
        )
    else:
        logger.warning("No job queue, alert %s will not expire on its own", sent.message_id)
    return sent

async def expire_alert(context: CallbackContext):
    job = context.job
    if context.chat_data.get(ALERT_KEY) == job.data:
        context.chat_data.pop(ALERT_KEY, None)
    await _delete_quietly(context.bot, job.chat_id, job.data)

async def handle_alert_close(update: Update, context: CallbackContext):
    query = update.callback_query
    await query.answer()

    chat_id = update.effective_chat.id
    message_id = query.message.message_id
    if context.chat_data.get(ALERT_KEY) == message_id:
        context.chat_data.pop(ALERT_KEY, None)
        _cancel_expiry(context, chat_id)
    await _delete_quietly(context.bot, chat_id, message_id)

# handlers/datetime_handler.py
import html
import logging
from datetime import date, timedelta

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import CallbackContext

from config import BOOKING_DAYS
from handlers.alerts import show_alert
from states import BOOKING_DATE, BOOKING_TIME
from utils.api import ApiError, parse_available_times, run_api
from utils.formatting import format_day_label, parse_iso_date
from utils.localization import get_texts
from utils.session import (
    BOOKING_FORM,
    get_api,
    get_form,
    get_user_language,
    is_current_generation,
    next_generation,
)

logger = logging.getLogger(__name__)

AVAILABLE_TIMES = "available_times"


def build_grid(buttons, row_size=3):
    keyboard = []
    for i in range(0, len(buttons), row_size):
        keyboard.append(buttons[i:i+row_size])
    return keyboard

async def choose_day(update: Update, context: CallbackContext):
    """
    Shows the next BOOKING_DAYS days and a "change service" button.
    The day can also be typed as a message.
    """
    lang = get_user_language(context)
    texts = get_texts(lang)

    today = date.today()
    days = [today + timedelta(days=i) for i in range(BOOKING_DAYS)]
    buttons = [
        InlineKeyboardButton(format_day_label(d, lang), callback_data=f"day_{d.isoformat()}")
        for d in days
    ]

    kb = build_grid(buttons, row_size=3)
    kb.append([InlineKeyboardButton(texts["change_service"], callback_data="change_service")])
    await update.effective_message.reply_text(
        texts["choose_day"],
        reply_markup=InlineKeyboardMarkup(kb)
    )
    return BOOKING_DATE

async def handle_day_selection(update: Update, context: CallbackContext):
    query = update.callback_query
    data = query.data
    await query.answer()

    if data == "change_service":
        from handlers.services import load_services_into_select
        return await load_services_into_select(update, context)

    chosen = parse_iso_date(data.split("_", 1)[1])
    if chosen is None or chosen < date.today():
        texts = get_texts(get_user_language(context))
        await query.message.reply_text(texts["invalid_date"])
        return BOOKING_DATE

    return await set_booking_date(update, context, chosen)

async def handle_date_input(update: Update, context: CallbackContext):
    chosen = parse_iso_date(update.effective_message.text)
    if chosen is None or chosen < date.today():
        texts = get_texts(get_user_language(context))
        await update.effective_message.reply_text(texts["invalid_date"])
        return BOOKING_DATE

    return await set_booking_date(update, context, chosen)

async def set_booking_date(update: Update, context: CallbackContext, chosen: date):
    form = get_form(context, BOOKING_FORM)
    form["date"] = chosen.isoformat()
    # the time list is rebuilt for the new day, an old choice is no longer valid
    form.pop("time", None)
    return await load_available_times(update, context)

def build_time_keyboard(times, texts, row_size=3):
    """Placeholder row, one button per free slot, then "change day"."""
    kb = [[InlineKeyboardButton(texts["choose_time"], callback_data="time_placeholder")]]
    kb += build_grid(
        [InlineKeyboardButton(t, callback_data=f"time_{t}") for t in times],
        row_size=row_size
    )
    kb.append([InlineKeyboardButton(texts["change_day"], callback_data="change_day")])
    return kb

async def load_available_times(update: Update, context: CallbackContext):
    """
    Fetches free slots for the chosen day and replaces the time selector.

    Nothing happens without a chosen day. Every call bumps a per-user generation,
    a response that comes back after a newer request was started is dropped.
    """
    form = get_form(context, BOOKING_FORM)
    chosen_date = form.get("date")
    if not chosen_date:
        return None

    texts = get_texts(get_user_language(context))
    api = get_api(context)
    generation = next_generation(context, AVAILABLE_TIMES)
    try:
        times = parse_available_times(await run_api(api.get_available_times, chosen_date))
    except ApiError as e:
        if not is_current_generation(context, AVAILABLE_TIMES, generation):
            logger.info("Ignoring stale available times error for %s: %s", chosen_date, e)
            return None
        logger.error("Error loading available times for %s: %s", chosen_date, e)
        await show_alert(context, update.effective_chat.id, "error", texts["error_prefix"] + e.message)
        return BOOKING_DATE

    if not is_current_generation(context, AVAILABLE_TIMES, generation):
        logger.info("Ignoring stale available times for %s", chosen_date)
        return None

    context.user_data[AVAILABLE_TIMES] = times

    key = "times_for_day" if times else "no_times"
    await update.effective_message.reply_text(
        texts[key].format(date=html.escape(chosen_date)),
        reply_markup=InlineKeyboardMarkup(build_time_keyboard(times, texts))
    )
    return BOOKING_TIME

async def handle_time_selection(update: Update, context: CallbackContext):
    query = update.callback_query
    data = query.data
    texts = get_texts(get_user_language(context))

    if data == "time_placeholder":
        await query.answer(texts["choose_time"])
        return BOOKING_TIME

    await query.answer()

    if data == "change_day":
        return await choose_day(update, context)

    chosen_time = data.split("_", 1)[1]
    # a button from an older keyboard may point to a slot of another day
    if chosen_time not in context.user_data.get(AVAILABLE_TIMES, []):
        await query.message.reply_text(texts["choose_time"])
        return BOOKING_TIME

    form = get_form(context, BOOKING_FORM)
    form["time"] = chosen_time

    from handlers.booking_handler import ask_name
    return await ask_name(update, context)

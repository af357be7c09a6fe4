# handlers/services.py
import html
import logging

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import CallbackContext, ConversationHandler

from handlers.alerts import show_alert
from states import BOOKING_SERVICE
from utils.api import ApiError, parse_service, parse_services, run_api
from utils.formatting import format_price
from utils.localization import get_texts
from utils.models import Service
from utils.session import (
    BOOKING_FORM,
    forget_selected_service,
    get_api,
    get_form,
    get_user_language,
    peek_selected_service,
    remember_selected_service,
)

logger = logging.getLogger(__name__)


def render_service_card(service: Service, texts):
    """
    Text and "book" button of one service message.
    Name and description come from the API and are escaped, messages go out as HTML.
    """
    text = (
        f"✂ <b>{html.escape(service.name)}</b>\n"
        f"{html.escape(service.description)}\n\n"
        f"<b>{format_price(service.price)}</b>\n"
        f"{texts['duration'].format(minutes=service.duration)}"
    )
    markup = InlineKeyboardMarkup([
        [InlineKeyboardButton(texts["book_button"], callback_data=f"book_{service.id}")]
    ])
    return text, markup

async def display_services(message, services, texts):
    if not services:
        await message.reply_text(texts["no_services"])
        return
    for service in services:
        text, markup = render_service_card(service, texts)
        await message.reply_text(text, reply_markup=markup)

async def load_services(update: Update, context: CallbackContext):
    """/services and the "Services" menu button: one message per service."""
    texts = get_texts(get_user_language(context))
    api = get_api(context)
    try:
        services = parse_services(await run_api(api.get_services))
    except ApiError as e:
        logger.error("Error loading services: %s", e)
        await show_alert(context, update.effective_chat.id, "error", texts["error_prefix"] + e.message)
        return

    await display_services(update.effective_message, services, texts)

async def book_service(update: Update, context: CallbackContext):
    """"Book" under a service card: remember the service and open the booking form."""
    query = update.callback_query
    await query.answer()

    service_id = query.data.split("_", 1)[1]
    remember_selected_service(context, service_id)

    from handlers.booking_handler import start_booking
    return await start_booking(update, context)

def service_label(service: Service):
    return f"{service.name} - {format_price(service.price)}"

def build_services_keyboard(services, selected_id, texts):
    """
    One button per service, the selected one marked with ✅.
    "Continue" is only offered once something is selected.
    """
    keyboard = []
    for svc in services:
        prefix = "✅ " if str(svc.id) == selected_id else ""
        keyboard.append([InlineKeyboardButton(prefix + service_label(svc), callback_data=f"svc_{svc.id}")])
    if selected_id:
        keyboard.append([InlineKeyboardButton(texts["continue"], callback_data="services_continue")])
    return keyboard

async def load_services_into_select(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    api = get_api(context)
    try:
        services = parse_services(await run_api(api.get_services))
    except ApiError as e:
        logger.error("Error loading services: %s", e)
        await show_alert(context, update.effective_chat.id, "error", texts["error_prefix"] + e.message)
        return ConversationHandler.END

    if not services:
        await update.effective_message.reply_text(texts["no_services"])
        return ConversationHandler.END

    form = get_form(context, BOOKING_FORM)
    # Coming from a service card: preselect it, once
    selected_id = peek_selected_service(context)
    if selected_id is not None:
        chosen = next((svc for svc in services if str(svc.id) == selected_id), None)
        if chosen:
            form["service"] = str(chosen.id)
            form["service_label"] = service_label(chosen)
        forget_selected_service(context)

    kb = build_services_keyboard(services, form.get("service"), texts)
    await update.effective_message.reply_text(
        texts["choose_service"],
        reply_markup=InlineKeyboardMarkup(kb)
    )
    return BOOKING_SERVICE

async def handle_service_selection(update: Update, context: CallbackContext):
    query = update.callback_query
    data = query.data
    await query.answer()

    texts = get_texts(get_user_language(context))
    form = get_form(context, BOOKING_FORM)

    from handlers.datetime_handler import choose_day

    if data == "services_continue":
        if not form.get("service"):
            return BOOKING_SERVICE
        return await choose_day(update, context)

    service_id = data.split("_", 1)[1]
    api = get_api(context)
    try:
        service = parse_service(await run_api(api.get_service, service_id))
    except ApiError as e:
        logger.error("Error loading service %s: %s", service_id, e)
        await show_alert(context, update.effective_chat.id, "error", texts["error_prefix"] + e.message)
        return BOOKING_SERVICE

    form["service"] = str(service.id)
    form["service_label"] = service_label(service)
    await query.message.reply_text(
        texts["service_chosen"].format(service=html.escape(form["service_label"]))
    )
    return await choose_day(update, context)

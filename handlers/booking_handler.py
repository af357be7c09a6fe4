# handlers/booking_handler.py
import html
import logging

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, ReplyKeyboardRemove, Update
from telegram.ext import (
    CallbackContext,
    CallbackQueryHandler,
    CommandHandler,
    ConversationHandler,
    MessageHandler,
    filters,
)

from handlers.datetime_handler import (
    handle_date_input,
    handle_day_selection,
    handle_time_selection,
)
from handlers.options import FORM_TEXT
from handlers.phone import handle_phone
from handlers.services import book_service, handle_service_selection, load_services_into_select
from states import (
    BOOKING_CONFIRM,
    BOOKING_DATE,
    BOOKING_EMAIL,
    BOOKING_MESSAGE,
    BOOKING_NAME,
    BOOKING_PHONE,
    BOOKING_SERVICE,
    BOOKING_TIME,
)
from utils.forms import drop_keyboard, is_valid_email, submit_form
from utils.localization import get_texts, menu_labels
from utils.models import BookingRequest
from utils.session import (
    BOOKING_FORM,
    CONTACT_FORM,
    clear_form,
    get_api,
    get_form,
    get_user_language,
    is_submitting,
)

logger = logging.getLogger(__name__)


async def start_booking(update: Update, context: CallbackContext):
    """/book, the menu button or "book" on a service card: a fresh form."""
    clear_form(context, BOOKING_FORM)
    # one form at a time, a contact message in progress is dropped
    clear_form(context, CONTACT_FORM)
    return await load_services_into_select(update, context)

async def ask_name(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    await update.effective_message.reply_text(texts["ask_name"])
    return BOOKING_NAME

async def handle_name(update: Update, context: CallbackContext):
    name = update.effective_message.text.strip()
    if not name:
        return await ask_name(update, context)

    get_form(context, BOOKING_FORM)["name"] = name

    from handlers.phone import ask_phone
    return await ask_phone(update, context)

async def ask_email(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    await update.effective_message.reply_text(texts["ask_email"], reply_markup=ReplyKeyboardRemove())
    return BOOKING_EMAIL

async def handle_email(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    email = update.effective_message.text.strip()
    if not is_valid_email(email):
        await update.effective_message.reply_text(texts["invalid_email"])
        return BOOKING_EMAIL

    get_form(context, BOOKING_FORM)["email"] = email
    await update.effective_message.reply_text(texts["ask_message"])
    return BOOKING_MESSAGE

async def handle_message(update: Update, context: CallbackContext):
    get_form(context, BOOKING_FORM)["message"] = update.effective_message.text.strip()
    return await show_booking_summary(update, context)

async def skip_message(update: Update, context: CallbackContext):
    get_form(context, BOOKING_FORM)["message"] = ""
    return await show_booking_summary(update, context)

async def show_booking_summary(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    form = get_form(context, BOOKING_FORM)

    def field(name):
        return html.escape(form.get(name) or texts["empty"])

    text = texts["booking_summary"].format(
        service=field("service_label"),
        date=field("date"),
        time=field("time"),
        name=field("name"),
        phone=field("phone"),
        email=field("email"),
        message=field("message"),
    )
    kb = [[
        InlineKeyboardButton(texts["confirm"], callback_data="booking_confirm"),
        InlineKeyboardButton(texts["cancel"], callback_data="booking_cancel")
    ]]
    await update.effective_message.reply_text(text, reply_markup=InlineKeyboardMarkup(kb))
    return BOOKING_CONFIRM

async def confirm_booking(update: Update, context: CallbackContext):
    """
    Posts the booking. On failure the form stays as it is and the same
    "confirm" button can be pressed again.
    """
    query = update.callback_query
    texts = get_texts(get_user_language(context))

    if is_submitting(context, BOOKING_FORM):
        logger.info("Booking already being sent, ignoring repeated confirm")
        await query.answer(texts["submitting"])
        return None

    await query.answer()
    api = get_api(context)
    if await submit_form(update, context, BOOKING_FORM, BookingRequest, api.create_booking):
        await drop_keyboard(query)
        return ConversationHandler.END
    return BOOKING_CONFIRM

async def cancel_booking(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    if update.callback_query:
        await update.callback_query.answer()
        await drop_keyboard(update.callback_query)

    clear_form(context, BOOKING_FORM)
    await update.effective_message.reply_text(texts["cancelled"], reply_markup=ReplyKeyboardRemove())
    return ConversationHandler.END

def booking_entry_points():
    return [
        CommandHandler("book", start_booking),
        MessageHandler(filters.Text(menu_labels("menu_book")), start_booking),
        CallbackQueryHandler(book_service, pattern=r"^book_\d+$")
    ]

def booking_states():
    return {
        BOOKING_SERVICE: [
            CallbackQueryHandler(handle_service_selection, pattern=r"^(svc_\d+|services_continue)$")
        ],
        BOOKING_DATE: [
            CallbackQueryHandler(handle_day_selection, pattern=r"^(day_\d{4}-\d{2}-\d{2}|change_service)$"),
            MessageHandler(FORM_TEXT, handle_date_input)
        ],
        BOOKING_TIME: [
            CallbackQueryHandler(handle_time_selection, pattern=r"^(time_.+|change_day)$"),
            # a day tapped on the earlier keyboard reloads the times
            CallbackQueryHandler(handle_day_selection, pattern=r"^day_\d{4}-\d{2}-\d{2}$")
        ],
        BOOKING_NAME: [MessageHandler(FORM_TEXT, handle_name)],
        BOOKING_PHONE: [MessageHandler(filters.CONTACT | FORM_TEXT, handle_phone)],
        BOOKING_EMAIL: [MessageHandler(FORM_TEXT, handle_email)],
        BOOKING_MESSAGE: [
            CommandHandler("skip", skip_message),
            MessageHandler(FORM_TEXT, handle_message)
        ],
        BOOKING_CONFIRM: [
            CallbackQueryHandler(confirm_booking, pattern=r"^booking_confirm$"),
            CallbackQueryHandler(cancel_booking, pattern=r"^booking_cancel$")
        ]
    }

# handlers/contact.py
import html
import logging

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import (
    CallbackContext,
    CallbackQueryHandler,
    CommandHandler,
    ConversationHandler,
    MessageHandler,
    filters,
)

from handlers.options import FORM_TEXT
from states import CONTACT_CONFIRM, CONTACT_EMAIL, CONTACT_MESSAGE, CONTACT_NAME, CONTACT_SUBJECT
from utils.forms import drop_keyboard, is_valid_email, submit_form
from utils.localization import get_texts, menu_labels
from utils.models import ContactRequest
from utils.session import BOOKING_FORM, CONTACT_FORM, clear_form, get_api, get_form, get_user_language, is_submitting

logger = logging.getLogger(__name__)


async def start_contact(update: Update, context: CallbackContext):
    clear_form(context, CONTACT_FORM)
    clear_form(context, BOOKING_FORM)
    texts = get_texts(get_user_language(context))
    await update.effective_message.reply_text(texts["ask_name"])
    return CONTACT_NAME

async def handle_name(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    name = update.effective_message.text.strip()
    if not name:
        await update.effective_message.reply_text(texts["ask_name"])
        return CONTACT_NAME

    get_form(context, CONTACT_FORM)["name"] = name
    await update.effective_message.reply_text(texts["ask_email"])
    return CONTACT_EMAIL

async def handle_email(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    email = update.effective_message.text.strip()
    if not is_valid_email(email):
        await update.effective_message.reply_text(texts["invalid_email"])
        return CONTACT_EMAIL

    get_form(context, CONTACT_FORM)["email"] = email
    await update.effective_message.reply_text(texts["ask_subject"])
    return CONTACT_SUBJECT

async def handle_subject(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    get_form(context, CONTACT_FORM)["subject"] = update.effective_message.text.strip()
    await update.effective_message.reply_text(texts["ask_contact_message"])
    return CONTACT_MESSAGE

async def handle_message(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    form = get_form(context, CONTACT_FORM)
    form["message"] = update.effective_message.text.strip()

    def field(name):
        return html.escape(form.get(name) or texts["empty"])

    text = texts["contact_summary"].format(
        name=field("name"),
        email=field("email"),
        subject=field("subject"),
        message=field("message"),
    )
    kb = [[
        InlineKeyboardButton(texts["confirm"], callback_data="contact_confirm"),
        InlineKeyboardButton(texts["cancel"], callback_data="contact_cancel")
    ]]
    await update.effective_message.reply_text(text, reply_markup=InlineKeyboardMarkup(kb))
    return CONTACT_CONFIRM

async def confirm_contact(update: Update, context: CallbackContext):
    query = update.callback_query
    texts = get_texts(get_user_language(context))

    if is_submitting(context, CONTACT_FORM):
        logger.info("Contact message already being sent, ignoring repeated confirm")
        await query.answer(texts["submitting"])
        return None

    await query.answer()
    api = get_api(context)
    if await submit_form(update, context, CONTACT_FORM, ContactRequest, api.send_contact):
        await drop_keyboard(query)
        return ConversationHandler.END
    return CONTACT_CONFIRM

async def cancel_contact(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    if update.callback_query:
        await update.callback_query.answer()
        await drop_keyboard(update.callback_query)

    clear_form(context, CONTACT_FORM)
    await update.effective_message.reply_text(texts["cancelled"])
    return ConversationHandler.END

def contact_entry_points():
    return [
        CommandHandler("contact", start_contact),
        MessageHandler(filters.Text(menu_labels("menu_contact")), start_contact)
    ]

def contact_states():
    return {
        CONTACT_NAME: [MessageHandler(FORM_TEXT, handle_name)],
        CONTACT_EMAIL: [MessageHandler(FORM_TEXT, handle_email)],
        CONTACT_SUBJECT: [MessageHandler(FORM_TEXT, handle_subject)],
        CONTACT_MESSAGE: [MessageHandler(FORM_TEXT, handle_message)],
        CONTACT_CONFIRM: [
            CallbackQueryHandler(confirm_contact, pattern=r"^contact_confirm$"),
            CallbackQueryHandler(cancel_contact, pattern=r"^contact_cancel$")
        ]
    }

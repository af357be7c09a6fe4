# handlers/phone.py

import logging
from telegram import KeyboardButton, ReplyKeyboardMarkup, Update
from telegram.ext import CallbackContext
from states import BOOKING_PHONE
from utils.forms import is_valid_phone
from utils.localization import get_texts
from utils.session import BOOKING_FORM, get_form, get_user_language

logger = logging.getLogger(__name__)

async def ask_phone(update: Update, context: CallbackContext):
    """
    Shows a request_contact button, typing the number works too.
    """
    texts = get_texts(get_user_language(context))
    kb = [[KeyboardButton(texts["share_phone"], request_contact=True)]]
    markup = ReplyKeyboardMarkup(kb, resize_keyboard=True, one_time_keyboard=True)
    await update.effective_message.reply_text(texts["ask_phone"], reply_markup=markup)
    return BOOKING_PHONE

async def handle_phone(update: Update, context: CallbackContext):
    message = update.effective_message
    texts = get_texts(get_user_language(context))

    contact = message.contact
    if contact:
        phone_number = contact.phone_number
    else:
        phone_number = (message.text or "").strip()
        if not is_valid_phone(phone_number):
            await message.reply_text(texts["invalid_phone"])
            return BOOKING_PHONE

    logger.info("Got phone number for booking")
    get_form(context, BOOKING_FORM)["phone"] = phone_number

    from handlers.booking_handler import ask_email
    return await ask_email(update, context)

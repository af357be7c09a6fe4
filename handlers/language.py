# handlers/language.py
import logging

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import CallbackContext

from handlers.options import show_main_menu
from utils.localization import LANGUAGES, get_texts
from utils.session import get_user_language, set_user_language

logger = logging.getLogger(__name__)

LANGUAGE_KEYBOARD = InlineKeyboardMarkup([
    [InlineKeyboardButton(name, callback_data=f"lang_{code}") for name, code in LANGUAGES.items()]
])


async def handle_language_command(update: Update, context: CallbackContext):
    texts = get_texts(get_user_language(context))
    await update.effective_message.reply_text(
        texts["choose_language"],
        reply_markup=LANGUAGE_KEYBOARD
    )

async def handle_language_selection(update: Update, context: CallbackContext):
    query = update.callback_query
    await query.answer()

    lang_code = query.data.split("_", 1)[1]
    if lang_code not in LANGUAGES.values():
        logger.warning("Unknown language code %r", lang_code)
        return

    set_user_language(context, lang_code)
    texts = get_texts(lang_code)
    await query.edit_message_text(texts["language_set"])
    # the reply keyboard carries translated labels, send it again
    await show_main_menu(update, context)

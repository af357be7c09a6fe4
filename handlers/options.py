# handlers/options.py
from telegram import ReplyKeyboardMarkup, Update
from telegram.ext import CallbackContext, filters
from utils.localization import get_texts, menu_labels
from utils.session import get_user_language

MENU_KEYS = ("menu_services", "menu_book", "menu_contact", "menu_language")

MENU_TEXT = filters.Text([label for key in MENU_KEYS for label in menu_labels(key)])
# free text typed into a form step, menu buttons and commands excluded
FORM_TEXT = filters.TEXT & ~filters.COMMAND & ~MENU_TEXT


def get_main_menu_keyboard(lang_code):
    texts = get_texts(lang_code)
    buttons = [
        [texts["menu_services"], texts["menu_book"]],
        [texts["menu_contact"], texts["menu_language"]]
    ]
    return ReplyKeyboardMarkup(buttons, resize_keyboard=True, one_time_keyboard=False)

async def show_main_menu(update: Update, context: CallbackContext):
    lang = get_user_language(context)
    texts = get_texts(lang)
    await update.effective_message.reply_text(
        texts["menu"],
        reply_markup=get_main_menu_keyboard(lang)
    )

async def start(update: Update, context: CallbackContext):
    """/start: greeting, menu, then the service list, like the salon's home page."""
    texts = get_texts(get_user_language(context))
    await update.effective_message.reply_text(texts["welcome"])
    await show_main_menu(update, context)

    from handlers.services import load_services
    await load_services(update, context)

async def main_options_callback(update: Update, context: CallbackContext):
    # "Book" and "Contact" are entry points of their conversations
    message = update.effective_message.text

    if message in menu_labels("menu_services"):
        from handlers.services import load_services
        return await load_services(update, context)

    elif message in menu_labels("menu_language"):
        from handlers.language import handle_language_command
        return await handle_language_command(update, context)

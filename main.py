import logging
from telegram.ext import (
    ApplicationBuilder,
    CommandHandler,
    MessageHandler,
    CallbackQueryHandler,
    Defaults,
    filters
)
from telegram import BotCommand
from telegram.constants import ParseMode

from config import API_BASE_URL, API_TIMEOUT, LOG_LEVEL, TELEGRAM_BOT_TOKEN
from handlers.alerts import ALERT_CLOSE, handle_alert_close
from handlers.conversation import get_forms_conv_handler
from handlers.language import handle_language_command, handle_language_selection
from handlers.options import main_options_callback, start
from handlers.services import load_services
from utils.api import HairStudioAPI
from utils.localization import menu_labels

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=LOG_LEVEL
)
# every getUpdates poll is logged at INFO by httpx
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

async def set_bot_commands(application):
    commands = [
        BotCommand("start", "Start the bot"),
        BotCommand("services", "Services and prices"),
        BotCommand("book", "Book an appointment"),
        BotCommand("contact", "Send us a message"),
        BotCommand("language", "Change the language"),
        BotCommand("cancel", "Cancel the current form"),
    ]
    await application.bot.set_my_commands(commands)

async def error_handler(update, context):
    logger.error("Unhandled error while processing update %r", update, exc_info=context.error)

def build_application(token=TELEGRAM_BOT_TOKEN, api=None):
    app = (
        ApplicationBuilder()
        .token(token)
        .defaults(Defaults(parse_mode=ParseMode.HTML))
        .post_init(set_bot_commands)
        # a slow API call for one user must not hold up everyone else
        .concurrent_updates(True)
        .build()
    )
    # one client for the whole bot, handlers reach it through context.bot_data
    app.bot_data["api"] = api or HairStudioAPI(API_BASE_URL, timeout=API_TIMEOUT)

    # the forms conversation first: its entry points own "Book"/"Contact" and book_<id>
    app.add_handler(get_forms_conv_handler())

    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("services", load_services))
    app.add_handler(CommandHandler("language", handle_language_command))
    app.add_handler(CallbackQueryHandler(handle_language_selection, pattern="^lang_"))
    app.add_handler(CallbackQueryHandler(handle_alert_close, pattern=f"^{ALERT_CLOSE}$"))
    app.add_handler(MessageHandler(
        filters.Text(menu_labels("menu_services") + menu_labels("menu_language")),
        main_options_callback
    ))

    app.add_error_handler(error_handler)
    return app

def main():
    if not TELEGRAM_BOT_TOKEN:
        raise SystemExit("TELEGRAM_BOT_TOKEN is not set")

    app = build_application()
    logger.info("Hair Studio bot started, API at %s", API_BASE_URL)
    app.run_polling()

if __name__ == "__main__":
    main()

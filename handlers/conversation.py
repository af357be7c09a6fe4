# handlers/conversation.py
from telegram import ReplyKeyboardRemove, Update
from telegram.ext import CallbackContext, CommandHandler, ConversationHandler

from handlers.booking_handler import booking_entry_points, booking_states
from handlers.contact import contact_entry_points, contact_states
from utils.forms import drop_keyboard
from utils.localization import get_texts
from utils.session import BOOKING_FORM, CONTACT_FORM, clear_form, get_user_language


async def cancel_forms(update: Update, context: CallbackContext):
    """/cancel from any step of either form."""
    texts = get_texts(get_user_language(context))
    if update.callback_query:
        await update.callback_query.answer()
        await drop_keyboard(update.callback_query)

    clear_form(context, BOOKING_FORM)
    clear_form(context, CONTACT_FORM)
    await update.effective_message.reply_text(texts["cancelled"], reply_markup=ReplyKeyboardRemove())
    return ConversationHandler.END

def get_forms_conv_handler() -> ConversationHandler:
    """
    Booking and contact share one conversation, so a user is only ever in one
    of them. Starting either form from inside the other switches over.
    """
    return ConversationHandler(
        entry_points=booking_entry_points() + contact_entry_points(),
        states={**booking_states(), **contact_states()},
        fallbacks=[CommandHandler("cancel", cancel_forms)],
        allow_reentry=True
    )

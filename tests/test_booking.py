from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

from telegram.error import BadRequest
from telegram.ext import ConversationHandler

from conftest import make_update, sent_texts
from handlers.booking_handler import cancel_booking, confirm_booking, handle_email, skip_message, start_booking
from handlers.phone import handle_phone
from states import BOOKING_CONFIRM, BOOKING_EMAIL, BOOKING_MESSAGE, BOOKING_PHONE, BOOKING_SERVICE
from utils.api import DEFAULT_ERROR_MESSAGE, ApiError
from utils.session import BOOKING_FORM, CONTACT_FORM


def _filled_form() -> dict:
    return {
        "service": "3",
        "service_label": "Uốn tóc - 600.000 ₫",
        "date": "2024-05-01",
        "time": "10:00",
        "name": "A",
        "phone": "0900000000",
        "email": "a@x.com",
        "message": "",
    }


def test_successful_booking_clears_form_and_shows_one_success(api, context) -> None:
    api.create_booking.return_value = {"message": "Đặt lịch thành công!"}
    context.user_data[BOOKING_FORM] = _filled_form()
    update = make_update(data="booking_confirm")

    state = asyncio.run(confirm_booking(update, context))

    assert state == ConversationHandler.END
    api.create_booking.assert_called_once_with({
        "name": "A",
        "phone": "0900000000",
        "email": "a@x.com",
        "service_id": 3,
        "date": "2024-05-01",
        "time": "10:00",
        "message": "",
    })
    assert sent_texts(context) == ["✓ Đặt lịch thành công!"]
    assert BOOKING_FORM not in context.user_data
    update.callback_query.edit_message_reply_markup.assert_awaited_once_with(reply_markup=None)


def test_failed_booking_keeps_fields_and_shows_one_error(api, context) -> None:
    api.create_booking.side_effect = ApiError("Khung giờ này đã có người đặt", 400)
    context.user_data[BOOKING_FORM] = _filled_form()

    state = asyncio.run(confirm_booking(make_update(data="booking_confirm"), context))

    assert state == BOOKING_CONFIRM
    assert context.user_data[BOOKING_FORM] == _filled_form()
    assert sent_texts(context) == ["⚠ Có lỗi xảy ra: Khung giờ này đã có người đặt"]


def test_failed_booking_without_detail_shows_fallback(api, context) -> None:
    api.create_booking.side_effect = ApiError(DEFAULT_ERROR_MESSAGE, 500)
    context.user_data[BOOKING_FORM] = _filled_form()

    asyncio.run(confirm_booking(make_update(data="booking_confirm"), context))

    assert sent_texts(context) == [f"⚠ Có lỗi xảy ra: {DEFAULT_ERROR_MESSAGE}"]


def test_retry_after_failure_succeeds(api, context) -> None:
    api.create_booking.side_effect = [ApiError("timeout"), {"message": "OK"}]
    context.user_data[BOOKING_FORM] = _filled_form()

    assert asyncio.run(confirm_booking(make_update(data="booking_confirm"), context)) == BOOKING_CONFIRM
    assert asyncio.run(confirm_booking(make_update(data="booking_confirm"), context)) == ConversationHandler.END
    assert api.create_booking.call_count == 2
    # the error banner was replaced by the success one
    assert context.bot.delete_message.call_count == 1


def test_repeated_confirm_while_sending_is_ignored(api, context) -> None:
    context.user_data[BOOKING_FORM] = _filled_form()
    context.user_data[f"{BOOKING_FORM}_submitting"] = True
    update = make_update(data="booking_confirm")

    assert asyncio.run(confirm_booking(update, context)) is None
    api.create_booking.assert_not_called()
    update.callback_query.answer.assert_awaited_once_with("Đang gửi, vui lòng chờ...")


def test_submitting_flag_is_cleared_after_failure(api, context) -> None:
    api.create_booking.side_effect = ApiError("boom")
    context.user_data[BOOKING_FORM] = _filled_form()

    asyncio.run(confirm_booking(make_update(data="booking_confirm"), context))

    assert f"{BOOKING_FORM}_submitting" not in context.user_data


def test_missing_fields_are_not_sent(api, context) -> None:
    form = _filled_form()
    del form["email"]
    context.user_data[BOOKING_FORM] = form

    state = asyncio.run(confirm_booking(make_update(data="booking_confirm"), context))

    assert state == BOOKING_CONFIRM
    api.create_booking.assert_not_called()
    assert sent_texts(context) == ["⚠ Vui lòng điền đủ thông tin: email"]


def test_invalid_email_is_asked_again(context) -> None:
    update = make_update(text="not-an-email")

    assert asyncio.run(handle_email(update, context)) == BOOKING_EMAIL
    assert "email" not in context.user_data.get(BOOKING_FORM, {})


def test_valid_email_moves_to_message(context) -> None:
    assert asyncio.run(handle_email(make_update(text=" a@x.com "), context)) == BOOKING_MESSAGE
    assert context.user_data[BOOKING_FORM]["email"] == "a@x.com"


def test_shared_contact_is_used_as_phone(context) -> None:
    update = make_update()
    update.effective_message.contact = MagicMock(phone_number="+84900000000")

    assert asyncio.run(handle_phone(update, context)) == BOOKING_EMAIL
    assert context.user_data[BOOKING_FORM]["phone"] == "+84900000000"


def test_typed_phone_is_validated(context) -> None:
    assert asyncio.run(handle_phone(make_update(text="abc"), context)) == BOOKING_PHONE
    assert asyncio.run(handle_phone(make_update(text="0900 000 000"), context)) == BOOKING_EMAIL


def test_skip_message_shows_escaped_summary(context) -> None:
    form = _filled_form()
    form["name"] = "<A>"
    context.user_data[BOOKING_FORM] = form
    update = make_update(text="/skip")

    assert asyncio.run(skip_message(update, context)) == BOOKING_CONFIRM
    text = update.effective_message.reply_text.call_args.args[0]
    assert "&lt;A&gt;" in text
    assert context.user_data[BOOKING_FORM]["message"] == ""


def test_cancel_discards_form(context) -> None:
    context.user_data[BOOKING_FORM] = _filled_form()

    state = asyncio.run(cancel_booking(make_update(text="/cancel"), context))

    assert state == ConversationHandler.END
    assert BOOKING_FORM not in context.user_data


def test_success_stands_when_keyboard_cannot_be_removed(api, context) -> None:
    api.create_booking.return_value = {"message": "OK"}
    context.user_data[BOOKING_FORM] = _filled_form()
    update = make_update(data="booking_confirm")
    update.callback_query.edit_message_reply_markup.side_effect = BadRequest("Message to edit not found")

    state = asyncio.run(confirm_booking(update, context))

    assert state == ConversationHandler.END
    assert sent_texts(context) == ["✓ OK"]
    assert BOOKING_FORM not in context.user_data


def test_cancel_button_on_old_message_still_cancels(context) -> None:
    context.user_data[BOOKING_FORM] = _filled_form()
    update = make_update(data="booking_cancel")
    update.callback_query.edit_message_reply_markup.side_effect = BadRequest("Message is not modified")

    assert asyncio.run(cancel_booking(update, context)) == ConversationHandler.END
    assert BOOKING_FORM not in context.user_data


def test_success_without_message_shows_default_text(api, context) -> None:
    api.create_booking.return_value = {"id": 7}
    context.user_data[BOOKING_FORM] = _filled_form()

    assert asyncio.run(confirm_booking(make_update(data="booking_confirm"), context)) == ConversationHandler.END
    assert sent_texts(context) == ["✓ Gửi thành công!"]


def test_success_default_text_follows_language(api, context) -> None:
    api.create_booking.return_value = {"message": ""}
    context.user_data["lang"] = "en"
    context.user_data[BOOKING_FORM] = _filled_form()

    asyncio.run(confirm_booking(make_update(data="booking_confirm"), context))

    assert sent_texts(context) == ["✓ Sent successfully!"]


def test_starting_a_booking_drops_contact_in_progress(api, context) -> None:
    api.get_services.return_value = [
        {"id": 3, "name": "Uốn tóc", "description": "", "price": 600000, "duration": 90},
    ]
    context.user_data[CONTACT_FORM] = {"name": "Lan", "email": "lan@x.com"}

    assert asyncio.run(start_booking(make_update(text="/book"), context)) == BOOKING_SERVICE
    assert CONTACT_FORM not in context.user_data

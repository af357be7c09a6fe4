from __future__ import annotations

from itertools import count
from unittest.mock import AsyncMock, MagicMock

import pytest


def make_context(api=None) -> MagicMock:
    # No network: both the Telegram bot and the salon API are mocks.
    ids = count(100)
    context = MagicMock()
    context.user_data = {}
    context.chat_data = {}
    context.bot_data = {"api": api if api is not None else MagicMock()}
    context.bot = MagicMock()
    context.bot.send_message = AsyncMock(side_effect=lambda **kwargs: MagicMock(message_id=next(ids)))
    context.bot.delete_message = AsyncMock()
    context.job_queue = MagicMock()
    context.job_queue.get_jobs_by_name.return_value = []
    return context


def make_update(text: str | None = None, data: str | None = None, chat_id: int = 1) -> MagicMock:
    message = MagicMock()
    message.text = text
    message.contact = None
    message.message_id = 500
    message.reply_text = AsyncMock()

    update = MagicMock()
    update.effective_chat.id = chat_id
    update.effective_message = message
    if data is None:
        update.callback_query = None
    else:
        query = MagicMock()
        query.data = data
        query.message = message
        query.answer = AsyncMock()
        query.edit_message_reply_markup = AsyncMock()
        query.edit_message_text = AsyncMock()
        update.callback_query = query
    return update


def sent_texts(context) -> list[str]:
    return [c.kwargs["text"] for c in context.bot.send_message.call_args_list]


def callback_data(markup) -> list[str]:
    return [button.callback_data for row in markup.inline_keyboard for button in row]


@pytest.fixture
def api() -> MagicMock:
    return MagicMock()


@pytest.fixture
def context(api) -> MagicMock:
    return make_context(api)

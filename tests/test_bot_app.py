"""
Tests for the Telegram handlers, using mocked Update / Context objects.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import ReplyKeyboardMarkup, Update

from student_bot import bot_app

ADMIN_ID = 999


def _update(text="", user_id=1, first_name="Ana"):
    update = MagicMock(spec=Update)
    update.effective_user.id = user_id
    update.effective_user.first_name = first_name
    update.effective_chat.id = 500 + user_id
    update.message.text = text
    update.message.reply_text = AsyncMock()
    update.effective_message = update.message
    return update


@pytest.fixture
def context(processor):
    ctx = MagicMock()
    ctx.bot_data = {"processor": processor, "admin_id": ADMIN_ID}
    ctx.bot.send_message = AsyncMock()
    ctx.bot.send_chat_action = AsyncMock()
    ctx.bot.get_file = AsyncMock()
    return ctx


def _replies(update):
    return [c.args[0] for c in update.message.reply_text.await_args_list]


@pytest.mark.asyncio
async def test_start_sends_welcome(context):
    update = _update("/start")
    await bot_app.start(update, context)
    assert _replies(update) == ["🔐 Please enter your student ID to continue."]


@pytest.mark.asyncio
async def test_help_uses_stored_language(context, processor):
    processor.set_language(1, "ht")
    update = _update("/help")
    await bot_app.help_command(update, context)
    text = _replies(update)[0]
    assert text.startswith("📚 *Kòmand disponib :*")
    assert update.message.reply_text.await_args.kwargs["parse_mode"] == "Markdown"


@pytest.mark.asyncio
async def test_language_command_shows_keyboard(context):
    update = _update("/language")
    await bot_app.language_command(update, context)
    markup = update.message.reply_text.await_args.kwargs["reply_markup"]
    assert isinstance(markup, ReplyKeyboardMarkup)
    labels = [button.text for button in markup.keyboard[0]]
    assert labels == ["Français", "Kreyòl", "English"]


@pytest.mark.asyncio
async def test_choose_language(context, processor):
    update = _update("Kreyòl")
    await bot_app.choose_language(update, context)
    assert processor.store.get(1).language == "ht"
    assert _replies(update) == ["✅ Lang lan chanje pou Kreyòl."]


@pytest.mark.asyncio
async def test_login_notifies_admin(context):
    update = _update("asu1001")
    await bot_app.handle_message(update, context)
    assert _replies(update)[0] == "✅ Hello Marie-Claire Joseph. How can I help you today?"
    kwargs = context.bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == ADMIN_ID
    assert "Login approved" in kwargs["text"]


@pytest.mark.asyncio
async def test_forwarded_message_shows_typing(context, chatbase):
    await bot_app.handle_message(_update("asu1001"), context)
    update = _update("tell me about the academy")
    await bot_app.handle_message(update, context)
    context.bot.send_chat_action.assert_awaited_once_with(chat_id=501, action="typing")
    assert _replies(update) == ["Chatbase says hi"]
    await context.bot_data["processor"].drain()


@pytest.mark.asyncio
async def test_admin_notice_failure_is_logged_not_raised(context):
    context.bot.send_message.side_effect = RuntimeError("blocked")
    update = _update("asu1001")
    await bot_app.handle_message(update, context)
    assert len(_replies(update)) == 2


@pytest.mark.asyncio
async def test_document_forwarded_to_admin(context):
    context.bot.get_file.return_value = MagicMock(
        file_path="https://api.telegram.org/file/botTOKEN/docs/file_1.pdf")
    update = _update()
    update.message.document.file_id = "abc"
    await bot_app.handle_document(update, context)

    context.bot.get_file.assert_awaited_once_with("abc")
    notice = context.bot.send_message.await_args.kwargs["text"]
    assert "New file from Ana" in notice
    assert "file_1.pdf" in notice
    assert _replies(update) == ["✅ File received. We'll review it shortly."]


@pytest.mark.asyncio
async def test_document_failure_reply(context):
    context.bot.get_file.side_effect = RuntimeError("nope")
    update = _update()
    await bot_app.handle_document(update, context)
    assert _replies(update) == ["❌ Sorry, we could not process the file link."]


@pytest.mark.asyncio
async def test_error_handler_replies_with_error(context):
    update = _update("x")
    context.error = RuntimeError("kaboom")
    await bot_app.error_handler(update, context)
    assert _replies(update) == ["❌ Technical error. Please try again later."]


def test_build_application_requires_token(monkeypatch):
    monkeypatch.setattr(bot_app.settings, "TELEGRAM_TOKEN", None)
    with pytest.raises(RuntimeError):
        bot_app.build_application()

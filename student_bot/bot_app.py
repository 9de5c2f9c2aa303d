# -*- coding: utf-8 -*-
import asyncio
import logging
import threading
from typing import Optional

from telegram import ReplyKeyboardMarkup, Update
from telegram.ext import (
    AIORateLimiter,
    Application,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters
)

from .language import LANGUAGE_CHOICES
from .messages import admin_notice, get_message
from .processor import MessageProcessor, build_processor
from .settings import settings

# Logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

_processor: Optional[MessageProcessor] = None
_processor_lock = threading.Lock()


def get_processor() -> MessageProcessor:
    """Process-wide processor shared by the bot and the HTTP service."""
    global _processor
    with _processor_lock:
        if _processor is None:
            _processor = build_processor(settings)
        return _processor


def _processor_from(context: ContextTypes.DEFAULT_TYPE) -> MessageProcessor:
    processor = context.bot_data.get("processor") if context else None
    return processor or get_processor()


async def notify_admin(context: ContextTypes.DEFAULT_TYPE, text: str) -> None:
    admin_id = context.bot_data.get("admin_id", settings.ADMIN_TELEGRAM_ID)
    if not admin_id:
        logger.debug("ADMIN_TELEGRAM_ID not set, admin notice dropped")
        return
    try:
        await context.bot.send_message(
            chat_id=admin_id, text=text, parse_mode="Markdown")
    except Exception as e:
        logger.error("Failed to notify admin: %s", e)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    processor = _processor_from(context)
    lang = processor.language_for(
        update.effective_user.id, update.message.text or "")
    await update.message.reply_text(get_message("welcome", lang))


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    processor = _processor_from(context)
    lang = processor.language_for(
        update.effective_user.id, update.message.text or "")
    logger.info("Language in /help: %s", lang)
    await update.message.reply_text(
        get_message("help", lang), parse_mode="Markdown")


async def language_command(update: Update,
                           context: ContextTypes.DEFAULT_TYPE):
    keyboard = ReplyKeyboardMarkup(
        [list(LANGUAGE_CHOICES)],
        one_time_keyboard=True,
        resize_keyboard=True,
    )
    await update.message.reply_text(
        get_message("language_prompt"), reply_markup=keyboard)


async def choose_language(update: Update, context: ContextTypes.DEFAULT_TYPE):
    label = update.message.text.strip()
    lang = LANGUAGE_CHOICES.get(label)
    if lang is None:
        return
    _processor_from(context).set_language(update.effective_user.id, lang)
    await update.message.reply_text(
        get_message("language_set", lang, label=label))


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    user_id = update.effective_user.id
    chat_id = update.effective_chat.id
    processor = _processor_from(context)

    async def typing():
        await context.bot.send_chat_action(chat_id=chat_id, action="typing")

    result = await processor.handle_text(
        user_id, update.message.text, on_forward=typing)
    logger.info("Message from %s -> %s", user_id, result.decision.outcome.value)

    for reply in result.replies:
        await update.message.reply_text(reply.text, parse_mode=reply.parse_mode)
    for notice in result.admin_notices:
        await notify_admin(context, notice)


async def handle_document(update: Update, context: ContextTypes.DEFAULT_TYPE):
    user = update.effective_user
    lang = _processor_from(context).language_for(user.id)
    document = update.message.document
    try:
        tg_file = await context.bot.get_file(document.file_id)
        await notify_admin(context, admin_notice(
            "file",
            name=user.first_name or "Unknown",
            user_id=user.id,
            url=tg_file.file_path,
        ))
        await update.message.reply_text(get_message("file_received", lang))
    except Exception as e:
        logger.error("File link error: %s", e)
        await update.message.reply_text(get_message("file_failed", lang))


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE):
    logger.error("Update %s caused error %s", update, context.error)
    if isinstance(update, Update) and update.effective_message:
        lang = "en"
        if update.effective_user:
            lang = _processor_from(context).language_for(
                update.effective_user.id)
        await update.effective_message.reply_text(get_message("error", lang))


def build_application(processor: Optional[MessageProcessor] = None
                      ) -> Application:
    if not settings.TELEGRAM_TOKEN:
        raise RuntimeError(
            "TELEGRAM_TOKEN is not set. Put it in .env or the environment.")

    app = Application.builder().token(
        settings.TELEGRAM_TOKEN).rate_limiter(AIORateLimiter()).build()
    app.bot_data["processor"] = processor or get_processor()
    app.bot_data["admin_id"] = settings.ADMIN_TELEGRAM_ID
    register_handlers(app)
    return app


def register_handlers(app: Application) -> None:
    language_labels = "|".join(LANGUAGE_CHOICES)
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("language", language_command))
    app.add_handler(MessageHandler(
        filters.Regex(f"^({language_labels})$"), choose_language))
    app.add_handler(
        MessageHandler(
            filters.TEXT & ~filters.COMMAND,
            handle_message))
    app.add_handler(MessageHandler(filters.Document.ALL, handle_document))
    app.add_error_handler(error_handler)


def _run_polling_blocking() -> None:
    async def runner():
        try:
            app = build_application()

            await app.initialize()
            await app.start()
            await app.updater.start_polling(allowed_updates=Update.ALL_TYPES)
            logger.info("✅ Bot is running")

            try:
                while True:
                    await asyncio.sleep(3600)
            finally:
                await app.updater.stop()
                await app.stop()
                await app.shutdown()

        except Exception as e:
            logger.error("Failed to start bot: %s", e)

    asyncio.run(runner())


def start_bot_in_background() -> None:
    t = threading.Thread(target=_run_polling_blocking, daemon=True)
    t.start()
    logger.info("Telegram bot polling thread started")


def main():
    try:
        application = build_application()
        logger.info("Bot is starting...")
        application.run_polling(allowed_updates=Update.ALL_TYPES)
    except Exception as e:
        logger.error("Failed to start bot: %s", e)


if __name__ == "__main__":
    main()

from fastapi import APIRouter, Depends
import logging

from ..bot_app import get_processor
from ..models import BotReply, BotStatus, IncomingMessage, ReplyItem
from ..processor import MessageProcessor

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=BotReply)
async def process_message(
        message: IncomingMessage,
        processor: MessageProcessor = Depends(get_processor)):
    """Run one message through the session gate and keyword rules"""
    logger.info("Message from user %s (@%s)",
                message.user_id, message.username)
    result = await processor.handle_text(message.user_id, message.message_text)
    return BotReply(
        chat_id=message.chat_id,
        decision=result.decision.outcome.value,
        replies=[ReplyItem(text=r.text, parse_mode=r.parse_mode)
                 for r in result.replies],
        admin_notices=result.admin_notices,
    )


@router.get("/status", response_model=BotStatus)
async def get_bot_status(
        processor: MessageProcessor = Depends(get_processor)):
    return BotStatus(
        status="running",
        message="Student bot service is running",
        sessions=len(processor.store),
    )

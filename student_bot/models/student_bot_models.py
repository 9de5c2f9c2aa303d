from pydantic import BaseModel
from typing import List, Optional


class IncomingMessage(BaseModel):
    """Incoming text message from a transport"""
    chat_id: int
    user_id: int
    message_text: str
    username: Optional[str] = None


class ReplyItem(BaseModel):
    text: str
    parse_mode: Optional[str] = None


class BotReply(BaseModel):
    """Answer for the transport to send back"""
    chat_id: int
    decision: str
    replies: List[ReplyItem] = []
    admin_notices: List[str] = []


class BotStatus(BaseModel):
    status: str
    message: str
    sessions: int = 0

from .student_bot_models import BotReply, BotStatus, IncomingMessage, ReplyItem

__all__ = ["BotReply", "BotStatus", "IncomingMessage", "ReplyItem"]

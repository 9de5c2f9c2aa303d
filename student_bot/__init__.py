"""Student support Telegram bot with a per-user session gate."""

__version__ = "1.0.0"

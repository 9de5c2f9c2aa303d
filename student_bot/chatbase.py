"""
Client for the hosted Chatbase chatbot that answers whatever the
keyword rules do not.
"""

import logging
import time
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

CHATBASE_URL = "https://www.chatbase.co/api/v1/chat"


class ChatbaseError(Exception):
    """The chatbot API could not be reached or answered with an error."""


class ChatbaseClient:
    def __init__(self,
                 bot_id: str,
                 api_key: str,
                 url: str = CHATBASE_URL,
                 timeout=(3.05, 30),
                 session: Optional[requests.Session] = None):
        self.bot_id = bot_id
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.bot_id and self.api_key)

    @staticmethod
    def extract_reply(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            logger.warning("Unexpected Chatbase body: %r", data)
            return None
        content = None
        messages = data.get("messages")
        if isinstance(messages, list) and messages and isinstance(messages[0], dict):
            content = messages[0].get("content")
        reply = content or data.get("text")
        return reply if isinstance(reply, str) and reply else None

    def ask(self, text: str) -> Optional[str]:
        """Send one user message and return the bot's reply, if any."""
        if not self.configured:
            raise ChatbaseError("Chatbase bot id or API key is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "messages": [{"role": "user", "content": text}],
            "chatbotId": self.bot_id,
            "stream": False,
        }

        t0 = time.time()
        try:
            resp = self.session.post(
                self.url, headers=headers, json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            logger.error("Chatbase timeout")
            raise ChatbaseError("Chatbase timeout") from e
        except requests.RequestException as e:
            logger.error("Chatbase request failed: %s", e)
            raise ChatbaseError(str(e)) from e

        logger.info("Chatbase response | status=%s elapsed=%.3fs",
                    resp.status_code, time.time() - t0)
        if resp.status_code != 200:
            logger.error("Chatbase error %s: %s", resp.status_code, resp.text)
            raise ChatbaseError(f"Chatbase API error: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Chatbase returned invalid JSON: %s", resp.text[:500])
            raise ChatbaseError("Invalid JSON from Chatbase") from e
        return self.extract_reply(data)

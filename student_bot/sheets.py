import logging
from datetime import datetime
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class SheetLogger:
    """Posts captured emails and chat logs to spreadsheet web hooks."""

    def __init__(self,
                 sheet_url: Optional[str] = None,
                 log_sheet_url: Optional[str] = None,
                 timeout=(3.05, 10),
                 session: Optional[requests.Session] = None):
        self.sheet_url = sheet_url
        self.log_sheet_url = log_sheet_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, url: Optional[str], payload: Dict[str, Any],
              what: str) -> bool:
        if not url:
            logger.debug("No URL configured for %s, skipping", what)
            return False
        try:
            resp = self.session.post(url, json=payload, timeout=self.timeout)
            if resp.status_code >= 400:
                logger.error("Sheet %s error %s: %s",
                             what, resp.status_code, resp.text)
                return False
            return True
        except requests.Timeout:
            logger.error("Sheet %s timeout", what)
        except requests.RequestException as e:
            logger.error("Sheet %s request failed: %s", what, e)
        return False

    def save_email(self, telegram_id, email: str) -> bool:
        return self._post(self.sheet_url,
                          {"telegramId": telegram_id, "email": email},
                          "email")

    def log_interaction(self,
                        student_id: Optional[str],
                        student_name: Optional[str],
                        user_message: str,
                        bot_reply: Optional[str]) -> bool:
        payload = {
            "studentID": student_id or "Unknown",
            "studentName": student_name or "Unknown",
            "userMessage": user_message,
            "botReply": bot_reply,
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        }
        return self._post(self.log_sheet_url, payload, "log")

"""
Message processing glue around the session gate.

The gate decides what kind of answer a message gets; this module turns the
decision into replies, runs the keyword rules and talks to the external
chatbot and the spreadsheet hooks. Failures of those collaborators never
roll back what the gate already committed.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Hashable, List, Optional, Set

from .chatbase import ChatbaseClient, ChatbaseError
from .credentials import CredentialStore
from .data import AcademicData
from .gate import Decision, Outcome, SessionGate
from .language import detect_language
from .messages import admin_notice, get_message
from .restricted import RestrictedTopicFilter
from .routing import Reply, Rule, RuleContext, build_rules, route
from .session import SessionStore
from .sheets import SheetLogger

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class ProcessResult:
    decision: Decision
    replies: List[Reply] = field(default_factory=list)
    admin_notices: List[str] = field(default_factory=list)


class MessageProcessor:
    def __init__(self,
                 gate: SessionGate,
                 rules: List[Rule],
                 chatbase: ChatbaseClient,
                 sheets: SheetLogger,
                 heavy_concurrency: int = 4):
        self.gate = gate
        self.store: SessionStore = gate.store
        self.rules = rules
        self.chatbase = chatbase
        self.sheets = sheets
        self.heavy_concurrency = heavy_concurrency
        # asyncio primitives belong to one loop; the bot thread and the
        # HTTP service each get their own semaphore
        self._semaphores: Dict[asyncio.AbstractEventLoop, asyncio.Semaphore] = {}
        self._background: Set[asyncio.Task] = set()

    def _heavy_ops_sem(self) -> asyncio.Semaphore:
        loop = asyncio.get_running_loop()
        sem = self._semaphores.get(loop)
        if sem is None:
            sem = asyncio.Semaphore(self.heavy_concurrency)
            self._semaphores[loop] = sem
        return sem

    def _fire_and_forget(self, func: Callable, *args) -> None:
        task = asyncio.create_task(asyncio.to_thread(func, *args))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def drain(self) -> None:
        """Wait for pending spreadsheet posts."""
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

    def language_for(self, user_id: Hashable, text: str = "") -> str:
        return self.store.ensure_language(user_id, detect_language(text))

    def set_language(self, user_id: Hashable, language: str) -> None:
        logger.info("User %s switched language to %s", user_id, language)
        self.store.set_language(user_id, language)

    async def handle_text(self,
                          user_id: Hashable,
                          text: Optional[str],
                          now: Optional[int] = None,
                          on_forward: Optional[Callable[[], Awaitable]] = None
                          ) -> ProcessResult:
        if now is None:
            now = now_ms()
        if now < 0:
            raise ValueError(f"timestamp must not be negative: {now}")

        text = (text or "").strip()
        lang = self.language_for(user_id, text)
        decision = self.gate.evaluate(user_id, text, now)
        result = ProcessResult(decision=decision)

        if decision.outcome is Outcome.MUTED:
            result.replies.append(Reply(get_message("muted", lang)))
        elif decision.outcome is Outcome.RATE_LIMITED:
            result.replies.append(Reply(get_message("rate_limited", lang)))
        elif decision.outcome is Outcome.AUTH_FAILED:
            result.replies.append(Reply(get_message("auth_fail", lang)))
        elif decision.outcome is Outcome.AUTH_SUCCEEDED:
            result.replies.append(Reply(get_message(
                "auth_success", lang, name=decision.display_name)))
            result.replies.append(Reply(get_message("email_prompt", lang)))
            result.admin_notices.append(admin_notice(
                "login", name=decision.display_name,
                credential_id=decision.credential_id))
        else:
            await self._proceed(user_id, text, lang, result, on_forward)
        return result

    async def _proceed(self, user_id: Hashable, text: str, lang: str,
                       result: ProcessResult,
                       on_forward: Optional[Callable[[], Awaitable]]) -> None:
        record = self.store.get(user_id)
        ctx = RuleContext(user_id=user_id, text=text, record=record, lang=lang)
        outcome = route(self.rules, ctx)
        if outcome is not None:
            result.replies.extend(outcome.replies)
            result.admin_notices.extend(outcome.admin_notices)
            if outcome.captured_email:
                self._store_email(user_id, outcome.captured_email)
            return

        if on_forward is not None:
            try:
                await on_forward()
            except Exception as e:
                logger.warning("on_forward callback failed: %s", e)

        reply_text = None
        try:
            async with self._heavy_ops_sem():
                reply_text = await asyncio.to_thread(self.chatbase.ask, text)
        except ChatbaseError as e:
            logger.error("Chatbase error for user %s: %s", user_id, e)
            result.replies.append(Reply(get_message("error", lang)))
            return
        except Exception as e:
            logger.exception("Unexpected chatbot failure for user %s: %s",
                             user_id, e)
            result.replies.append(Reply(get_message("error", lang)))
            return

        result.replies.append(Reply(reply_text or get_message("fallback", lang)))
        self._fire_and_forget(
            self.sheets.log_interaction,
            record.credential_id, record.display_name, text, reply_text)

    def _store_email(self, user_id: Hashable, email: str) -> None:
        def _apply(record):
            if record.email is None:
                record.email = email

        self.store.update(user_id, _apply)
        logger.info("Saved email for user %s", user_id)
        self._fire_and_forget(self.sheets.save_email, user_id, email)


def build_processor(settings) -> MessageProcessor:
    """Wire the processor from a Settings object."""
    if settings.AUTH_MODE == "passcode":
        credentials = CredentialStore.from_passcode(settings.PASSCODE)
    else:
        credentials = CredentialStore.from_student_file(settings.STUDENT_IDS_PATH)

    gate = SessionGate(
        SessionStore(),
        credentials,
        window_ms=settings.RATE_WINDOW_MS,
        limit=settings.RATE_LIMIT,
        reset_window_on_unmute=settings.RESET_WINDOW_ON_UNMUTE,
    )
    academic_data = AcademicData.load(
        settings.CERTIFICATES_PATH, settings.DATES_PATH)
    rules = build_rules(
        RestrictedTopicFilter(),
        academic_data,
        {"transcript": settings.TRANSCRIPT_URL,
         "schedule": settings.SCHEDULE_URL},
    )
    chatbase = ChatbaseClient(
        settings.CHATBASE_BOT_ID,
        settings.CHATBASE_API_KEY,
        url=settings.CHATBASE_URL,
    )
    sheets = SheetLogger(settings.SHEET_URL, settings.LOG_SHEET_URL)
    logger.info("Message processor ready: auth_mode=%s credentials=%d "
                "limit=%d window_ms=%d", settings.AUTH_MODE, len(credentials),
                settings.RATE_LIMIT, settings.RATE_WINDOW_MS)
    return MessageProcessor(gate, rules, chatbase, sheets,
                            heavy_concurrency=settings.HEAVY_CONCURRENCY)

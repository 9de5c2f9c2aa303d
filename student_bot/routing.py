"""
Keyword routing for authenticated users.

Rules are checked in a fixed order and the first match answers the message.
Anything no rule claims is forwarded to the external chatbot.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Optional, Sequence

from .data import AcademicData
from .messages import CONTACT_EMAIL, admin_notice, get_message
from .restricted import RestrictedTopicFilter
from .session import SessionRecord

logger = logging.getLogger(__name__)

CERTIFICATE_KEYWORDS = (
    "certificate", "certificat", "sètifika",
    "attestation", "attestasyon",
    "diploma", "diplom", "diplôme",
)

DATE_KEYWORDS: Dict[str, Sequence[str]] = {
    "exam": ("exam", "examen", "egzamen"),
    "payment": ("payment", "paiement", "peyman", "tuition"),
    "holiday": ("holiday", "vacance", "vakans", "congé", "konje"),
}

DATE_TITLES = {
    "exam": {"en": "Exam dates", "fr": "Dates des examens", "ht": "Dat egzamen"},
    "payment": {"en": "Payment dates", "fr": "Dates de paiement", "ht": "Dat peyman"},
    "holiday": {"en": "Holidays", "fr": "Vacances", "ht": "Vakans"},
}


@dataclass
class Reply:
    text: str
    parse_mode: Optional[str] = None


@dataclass
class RuleContext:
    user_id: Hashable
    text: str
    record: SessionRecord
    lang: str

    @property
    def lower(self) -> str:
        return self.text.lower()


@dataclass
class RuleOutcome:
    replies: List[Reply] = field(default_factory=list)
    admin_notices: List[str] = field(default_factory=list)
    captured_email: Optional[str] = None


@dataclass
class Rule:
    name: str
    predicate: Callable[[RuleContext], bool]
    respond: Callable[[RuleContext], RuleOutcome]


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(k in text for k in keywords)


def build_rules(restricted_filter: RestrictedTopicFilter,
                academic_data: AcademicData,
                resources: Dict[str, str]) -> List[Rule]:
    """Build the rule list. Order matters and must not change."""

    def email_matches(ctx: RuleContext) -> bool:
        return ctx.record.email is None and "@" in ctx.text

    def email_respond(ctx: RuleContext) -> RuleOutcome:
        return RuleOutcome(
            replies=[Reply(get_message("email_saved", ctx.lang))],
            admin_notices=[admin_notice(
                "email", user_id=ctx.user_id, email=ctx.text)],
            captured_email=ctx.text,
        )

    def restricted_matches(ctx: RuleContext) -> bool:
        return restricted_filter.detect(ctx.text).is_restricted

    def restricted_respond(ctx: RuleContext) -> RuleOutcome:
        return RuleOutcome(replies=[Reply(get_message("restricted", ctx.lang))])

    def certificate_matches(ctx: RuleContext) -> bool:
        return _contains_any(ctx.lower, CERTIFICATE_KEYWORDS)

    def certificate_respond(ctx: RuleContext) -> RuleOutcome:
        link = academic_data.certificate_for(ctx.record.credential_id)
        if link:
            return RuleOutcome(replies=[Reply(
                get_message("certificate_found", ctx.lang, link=link))])
        logger.info("No certificate for %s", ctx.record.credential_id)
        return RuleOutcome(replies=[Reply(
            get_message("certificate_missing", ctx.lang, email=CONTACT_EMAIL),
            parse_mode="Markdown")])

    def resource_matches(ctx: RuleContext) -> bool:
        return _contains_any(ctx.lower, tuple(resources))

    def resource_respond(ctx: RuleContext) -> RuleOutcome:
        name = next(k for k in resources if k in ctx.lower)
        link = resources[name]
        key = "resource" if link else "resource_missing"
        return RuleOutcome(replies=[Reply(
            get_message(key, ctx.lang, name=name, link=link))])

    def dates_category(ctx: RuleContext) -> Optional[str]:
        for category, keywords in DATE_KEYWORDS.items():
            if _contains_any(ctx.lower, keywords):
                return category
        return None

    def dates_matches(ctx: RuleContext) -> bool:
        return dates_category(ctx) is not None

    def dates_respond(ctx: RuleContext) -> RuleOutcome:
        category = dates_category(ctx)
        lines = academic_data.dates_for(category, ctx.lang)
        if not lines:
            return RuleOutcome(replies=[Reply(
                get_message("dates_missing", ctx.lang))])
        title = DATE_TITLES[category].get(ctx.lang, DATE_TITLES[category]["en"])
        return RuleOutcome(replies=[Reply(get_message(
            "dates", ctx.lang, title=title,
            dates="\n".join(f"• {line}" for line in lines)))])

    return [
        Rule("email", email_matches, email_respond),
        Rule("restricted", restricted_matches, restricted_respond),
        Rule("certificate", certificate_matches, certificate_respond),
        Rule("resource", resource_matches, resource_respond),
        Rule("dates", dates_matches, dates_respond),
    ]


def route(rules: Sequence[Rule], ctx: RuleContext) -> Optional[RuleOutcome]:
    """Run the first matching rule, or return None if nothing matched."""
    for rule in rules:
        if rule.predicate(ctx):
            logger.info("Message from %s matched rule '%s'", ctx.user_id, rule.name)
            return rule.respond(ctx)
    return None

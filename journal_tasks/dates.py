"""Resolution of spoken date expressions into calendar dates."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


RELATIVE_KEYWORDS = {
    "today": 0,
    "tomorrow": 1,
    "next week": 7,
    "next month": 30,
}

# Months are a flat 30 days.
UNIT_DAYS = {
    "day": 1,
    "week": 7,
    "month": 30,
}

WEEKDAY_INDEX = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

MONTH_NUMBERS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}
MONTH_NAME_MAP = {**MONTH_NUMBERS, **{name[:3]: number for name, number in MONTH_NUMBERS.items()}}

DATE_FORMATS = [
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%Y-%m-%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d %Y",
    "%b %d %Y",
]

LONG_MONTHS = "january|february|march|april|may|june|july|august|september|october|november|december"
SHORT_MONTHS = "jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec"
WEEKDAYS = "monday|tuesday|wednesday|thursday|friday|saturday|sunday"

ORDINAL_RE = re.compile(r"(\d)(?:st|nd|rd|th)\b", flags=re.IGNORECASE)
LEADING_ON_RE = re.compile(r"^on\s+", flags=re.IGNORECASE)
RELATIVE_OFFSET_RE = re.compile(r"^in\s+(\d+)\s+(day|week|month)s?$")

Resolver = Callable[[re.Match, date], Optional[date]]


@dataclass(frozen=True)
class DateRule:
    """A date pattern together with the function that turns a match into a date."""

    name: str
    pattern: re.Pattern
    resolver: Resolver


# ----------------------------------------------------------------------
# Resolvers
# ----------------------------------------------------------------------

def normalise_span(text: str) -> str:
    cleaned = LEADING_ON_RE.sub("", text.strip())
    cleaned = ORDINAL_RE.sub(r"\1", cleaned)
    return re.sub(r"\s+", " ", cleaned).lower()


def parse_relative(text: str, today: date) -> Optional[date]:
    """Interpret ``today``/``tomorrow``/``next week``/``in N units``."""

    if text in RELATIVE_KEYWORDS:
        return today + timedelta(days=RELATIVE_KEYWORDS[text])

    offset = RELATIVE_OFFSET_RE.match(text)
    if offset:
        amount = int(offset.group(1))
        return today + timedelta(days=amount * UNIT_DAYS[offset.group(2)])
    return None


def parse_explicit(text: str) -> Optional[date]:
    for pattern in DATE_FORMATS:
        try:
            return datetime.strptime(text, pattern).date()
        except ValueError:
            continue
    return None


def date_from_groups(match: re.Match) -> Optional[date]:
    groups = match.groupdict()
    if not all(groups.get(key) for key in ("day", "month", "year")):
        return None
    month_token = groups["month"].lower()
    if month_token.isdigit():
        month = int(month_token, 10)
    else:
        month = MONTH_NAME_MAP.get(month_token)
        if month is None:
            return None
    return date(int(groups["year"], 10), month, int(groups["day"], 10))


def resolve_generic(match: re.Match, today: date) -> Optional[date]:
    """Relative interpretation first, then explicit formats, then the raw groups."""

    text = normalise_span(match.group(0))
    resolved = parse_relative(text, today)
    if resolved is None:
        resolved = parse_explicit(text)
    if resolved is None:
        resolved = date_from_groups(match)
    return resolved


def resolve_weekday(match: re.Match, today: date) -> Optional[date]:
    """Next occurrence of the named weekday; ``this`` accepts today."""

    weekday_index = WEEKDAY_INDEX.get(match.group("weekday").lower())
    if weekday_index is None:
        return None
    qualifier = (match.group("qualifier") or "").lower()
    days_ahead = (weekday_index - today.weekday()) % 7
    if days_ahead == 0 and qualifier != "this":
        days_ahead = 7
    return today + timedelta(days=days_ahead)


def build_rules(resolve_weekdays: bool = False) -> Tuple[DateRule, ...]:
    """Return the ordered rule table.

    Weekday mentions are always matched so that they claim their span, but they
    only produce a date when ``resolve_weekdays`` is enabled.
    """

    flags = re.ASCII | re.IGNORECASE
    return (
        DateRule(
            "long_month",
            re.compile(
                rf"\b(?:on\s+)?(?P<day>\d{{1,2}})(?:st|nd|rd|th)?\s+(?P<month>{LONG_MONTHS})\s+(?P<year>\d{{4}})\b",
                flags,
            ),
            resolve_generic,
        ),
        DateRule(
            "short_month",
            re.compile(
                rf"\b(?:on\s+)?(?P<day>\d{{1,2}})(?:st|nd|rd|th)?\s+(?P<month>{SHORT_MONTHS})\s+(?P<year>\d{{4}})\b",
                flags,
            ),
            resolve_generic,
        ),
        DateRule(
            "slash",
            re.compile(r"\b(?:on\s+)?(?P<day>\d{1,2})/(?P<month>\d{1,2})/(?P<year>\d{4})\b", flags),
            resolve_generic,
        ),
        DateRule(
            "iso",
            re.compile(r"\b(?:on\s+)?(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})\b", flags),
            resolve_generic,
        ),
        DateRule(
            "relative_keyword",
            re.compile(r"\b(?:today|tomorrow|next\s+week|next\s+month)\b", flags),
            resolve_generic,
        ),
        DateRule(
            "relative_offset",
            re.compile(r"\bin\s+\d+\s+(?:days?|weeks?|months?)\b", flags),
            resolve_generic,
        ),
        DateRule(
            "weekday",
            re.compile(rf"\b(?:on\s+)?(?:(?P<qualifier>this|next)\s+)?(?P<weekday>{WEEKDAYS})\b", flags),
            resolve_weekday if resolve_weekdays else resolve_generic,
        ),
    )


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

class DateResolver:
    """Scan a sentence with the rule table and collect upcoming dates."""

    def __init__(self, resolve_weekdays: bool = False, rules: Optional[Sequence[DateRule]] = None) -> None:
        self._rules = tuple(rules) if rules is not None else build_rules(resolve_weekdays)

    def resolve(self, sentence: str, today: date) -> List[date]:
        """Return the dates mentioned in ``sentence`` that fall on or after ``today``.

        Earlier rules claim their spans first; later matches that overlap a claimed
        span are ignored. The result is ordered by position in the sentence.
        """

        claimed: List[Tuple[int, int]] = []
        found: List[Tuple[int, date]] = []
        for rule in self._rules:
            for match in rule.pattern.finditer(sentence):
                start, end = match.span()
                if any(start < other_end and other_start < end for other_start, other_end in claimed):
                    continue
                claimed.append((start, end))
                try:
                    resolved = rule.resolver(match, today)
                except (ValueError, OverflowError) as exc:
                    logger.debug("Dropping unparseable %s span %r: %s", rule.name, match.group(0), exc)
                    continue
                if resolved is None:
                    logger.debug("No date for %s span %r", rule.name, match.group(0))
                    continue
                if resolved < today:
                    logger.debug("Dropping past date %s from span %r", resolved, match.group(0))
                    continue
                found.append((start, resolved))

        found.sort(key=lambda item: item[0])
        return [resolved for _, resolved in found]

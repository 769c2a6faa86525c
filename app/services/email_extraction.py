from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

_WORK_EMAIL_TYPES = {"work", "professional", "business"}
_WITHHELD_TOKENS = {"true"}
_LOCKED_EMAIL_PREFIX = "email_not_unlocked@"


def _is_withheld(value: Any) -> bool:
    if value is True:
        return True
    if not isinstance(value, str):
        return False
    lowered = value.strip().lower()
    return lowered in _WITHHELD_TOKENS or lowered.startswith(_LOCKED_EMAIL_PREFIX)


def _usable_email(value: Any) -> str | None:
    if not isinstance(value, str) or _is_withheld(value):
        return None
    cleaned = value.strip()
    if "@" not in cleaned:
        return None
    return cleaned


def _typed_entry(entry: Any) -> tuple[str | None, str | None]:
    if isinstance(entry, str):
        return _usable_email(entry), None
    if not isinstance(entry, dict):
        return None, None
    address = _usable_email(entry.get("address")) or _usable_email(entry.get("email"))
    entry_type = entry.get("type")
    return address, entry_type.strip().lower() if isinstance(entry_type, str) else None


def _from_typed_emails(value: Any) -> str | None:
    if not isinstance(value, list):
        return None
    entries = [_typed_entry(entry) for entry in value]
    for address, entry_type in entries:
        if address and entry_type in _WORK_EMAIL_TYPES:
            return address
    for address, _ in entries:
        if address:
            return address
    return None


def _from_personal_emails(value: Any) -> str | None:
    if not isinstance(value, list):
        return None
    for item in value:
        candidate = _usable_email(item)
        if candidate:
            return candidate
    return None


def extract_work_email(record: Any) -> str | None:
    """Pick the best work email from one raw provider record.

    Sources are tried in order: ``work_email``, ``email``, typed ``emails``
    entries (work/professional/business types first), ``business_email`` and
    finally ``personal_emails``. Booleans and withheld placeholders never count
    as an address, so the result is either None or a string containing "@".
    The record is only read.
    """
    if not isinstance(record, dict):
        return None

    if _is_withheld(record.get("work_email")):
        logger.debug("Provider withheld work email; trying other sources")

    return (
        _usable_email(record.get("work_email"))
        or _usable_email(record.get("email"))
        or _from_typed_emails(record.get("emails"))
        or _usable_email(record.get("business_email"))
        or _from_personal_emails(record.get("personal_emails"))
    )

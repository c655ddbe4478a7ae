"""
Input sanitization and validation for visitor-supplied text.

The same functions run in the client library (as a UX shortcut) and in the
API (as the authority). Each violated rule raises a field-scoped
ValidationError; nothing is ever silently truncated.
"""

from __future__ import annotations

import html
import re

from studio_eighty7.domain.entities import ContactSubmission
from studio_eighty7.domain.errors import ValidationError
from studio_eighty7.rules.loader import default_rules
from studio_eighty7.rules.models import RangeRule, ValidationRules

CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")
WHITESPACE_RE = re.compile(r"\s+")
ANGLE_BRACKETS_RE = re.compile(r"[<>]")
TAG_RE = re.compile(r"<[^>]*>")

# Applied in order; block elements go before the generic tag pattern so their
# inner text is dropped along with the tags.
DANGEROUS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"<\s*script.*?>.*?<\s*/\s*script\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<\s*iframe.*?>.*?<\s*/\s*iframe\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<\s*embed.*?>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<\s*object.*?>", re.IGNORECASE | re.DOTALL),
    TAG_RE,
    ANGLE_BRACKETS_RE,
    re.compile(r"(?:javascript|data|vbscript)\s*:", re.IGNORECASE),
    re.compile(r"\bon\w+\s*=", re.IGNORECASE),
    re.compile(r"--"),
    re.compile(r"/\*.*?\*/", re.DOTALL),
    re.compile(r"\$\{.*?\}", re.DOTALL),
    re.compile(r"\\[\\nrt]"),
    CONTROL_CHARS_RE,
)

NAME_RE = re.compile(r"^[a-zA-Z0-9\s\-.'’]+$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

CONTACT_FIELDS = ("name", "email", "message")


# --- Pure text transforms ---


def collapse_whitespace(text: str) -> str:
    """Trim and collapse internal whitespace runs to a single space."""
    return WHITESPACE_RE.sub(" ", text).strip()


def _strip_once(text: str) -> str:
    for pattern in DANGEROUS_PATTERNS:
        text = pattern.sub("", text)
    return text


def sanitize_text(text: str) -> str:
    """
    Remove markup, script-like patterns and control characters.

    Stripping repeats until the text is stable, so fragments that join into a
    new pattern after one pass (``javajavascript:script:``) are removed too.
    """
    current = text
    while True:
        stripped = _strip_once(current)
        if stripped == current:
            break
        current = stripped
    return collapse_whitespace(current)


def strip_markup(text: str) -> str:
    """Light pass for structured fields: tags, angle brackets, control chars."""
    text = TAG_RE.sub("", text)
    text = ANGLE_BRACKETS_RE.sub("", text)
    return CONTROL_CHARS_RE.sub("", text)


# --- Field validators ---


def _rules(rules: ValidationRules | None) -> ValidationRules:
    return rules if rules is not None else default_rules().validation


def _require_text(value: object, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(field, f"{field.capitalize()} is required")
    return value


def _check_bounds(value: str, field: str, bounds: RangeRule) -> None:
    label = field.capitalize()
    if len(value) < bounds.min:
        raise ValidationError(field, f"{label} must be at least {bounds.min} characters")
    if len(value) > bounds.max:
        raise ValidationError(field, f"{label} must be {bounds.max} characters or less")


def sanitize_topic(value: object, rules: ValidationRules | None = None) -> str:
    """Validate and clean a generation topic."""
    bounds = _rules(rules).topic
    trimmed = collapse_whitespace(_require_text(value, "topic"))

    if not trimmed:
        raise ValidationError("topic", "Topic cannot be empty")
    _check_bounds(trimmed, "topic", bounds)

    cleaned = sanitize_text(trimmed)
    if not cleaned:
        raise ValidationError("topic", "Please provide a valid topic")
    return cleaned


def sanitize_name(value: object, rules: ValidationRules | None = None) -> str:
    bounds = _rules(rules).name
    cleaned = sanitize_text(_require_text(value, "name"))

    _check_bounds(cleaned, "name", bounds)
    if not NAME_RE.match(cleaned):
        raise ValidationError("name", "Name contains invalid characters")
    return cleaned


def sanitize_email(value: object, rules: ValidationRules | None = None) -> str:
    bounds = _rules(rules).email
    cleaned = strip_markup(_require_text(value, "email")).strip().lower()

    if not cleaned:
        raise ValidationError("email", "Email is required")
    if len(cleaned) > bounds.max:
        raise ValidationError("email", "Email is too long")
    if not EMAIL_RE.match(cleaned):
        raise ValidationError("email", "Please provide a valid email address")
    return cleaned


def sanitize_message(value: object, rules: ValidationRules | None = None) -> str:
    """Bounds apply to the visitor's text; escaping happens afterwards."""
    bounds = _rules(rules).message
    cleaned = collapse_whitespace(CONTROL_CHARS_RE.sub(" ", _require_text(value, "message")))

    _check_bounds(cleaned, "message", bounds)
    return html.escape(cleaned, quote=False)


_FIELD_SANITIZERS = {
    "name": sanitize_name,
    "email": sanitize_email,
    "message": sanitize_message,
}


def collect_contact_errors(
    fields: dict[str, object],
    rules: ValidationRules | None = None,
) -> dict[str, str]:
    """
    Validate every contact field independently.

    Returns a mapping of field name to message for each failing field, in
    form order. An empty mapping means the submission is valid.
    """
    errors: dict[str, str] = {}
    for field in CONTACT_FIELDS:
        try:
            _FIELD_SANITIZERS[field](fields.get(field), rules)
        except ValidationError as e:
            errors[field] = e.message
    return errors


def validate_contact(
    fields: dict[str, object],
    rules: ValidationRules | None = None,
) -> ContactSubmission:
    """
    Validate a contact submission, raising on the first failing field.

    Fields are checked in form order: name, email, message.
    """
    return ContactSubmission(
        name=sanitize_name(fields.get("name"), rules),
        email=sanitize_email(fields.get("email"), rules),
        message=sanitize_message(fields.get("message"), rules),
    )

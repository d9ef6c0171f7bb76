"""Input validation run before any request is sent.

Every function returns None on success and raises ValidationError naming the
offending field otherwise. Blank values (None, "", empty collections) are
treated the same as missing ones.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from email_validator import EmailNotValidError, validate_email

from .exceptions import ValidationError
from .models import EmailSend, SendOptions, as_email_send, as_send_options

MAX_TAG_LENGTH = 64
MAX_LOOKUP_EMAIL_LENGTH = 256

_UNTAG_PATTERN = re.compile(r"[A-Za-z0-9_-]*[A-Za-z0-9][A-Za-z0-9_-]*", re.ASCII)


def validate_email_address(value: Any, field: str = "email") -> None:
    if not value or not isinstance(value, str):
        raise ValidationError(f"{field} must be a valid email address")
    try:
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError as e:
        raise ValidationError(f"{field} must be a valid email address: {e}") from e


def validate_status_email(email: Any) -> None:
    """Lightweight check used for lookups by email."""
    if not email or not isinstance(email, str) or len(email) > MAX_LOOKUP_EMAIL_LENGTH:
        raise ValidationError("Valid email required for subscriber retrieval")


def validate_subscriber(data: Mapping[str, Any]) -> None:
    _require_mapping(data, "subscriber data")
    validate_email_address(data.get("email"))
    tags = data.get("tags")
    if tags is not None:
        if not isinstance(tags, (list, tuple)):
            raise ValidationError("tags must be a list if it is given")
        if not all(isinstance(tag, str) for tag in tags):
            raise ValidationError("All tags must be strings")


def validate_unsubscribe(data: Mapping[str, Any]) -> None:
    _require_mapping(data, "subscriber data")
    validate_email_address(data.get("email"))


def validate_tag(data: Mapping[str, Any]) -> None:
    _require_mapping(data, "subscriber data")
    validate_email_address(data.get("email"))
    tag = data.get("tag")
    if not tag or not isinstance(tag, str):
        raise ValidationError("A tag name must be provided")


def validate_untag(data: Mapping[str, Any]) -> None:
    _require_mapping(data, "subscriber data")
    validate_email_address(data.get("email"))
    tag = data.get("tag")
    if (
        not tag
        or not isinstance(tag, str)
        or len(tag) > MAX_TAG_LENGTH
        or not _UNTAG_PATTERN.fullmatch(tag)
    ):
        raise ValidationError(
            "A valid tag name must be provided (letters, digits, '-' or '_', "
            f"at most {MAX_TAG_LENGTH} characters)"
        )


def validate_send_single_email(email_data: Any, opts: Any = None) -> None:
    """Type-check a single email send.

    Accepts mappings with the wire (camelCase) keys or EmailSend/SendOptions.
    """
    email = as_email_send(email_data)
    options = as_send_options(opts)
    _validate_email_send(email)
    _validate_send_options(options)


def _validate_email_send(email: EmailSend) -> None:
    if not email.to_email_address or not isinstance(email.to_email_address, str):
        raise ValidationError("toEmailAddress must be a string")

    if not email.template_id:
        if not email.subject or not isinstance(email.subject, str):
            raise ValidationError("subject must be a string when templateId is not given")
        body = email.body
        if body is None or (body.text is None and body.html is None):
            raise ValidationError("body with text or html is required when templateId is not given")
        for key in ("text", "html"):
            value = getattr(body, key)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"Value of {key} must be a string")
        return

    if not isinstance(email.template_id, str):
        raise ValidationError("templateId must be a string if it is given")
    if email.subject or email.body is not None:
        raise ValidationError("subject and body cannot be combined with templateId")


def _validate_send_options(options: SendOptions) -> None:
    if options.from_email_address is not None and not isinstance(
        options.from_email_address, str
    ):
        raise ValidationError("fromEmailAddress must be a string if it is given")

    wait = options.wait_in_seconds
    if wait is not None and (isinstance(wait, bool) or not isinstance(wait, int) or wait < 0):
        raise ValidationError("waitInSeconds must be a non-negative integer if it is given")

    if options.tag_on_click is not None and not isinstance(options.tag_on_click, str):
        raise ValidationError("tagOnClick must be a tag string if it is given")

    reason = options.tag_reason
    if reason is not None:
        if isinstance(reason, (list, tuple)):
            if not all(isinstance(tag, str) for tag in reason):
                raise ValidationError("All tags in tagReason must be strings")
        elif not isinstance(reason, str):
            raise ValidationError("tagReason must be a string or list of strings")

    auto_save = options.auto_save_unknown_subscriber
    if auto_save is not None and not isinstance(auto_save, bool):
        raise ValidationError("autoSaveUnknownSubscriber must be a boolean if it is given")


def _require_mapping(data: Any, name: str) -> None:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{name} must be a mapping")

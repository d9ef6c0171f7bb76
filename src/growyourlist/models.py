"""Typed request payloads and adapters for mapping input."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from .exceptions import ValidationError


@dataclass
class EmailBody:
    """Inline email content. At least one of ``text`` and ``html`` is expected."""

    text: str | None = None
    html: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return _compact({"text": self.text, "html": self.html})


@dataclass
class EmailSend:
    """A single email to one recipient.

    Either ``template_id`` is given, or ``subject`` and ``body`` are. Addresses
    may be bare (``test@example.org``) or named (``Test <test@example.org>``).
    """

    to_email_address: str
    template_id: str | None = None
    subject: str | None = None
    body: EmailBody | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload = dict(self.extra)
        payload.update(
            _compact(
                {
                    "toEmailAddress": self.to_email_address,
                    "templateId": self.template_id,
                    "subject": self.subject,
                }
            )
        )
        if self.body is not None:
            payload["body"] = self.body.to_payload()
        return payload


@dataclass
class SendOptions:
    """Options for a single email send. Unset fields are not sent.

    Defaults applied by the service when a field is unset:
        from_email_address: the list's default source address.
        wait_in_seconds: no delay.
        tag_on_click: no tag is added on click.
        tag_reason: the queued email is not tied to any tag.
        auto_save_unknown_subscriber: unknown recipients are not saved.
    """

    from_email_address: str | None = None
    wait_in_seconds: int | None = None
    tag_on_click: str | None = None
    tag_reason: str | list[str] | None = None
    auto_save_unknown_subscriber: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload = dict(self.extra)
        payload.update(
            _compact(
                {
                    "fromEmailAddress": self.from_email_address,
                    "waitInSeconds": self.wait_in_seconds,
                    "tagOnClick": self.tag_on_click,
                    "tagReason": self.tag_reason,
                    "autoSaveUnknownSubscriber": self.auto_save_unknown_subscriber,
                }
            )
        )
        return payload


@dataclass
class Trigger:
    """The automation that caused a subscriber event."""

    type: str
    id: str | None = None

    def to_params(self) -> dict[str, str] | None:
        """Query params for optional triggers, or None if the trigger is incomplete."""
        if not self.type or not self.id:
            return None
        return {"triggerType": self.type, "triggerId": self.id}


@dataclass
class DeliveryTimePreference:
    """Subscriber-local time of day used by the service to schedule sends."""

    hour: int
    minute: int
    timezone: str
    honored: bool = True

    def to_payload(self) -> dict[str, int]:
        return {"hour": self.hour, "minute": self.minute}


_EMAIL_FIELDS = {
    "toEmailAddress": "to_email_address",
    "templateId": "template_id",
    "subject": "subject",
}

_OPTION_FIELDS = {
    "fromEmailAddress": "from_email_address",
    "waitInSeconds": "wait_in_seconds",
    "tagOnClick": "tag_on_click",
    "tagReason": "tag_reason",
    "autoSaveUnknownSubscriber": "auto_save_unknown_subscriber",
}

_BODY_KEYS = ("text", "html")


def as_email_body(obj: Any) -> EmailBody | None:
    if obj is None or isinstance(obj, EmailBody):
        return obj
    if not isinstance(obj, Mapping):
        raise ValidationError("body must be a mapping or EmailBody")
    for key in obj:
        if key not in _BODY_KEYS:
            raise ValidationError('Only "html" and "text" are allowed on body')
    return EmailBody(text=obj.get("text"), html=obj.get("html"))


def as_email_send(obj: Any) -> EmailSend:
    """Build an EmailSend from a camelCase mapping, or return it unchanged."""
    if isinstance(obj, EmailSend):
        if obj.body is not None and not isinstance(obj.body, EmailBody):
            return replace(obj, body=as_email_body(obj.body))
        return obj
    if not isinstance(obj, Mapping):
        raise ValidationError("email data must be a mapping or EmailSend")
    kwargs: dict[str, Any] = {"extra": {}}
    for key, value in obj.items():
        if key in _EMAIL_FIELDS:
            kwargs[_EMAIL_FIELDS[key]] = value
        elif key != "body":
            kwargs["extra"][key] = value
    kwargs.setdefault("to_email_address", None)
    kwargs["body"] = as_email_body(obj.get("body"))
    return EmailSend(**kwargs)


def as_send_options(obj: Any) -> SendOptions:
    """Build SendOptions from a camelCase mapping, or return it unchanged."""
    if obj is None:
        return SendOptions()
    if isinstance(obj, SendOptions):
        return obj
    if not isinstance(obj, Mapping):
        raise ValidationError("opts must be a mapping or SendOptions")
    kwargs: dict[str, Any] = {"extra": {}}
    for key, value in obj.items():
        if key in _OPTION_FIELDS:
            kwargs[_OPTION_FIELDS[key]] = value
        else:
            kwargs["extra"][key] = value
    return SendOptions(**kwargs)


def as_trigger(obj: Any) -> Trigger | None:
    """Accept a Trigger, a ``{"type", "id"}`` mapping, or None."""
    if obj is None or isinstance(obj, Trigger):
        return obj
    if not isinstance(obj, Mapping):
        raise ValidationError("trigger must be a mapping or Trigger")
    return Trigger(type=obj.get("type"), id=obj.get("id"))


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}

"""GrowYourList API client."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import httpx

from .delivery import DEFAULT_TIMEZONE, generate_delivery_time_preference, load_zone
from .exceptions import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    ForbiddenError,
    GylError,
    NotFoundError,
    RateLimitError,
    TransportError,
    ValidationError,
)
from .models import EmailSend, SendOptions, Trigger, as_email_send, as_send_options, as_trigger
from .validation import (
    validate_send_single_email,
    validate_status_email,
    validate_subscriber,
    validate_tag,
    validate_unsubscribe,
    validate_untag,
)

logger = logging.getLogger(__name__)

AUTH_HEADER = "X-Gyl-Auth-Key"
DEFAULT_TIMEOUT = 5.0

# Passing this as ``on_not_found`` keeps the NotFoundError instead of a fallback.
ON_NOT_FOUND_ERROR = "error"


class GylClient:
    """Client for interacting with the GrowYourList API.

    Example:
        ```python
        from growyourlist import GylClient

        with GylClient(
            api_key="your-api-key",
            base_url="https://admin-api.your-list.example.com"
        ) as client:
            # Create a subscriber
            client.subscribers.post(
                {"email": "person@example.com", "timezone": "Europe/Paris"}
            )

            # Look up a subscriber, returning None if they don't exist
            status = client.subscribers.get_status(
                "person@example.com", on_not_found=None
            )

            # Send a template email
            client.emails.send_single(
                {"toEmailAddress": "person@example.com", "templateId": "Welcome"},
                {"waitInSeconds": 60, "tagReason": "list-default"},
            )
        ```
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        default_timezone: str = DEFAULT_TIMEZONE,
    ):
        """Initialize the GrowYourList client.

        Args:
            api_key: Your GrowYourList API key.
            base_url: Base URL of the admin API. Trailing slashes are ignored.
            timeout: Request timeout in seconds.
            default_timezone: Zone used for delivery time preferences when a
                subscriber has no valid timezone.
        """
        if not base_url:
            raise ConfigurationError("base_url is required")
        if load_zone(default_timezone) is None:
            raise ConfigurationError(f"Unknown default timezone: {default_timezone!r}")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_timezone = default_timezone

        self._client = httpx.Client(
            base_url=self.base_url,
            headers={
                AUTH_HEADER: self.api_key,
                "User-Agent": "growyourlist-python/0.1.0",
            },
            timeout=timeout,
        )

        # Resource endpoints
        self.subscribers = SubscribersResource(self)
        self.emails = EmailsResource(self)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GylClient:
        """Create a client from environment variables.

        ``GYL_API_KEY`` and ``GYL_API_URL`` are required. ``GYL_TIMEOUT`` and
        ``GYL_DEFAULT_TIMEZONE`` are optional.
        """
        env = os.environ if environ is None else environ
        api_key = env.get("GYL_API_KEY")
        base_url = env.get("GYL_API_URL")
        if not api_key:
            raise ConfigurationError("GYL_API_KEY is not set")
        if not base_url:
            raise ConfigurationError("GYL_API_URL is not set")

        timeout = DEFAULT_TIMEOUT
        if env.get("GYL_TIMEOUT"):
            try:
                timeout = float(env["GYL_TIMEOUT"])
            except ValueError as e:
                raise ConfigurationError(f"GYL_TIMEOUT must be a number: {e}") from e
        return cls(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            default_timezone=env.get("GYL_DEFAULT_TIMEZONE") or DEFAULT_TIMEZONE,
        )

    def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> str:
        """Make an API request and return the raw response body."""
        return self._dispatch(method, path, json=json, params=params).text

    def _request_json(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request and decode the JSON response body."""
        response = self._dispatch(method, path, params=params)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise GylError(f"Invalid JSON in API response: {e}") from e

    def _dispatch(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        if not path.startswith("/"):
            raise ValueError(f"path must start with '/': {path!r}")

        headers = None
        if method in ("POST", "PUT"):
            headers = {"Content-Type": "application/json"}
        else:
            json = None

        try:
            response = self._client.request(
                method=method,
                url=path,
                json=json,
                params=params,
                headers=headers,
            )
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(f"Failed to interact with API: {e}") from e

        logger.debug("%s %s -> %s", method, path, response.status_code)
        self._handle_response(response)
        return response

    def _handle_response(self, response: httpx.Response) -> None:
        """Raise for anything outside [200, 400)."""
        status = response.status_code
        if not 100 <= status <= 999:
            raise TransportError("Failed to interact with API: no response code.")
        if 200 <= status < 400:
            return

        body = response.text
        if status == 401:
            raise AuthenticationError(body)
        if status == 403:
            raise ForbiddenError(body)
        if status == 404:
            raise NotFoundError(body)
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                body,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        raise ApiError(body, status_code=status)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> GylClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class SubscribersResource:
    """Subscribers API resource."""

    def __init__(self, client: GylClient):
        self._client = client

    def post(
        self,
        data: Mapping[str, Any],
        trigger: Trigger | Mapping[str, Any] | None = None,
    ) -> str:
        """Create a subscriber.

        A delivery time preference is derived from ``data["timezone"]`` and
        ``tags`` defaults to an empty list; values in ``data`` take precedence.

        Args:
            data: Subscriber fields. ``email`` is required.
            trigger: Optional automation reference, sent only when it has both
                a type and an id.

        Returns:
            Raw response body.
        """
        validate_subscriber(data)
        params = _trigger_params(trigger)
        preference = generate_delivery_time_preference(
            data.get("timezone"),
            default_timezone=self._client.default_timezone,
        )
        payload: dict[str, Any] = {
            "deliveryTimePreference": preference.to_payload(),
            "tags": [],
        }
        payload.update({key: value for key, value in data.items() if value is not None})
        return self._client._request("POST", "/subscriber", json=payload, params=params)

    def trigger_autoresponder(
        self,
        data: Mapping[str, Any],
        trigger: Trigger | Mapping[str, Any],
    ) -> str:
        """Trigger an autoresponder for a subscriber.

        Args:
            data: Subscriber identification, sent as the request body.
            trigger: Automation reference. ``type`` is required.

        Returns:
            Raw response body.
        """
        if not isinstance(data, Mapping):
            raise ValidationError("subscriber data must be a mapping")
        trig = as_trigger(trigger)
        if trig is None or not trig.type:
            raise ValidationError("A trigger with a type is required")
        params = {"triggerType": trig.type, "triggerId": trig.id or ""}
        return self._client._request(
            "POST", "/subscriber/trigger-autoresponder", json=dict(data), params=params
        )

    def get_status(self, email: str, on_not_found: Any = ON_NOT_FOUND_ERROR) -> Any:
        """Get a subscriber's status by email.

        The status has the shape::

            {
                "subscriberId": "...",
                "email": "...",          # lowercase, used for comparisons
                "displayEmail": "...",   # original casing, used when sending
                "tags": ["tag-1", "tag-2"],
                "confirmed": true,
                "unsubscribed": false
            }

        Args:
            email: Subscriber email.
            on_not_found: Value returned when the subscriber does not exist.
                The default, "error", raises NotFoundError instead.

        Returns:
            Decoded status, or ``on_not_found``.
        """
        validate_status_email(email)
        try:
            return self._client._request_json(
                "GET", "/subscriber/status", params={"email": email}
            )
        except NotFoundError:
            if on_not_found != ON_NOT_FOUND_ERROR:
                return on_not_found
            raise

    def get(self, email: str, fallback: Any = None) -> Any:
        """Get a full subscriber by email.

        Args:
            email: Subscriber email.
            fallback: Value returned when the subscriber does not exist.

        Returns:
            Decoded subscriber, or ``fallback``.
        """
        validate_status_email(email)
        try:
            return self._client._request_json("GET", "/subscriber", params={"email": email})
        except NotFoundError:
            return fallback

    def delete(self, subscriber_id: str) -> str:
        """Delete a subscriber by ID.

        Args:
            subscriber_id: Subscriber ID.

        Returns:
            Raw response body.
        """
        if not subscriber_id or not isinstance(subscriber_id, str):
            raise ValidationError("subscriberId must be a non-empty string")
        return self._client._request(
            "DELETE", "/subscriber", params={"subscriberId": subscriber_id}
        )

    def unsubscribe(self, data: Mapping[str, Any]) -> str:
        """Unsubscribe a subscriber. ``data`` requires ``email``."""
        validate_unsubscribe(data)
        return self._client._request("POST", "/subscriber/unsubscribe", json=dict(data))

    def tag(
        self,
        data: Mapping[str, Any],
        trigger: Trigger | Mapping[str, Any] | None = None,
        on_not_found: Any = ON_NOT_FOUND_ERROR,
    ) -> Any:
        """Tag a subscriber.

        Args:
            data: Requires ``email`` and ``tag``.
            trigger: Optional automation reference.
            on_not_found: Value returned when the subscriber does not exist.
                The default, "error", raises NotFoundError instead.

        Returns:
            Raw response body, or ``on_not_found``.
        """
        validate_tag(data)
        params = _trigger_params(trigger)
        try:
            return self._client._request(
                "POST", "/subscriber/tag", json=dict(data), params=params
            )
        except NotFoundError:
            if on_not_found != ON_NOT_FOUND_ERROR:
                return on_not_found
            raise

    def untag(self, data: Mapping[str, Any]) -> str:
        """Untag a subscriber. ``data`` requires ``email`` and ``tag``."""
        validate_untag(data)
        return self._client._request("POST", "/subscriber/untag", json=dict(data))


class EmailsResource:
    """Single email sends."""

    def __init__(self, client: GylClient):
        self._client = client

    def send_single(
        self,
        email_data: EmailSend | Mapping[str, Any],
        opts: SendOptions | Mapping[str, Any] | None = None,
    ) -> str:
        """Send a single email to a single recipient.

        Args:
            email_data: Either a template email
                (``{"toEmailAddress": ..., "templateId": ...}``) or an inline
                one (``{"toEmailAddress": ..., "subject": ..., "body": {"text": ..., "html": ...}}``).
            opts: Optional SendOptions or mapping with ``fromEmailAddress``,
                ``waitInSeconds``, ``tagOnClick``, ``tagReason`` and
                ``autoSaveUnknownSubscriber``.

        Returns:
            Raw response body.
        """
        email = as_email_send(email_data)
        options = as_send_options(opts)
        validate_send_single_email(email, options)

        payload = email.to_payload()
        payload["opts"] = options.to_payload()
        return self._client._request("POST", "/single-email-send", json=payload)


def _trigger_params(trigger: Trigger | Mapping[str, Any] | None) -> dict[str, str] | None:
    trig = as_trigger(trigger)
    return trig.to_params() if trig is not None else None

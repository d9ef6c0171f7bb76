"""GrowYourList Python SDK - Subscriber lists and single email sends."""

import logging

from .client import GylClient, ON_NOT_FOUND_ERROR
from .delivery import generate_delivery_time_preference
from .helpers import exists_and_has_tag
from .models import DeliveryTimePreference, EmailBody, EmailSend, SendOptions, Trigger
from .exceptions import (
    GylError,
    ConfigurationError,
    ValidationError,
    TransportError,
    ApiError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "GylClient",
    "ON_NOT_FOUND_ERROR",
    "generate_delivery_time_preference",
    "exists_and_has_tag",
    "DeliveryTimePreference",
    "EmailBody",
    "EmailSend",
    "SendOptions",
    "Trigger",
    "GylError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "ApiError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
]

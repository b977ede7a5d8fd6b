"""Twilio WhatsApp Transport Layer - Module Exports

The router lives in transport.twilio.webhook and is imported by main.py.
"""

from .handler import ReplyHandler
from .normalize import (
    NormalizationError,
    normalize_inbound,
    session_id_for,
)
from .schemas import InboundMessage, OutboundPart
from .security import verify_signature
from .translate import TranslationError, parse_fulfillment_messages, translate
from .twiml import APOLOGY_TEXT, build_messaging_response, render_apology, render_twiml

__all__ = [
    # Schemas
    "InboundMessage",
    "OutboundPart",
    # Normalization
    "normalize_inbound",
    "session_id_for",
    "NormalizationError",
    # Translation
    "translate",
    "parse_fulfillment_messages",
    "TranslationError",
    # Rendering
    "render_twiml",
    "render_apology",
    "build_messaging_response",
    "APOLOGY_TEXT",
    # Security
    "verify_signature",
    # Handler
    "ReplyHandler",
]

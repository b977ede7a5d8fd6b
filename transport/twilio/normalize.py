"""
Twilio Input Normalization

PURE CONVERSION - NO LOGIC, NO NLU CALLS

Converts the Twilio WhatsApp webhook form into a canonical InboundMessage.
- Body: forwarded verbatim, no trimming or enrichment
- From: kept verbatim; session ids are derived separately
"""

import re
from typing import Mapping

from .schemas import InboundMessage

_CHANNEL_PREFIX = "whatsapp:"
_SESSION_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]")


class NormalizationError(Exception):
    """Input normalization failed."""
    pass


def normalize_inbound(form: Mapping[str, str]) -> InboundMessage:
    """
    Convert a Twilio webhook form into InboundMessage.

    Args:
        form: Parsed application/x-www-form-urlencoded body

    Returns:
        InboundMessage ready for the reply handler

    Raises:
        NormalizationError: No message body, or no sender
    """

    body = form.get("Body") or ""
    if not body:
        raise NormalizationError("No message received")

    sender_id = (form.get("From") or "").strip()
    if not sender_id:
        raise NormalizationError("Inbound message missing 'From'")

    try:
        num_media = int(form.get("NumMedia") or 0)
    except ValueError:
        raise NormalizationError(f"Invalid NumMedia: {form.get('NumMedia')!r}")

    return InboundMessage(
        body=body,
        sender_id=sender_id,
        message_sid=form.get("MessageSid") or None,
        profile_name=form.get("ProfileName") or None,
        num_media=num_media,
    )


def session_id_for(sender_id: str) -> str:
    """
    Derive the NLU session id from a Twilio sender.

    "whatsapp:+14155550100" -> "14155550100"
    """
    if sender_id.startswith(_CHANNEL_PREFIX):
        sender_id = sender_id[len(_CHANNEL_PREFIX):]

    session_id = _SESSION_UNSAFE_RE.sub("", sender_id)
    if not session_id:
        raise NormalizationError(f"Cannot derive session id from sender: {sender_id!r}")
    return session_id

"""
Fulfillment -> Outbound Translation

Maps NLU fulfillment messages onto outbound WhatsApp message parts.

Per entry, checked independently and in this order:
- text shape    -> one part, body = first string
- payload shape -> one part, media = mediaUrl, body = text (either, both, neither)

Entries with neither shape contribute nothing. Output order always follows
input order; parts are never merged or deduplicated.
"""

from typing import Any, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from nlu.schemas import FulfillmentEntry, PayloadEntry, PayloadValue
from .schemas import OutboundPart

MEDIA_URL_FIELD = "mediaUrl"
TEXT_FIELD = "text"


class TranslationError(Exception):
    """A fulfillment message could not be translated."""
    pass


def parse_fulfillment_messages(raw: Iterable[Mapping[str, Any]]) -> List[FulfillmentEntry]:
    """
    Validate raw fulfillment messages into FulfillmentEntry models.

    Raises:
        TranslationError: A message has a shape with a missing container,
            e.g. a payload without `fields` or a text without `text`
    """
    entries = []
    for index, message in enumerate(raw):
        try:
            entries.append(FulfillmentEntry.model_validate(message))
        except ValidationError as e:
            raise TranslationError(f"Malformed fulfillment message at index {index}: {e}") from e
    return entries


def translate(entries: Iterable[FulfillmentEntry]) -> List[OutboundPart]:
    """
    Translate fulfillment messages into outbound parts.

    Args:
        entries: Fulfillment messages in NLU order

    Returns:
        Outbound parts in the same order (possibly empty)

    Raises:
        TranslationError: Empty text list, or a non-string media/text field
    """
    parts: List[OutboundPart] = []

    for index, entry in enumerate(entries):
        if entry.text is not None:
            if not entry.text.text:
                raise TranslationError(f"Fulfillment message {index} has an empty text list")
            parts.append(OutboundPart(body=entry.text.text[0]))

        if entry.payload is not None:
            parts.append(_payload_part(entry.payload, index))

    return parts


def _payload_part(payload: PayloadEntry, index: int) -> OutboundPart:
    fields = payload.fields
    return OutboundPart(
        media_url=_string_field(fields.get(MEDIA_URL_FIELD), MEDIA_URL_FIELD, index),
        body=_string_field(fields.get(TEXT_FIELD), TEXT_FIELD, index),
    )


def _string_field(value: Optional[PayloadValue], name: str, index: int) -> Optional[str]:
    if value is None:
        return None
    if value.string_value is None:
        raise TranslationError(
            f"Payload field '{name}' of fulfillment message {index} is not a string"
        )
    return value.string_value

"""
Fulfillment Message Schemas

PURE DATA MODELS - NO LOGIC
Shapes of the fulfillment messages an NLU agent returns for a detected intent.

A message may carry a `text` shape, a `payload` shape, both, or neither.
The shapes are NOT mutually exclusive and are checked independently.
"""

from typing import Optional

from pydantic import BaseModel, Field


class PayloadValue(BaseModel):
    """
    A single protobuf Struct value in its JSON wire form.

    Example: {"stringValue": "http://x/img.png"}
    Only string values are meaningful to the translator; the other kinds are
    kept so a mistyped field can be reported instead of dropped.
    """

    string_value: Optional[str] = Field(None, alias="stringValue")
    number_value: Optional[float] = Field(None, alias="numberValue")
    bool_value: Optional[bool] = Field(None, alias="boolValue")

    class Config:
        populate_by_name = True
        extra = "allow"  # structValue, listValue, nullValue
        frozen = True


class TextEntry(BaseModel):
    """Plain text response. Only the first string is used."""
    text: list[str]


class PayloadEntry(BaseModel):
    """
    Custom payload attached to a fulfillment message.

    Recognized fields:
    - mediaUrl: media attachment for the outbound message
    - text: body for the outbound message
    """
    fields: dict[str, PayloadValue]


class FulfillmentEntry(BaseModel):
    """One fulfillment message, with either, both or none of the shapes set."""

    text: Optional[TextEntry] = None
    payload: Optional[PayloadEntry] = None

    class Config:
        extra = "allow"  # platform, card, quickReplies...

"""
Twilio WhatsApp Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Only defines the contract between Twilio and the reply pipeline.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ============================================================================
# INBOUND MESSAGE (THE CONTRACT)
# ============================================================================

class InboundMessage(BaseModel):
    """
    Canonical inbound message built from the Twilio webhook form.

    The NLU backend never sees Twilio field names.
    """

    body: str = Field(..., description="Message text, as received")
    sender_id: str = Field(..., description="Twilio From, e.g. whatsapp:+14155550100")
    message_sid: Optional[str] = Field(None, description="Twilio MessageSid")
    profile_name: Optional[str] = Field(None, description="WhatsApp profile name")
    num_media: int = Field(0, description="Number of attached media items")

    class Config:
        """Pydantic config."""
        frozen = True  # Immutable - transport shouldn't mutate


# ============================================================================
# OUTBOUND MESSAGE (OUTPUT)
# ============================================================================

class OutboundPart(BaseModel):
    """
    One outbound send-directive.

    Both fields optional: an empty part renders as an empty <Message/>.
    """

    body: Optional[str] = None
    media_url: Optional[str] = None

    class Config:
        frozen = True

    @property
    def is_empty(self) -> bool:
        return self.body is None and self.media_url is None

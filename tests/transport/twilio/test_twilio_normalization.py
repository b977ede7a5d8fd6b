"""
Twilio Input Normalization Tests

Test conversion of the Twilio webhook form to InboundMessage.
"""

import pytest

from transport.twilio.normalize import (
    NormalizationError,
    normalize_inbound,
    session_id_for,
)
from transport.twilio.schemas import InboundMessage


class TestNormalizeInbound:
    """Test inbound form normalization."""

    def test_normalize_text_message(self):
        """Text message normalizes correctly."""
        form = {
            "Body": "Hello agent",
            "From": "whatsapp:+14155550100",
            "To": "whatsapp:+14155238886",
            "MessageSid": "SM123",
            "ProfileName": "Ada",
            "NumMedia": "0",
        }

        result = normalize_inbound(form)

        assert isinstance(result, InboundMessage)
        assert result.body == "Hello agent"
        assert result.sender_id == "whatsapp:+14155550100"
        assert result.message_sid == "SM123"
        assert result.profile_name == "Ada"
        assert result.num_media == 0

    def test_body_is_not_trimmed(self):
        """Body reaches the NLU exactly as the user sent it."""
        result = normalize_inbound({"Body": "  Hello  \n\t ", "From": "whatsapp:+1"})
        assert result.body == "  Hello  \n\t "

    def test_optional_fields_default(self):
        result = normalize_inbound({"Body": "hi", "From": "whatsapp:+1"})

        assert result.message_sid is None
        assert result.profile_name is None
        assert result.num_media == 0

    def test_missing_body(self):
        """No message body is a request error."""
        with pytest.raises(NormalizationError, match="No message received"):
            normalize_inbound({"From": "whatsapp:+14155550100"})

    def test_empty_body(self):
        with pytest.raises(NormalizationError, match="No message received"):
            normalize_inbound({"Body": "", "From": "whatsapp:+14155550100"})

    def test_whitespace_body_is_still_a_message(self):
        """Only a missing or empty body counts as no message."""
        result = normalize_inbound({"Body": "   ", "From": "whatsapp:+14155550100"})
        assert result.body == "   "

    def test_missing_sender(self):
        with pytest.raises(NormalizationError, match="From"):
            normalize_inbound({"Body": "hello"})

    def test_invalid_num_media(self):
        with pytest.raises(NormalizationError, match="NumMedia"):
            normalize_inbound({"Body": "hi", "From": "whatsapp:+1", "NumMedia": "lots"})

    def test_inbound_message_is_immutable(self):
        result = normalize_inbound({"Body": "hi", "From": "whatsapp:+1"})

        with pytest.raises(Exception):
            result.body = "changed"


class TestSessionId:
    """Test NLU session id derivation."""

    def test_strips_channel_prefix_and_plus(self):
        assert session_id_for("whatsapp:+14155550100") == "14155550100"

    def test_plain_number(self):
        assert session_id_for("+27 82 555 0100") == "27825550100"

    def test_keeps_safe_characters(self):
        assert session_id_for("user_42-a") == "user_42-a"

    def test_same_sender_same_session(self):
        assert session_id_for("whatsapp:+1555") == session_id_for("whatsapp:+1555")

    def test_unusable_sender(self):
        with pytest.raises(NormalizationError):
            session_id_for("whatsapp:+")

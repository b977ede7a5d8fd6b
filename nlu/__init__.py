"""
NLU boundary layer.

This package provides a clean abstraction for intent detection,
allowing the webhook to remain agnostic of the underlying NLU service.

Supported backends:
- StubNLUBackend: Deterministic fake agent (default for CI/tests)
- DialogflowNLUBackend: Dialogflow ES DetectIntent

Example usage:
    from nlu import StubNLUBackend, NLURequest

    backend = StubNLUBackend()
    request = NLURequest(session_id="14155550100", text="Hello", language_code="en-US")
    response = await backend.detect_intent(request)
"""

from .types import NLURequest, NLUResponse
from .schemas import FulfillmentEntry, PayloadEntry, PayloadValue, TextEntry
from .base import NLUBackend, NLUBackendError
from .stub import StubNLUBackend
from .dialogflow import DialogflowNLUBackend

__all__ = [
    "NLURequest",
    "NLUResponse",
    "FulfillmentEntry",
    "TextEntry",
    "PayloadEntry",
    "PayloadValue",
    "NLUBackend",
    "NLUBackendError",
    "StubNLUBackend",
    "DialogflowNLUBackend",
]

from typing import List, Optional

from .base import NLUBackend, NLUBackendError
from .schemas import FulfillmentEntry, TextEntry
from .types import NLURequest, NLUResponse


class StubNLUBackend(NLUBackend):
    """
    Deterministic fake NLU agent for testing and local runs.

    This backend never calls the network and never fails silently.
    Used as the default backend for all CI/test environments.
    """

    def __init__(
        self,
        responses: Optional[List[FulfillmentEntry]] = None,
        fail: bool = False,
        record: bool = False,
    ):
        self.responses = responses
        self.fail = fail
        self.record = record
        # Filled only when record=True
        self.requests: List[NLURequest] = []

    async def detect_intent(self, request: NLURequest) -> NLUResponse:
        """
        Return scripted fulfillment messages, or echo the query text.

        Args:
            request: NLURequest with session, text and language

        Returns:
            NLUResponse with deterministic fulfillment messages

        Raises:
            NLUBackendError: When constructed with fail=True
        """
        if self.record:
            self.requests.append(request)

        if self.fail:
            raise NLUBackendError("Stub backend configured to fail")

        if self.responses is not None:
            return NLUResponse(
                fulfillment_messages=list(self.responses),
                intent="stub.scripted",
                metadata={"backend": "stub", "session_id": request.session_id},
            )

        return NLUResponse(
            fulfillment_messages=[
                FulfillmentEntry(text=TextEntry(text=[f"You said: {request.text}"]))
            ],
            intent="stub.echo",
            metadata={"backend": "stub", "session_id": request.session_id},
        )

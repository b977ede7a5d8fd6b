"""
Reply Handler

Request-scoped pipeline: inbound message -> NLU -> outbound parts.
Catches nothing; the webhook router is the only error boundary.
"""

import logging
from typing import List, Optional

from nlu import NLUBackend, NLURequest
from .normalize import session_id_for
from .schemas import InboundMessage, OutboundPart
from .translate import translate

logger = logging.getLogger(__name__)


class ReplyHandler:
    """
    Turns one inbound WhatsApp message into the outbound parts to send back.

    The NLU backend is injected so tests can substitute StubNLUBackend.
    """

    def __init__(
        self,
        nlu: NLUBackend,
        language_code: str = "en-US",
        timeout_s: Optional[float] = 30,
    ):
        self.nlu = nlu
        self.language_code = language_code
        self.timeout_s = timeout_s

    async def handle(self, inbound: InboundMessage) -> List[OutboundPart]:
        request = NLURequest(
            session_id=session_id_for(inbound.sender_id),
            text=inbound.body,
            language_code=self.language_code,
            timeout_s=self.timeout_s,
        )

        response = await self.nlu.detect_intent(request)
        parts = translate(response.fulfillment_messages)

        logger.info(
            "Reply translated",
            extra={
                "session_id": request.session_id,
                "intent": response.intent,
                "fulfillment_count": len(response.fulfillment_messages),
                "part_count": len(parts),
            },
        )
        return parts

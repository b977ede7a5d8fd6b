from abc import ABC, abstractmethod
from .types import NLURequest, NLUResponse


class NLUBackendError(Exception):
    """NLU service rejected the request, timed out, or was unreachable."""
    pass


class NLUBackend(ABC):
    """
    Abstract NLU boundary.
    Webhook code must depend ONLY on this interface.
    """

    @abstractmethod
    async def detect_intent(self, request: NLURequest) -> NLUResponse:
        """Detect the intent of a user utterance and return its fulfillment."""
        raise NotImplementedError

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from .schemas import FulfillmentEntry


@dataclass
class NLURequest:
    session_id: str            # derived from the sender, see normalize.session_id_for
    text: str
    language_code: str = "en-US"
    timeout_s: Optional[float] = 30


@dataclass
class NLUResponse:
    fulfillment_messages: List[FulfillmentEntry] = field(default_factory=list)
    intent: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

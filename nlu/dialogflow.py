"""
Dialogflow ES backend.

Sends the user utterance to DetectIntent and converts the returned
fulfillment messages into FulfillmentEntry models. Payload Structs are kept
in their JSON wire form ({"fields": {"mediaUrl": {"stringValue": ...}}}) so
the translator sees exactly what the Dialogflow console shows.
"""

import logging
from typing import Any, Dict, Optional

from google.api_core import exceptions as core_exceptions
from google.cloud import dialogflow_v2 as dialogflow

from .base import NLUBackend, NLUBackendError
from .schemas import FulfillmentEntry
from .types import NLURequest, NLUResponse

logger = logging.getLogger(__name__)

# protobuf Value oneof -> JSON wire key
_VALUE_KINDS = {
    "null_value": "nullValue",
    "number_value": "numberValue",
    "string_value": "stringValue",
    "bool_value": "boolValue",
}


def _value_to_wire(value_pb) -> Dict[str, Any]:
    kind = value_pb.WhichOneof("kind")
    if kind is None:
        return {}
    if kind == "struct_value":
        return {"structValue": _struct_to_wire(value_pb.struct_value)}
    if kind == "list_value":
        return {"listValue": {"values": [_value_to_wire(v) for v in value_pb.list_value.values]}}
    return {_VALUE_KINDS[kind]: getattr(value_pb, kind)}


def _struct_to_wire(struct_pb) -> Dict[str, Any]:
    return {"fields": {key: _value_to_wire(value) for key, value in struct_pb.fields.items()}}


def message_to_wire(message: "dialogflow.Intent.Message") -> Dict[str, Any]:
    """
    Convert one Intent.Message into its wire-shaped dict.

    Only `text` and `payload` are carried; other rich response kinds
    (cards, quick replies...) have no WhatsApp rendering and are dropped.
    """
    message_pb = dialogflow.Intent.Message.pb(message)
    kind = message_pb.WhichOneof("message")

    if kind == "text":
        return {"text": {"text": list(message_pb.text.text)}}
    if kind == "payload":
        return {"payload": _struct_to_wire(message_pb.payload)}

    if kind is not None:
        logger.debug(f"Dropping unsupported fulfillment message kind: {kind}")
    return {}


class DialogflowNLUBackend(NLUBackend):
    """
    Dialogflow ES backend.

    The SessionsAsyncClient is injected or built once from a service
    account file; it is never constructed per request.
    """

    def __init__(
        self,
        project_id: str,
        client: Optional["dialogflow.SessionsAsyncClient"] = None,
        credentials_path: Optional[str] = None,
    ):
        """
        Initialize Dialogflow backend.

        Args:
            project_id:       Google Cloud project that owns the agent
            client:           Pre-built SessionsAsyncClient (tests, custom transports)
            credentials_path: Service account JSON used when no client is given
        """
        self.project_id = project_id

        if client is None:
            if credentials_path:
                client = dialogflow.SessionsAsyncClient.from_service_account_file(credentials_path)
            else:
                client = dialogflow.SessionsAsyncClient()
        self._client = client

    def session_path(self, session_id: str) -> str:
        """Full resource name of the agent session for one user."""
        return self._client.session_path(self.project_id, session_id)

    async def detect_intent(self, request: NLURequest) -> NLUResponse:
        """
        Call DetectIntent with a text query.

        Args:
            request: NLURequest with session, text, language and timeout

        Returns:
            NLUResponse with fulfillment messages in Dialogflow order

        Raises:
            NLUBackendError: Dialogflow rejected the call or timed out
        """
        session = self.session_path(request.session_id)
        df_request = dialogflow.DetectIntentRequest(
            session=session,
            query_input=dialogflow.QueryInput(
                text=dialogflow.TextInput(
                    text=request.text,
                    language_code=request.language_code,
                )
            ),
        )

        try:
            response = await self._client.detect_intent(
                request=df_request,
                timeout=request.timeout_s,
            )
        except core_exceptions.GoogleAPIError as e:
            logger.error(
                f"Dialogflow DetectIntent failed: {e}",
                extra={"session": session, "error": str(e)},
            )
            raise NLUBackendError(f"Dialogflow DetectIntent failed: {e}") from e

        query_result = response.query_result
        entries = [
            FulfillmentEntry.model_validate(message_to_wire(message))
            for message in query_result.fulfillment_messages
        ]

        logger.info(
            f"Intent detected: {query_result.intent.display_name or '<none>'}",
            extra={
                "session": session,
                "fulfillment_count": len(entries),
            },
        )

        return NLUResponse(
            fulfillment_messages=entries,
            intent=query_result.intent.display_name or None,
            metadata={
                "backend": "dialogflow",
                "project_id": self.project_id,
                "response_id": response.response_id,
            },
        )

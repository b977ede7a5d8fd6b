"""
NLU Backend Tests

Stub determinism and Dialogflow request/response conversion, using a fake
SessionsAsyncClient so no network or credentials are needed.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from google.api_core import exceptions as core_exceptions
from google.cloud import dialogflow_v2 as dialogflow

from nlu import (
    DialogflowNLUBackend,
    NLUBackendError,
    NLURequest,
    StubNLUBackend,
)
from nlu.dialogflow import message_to_wire
from nlu.schemas import FulfillmentEntry, TextEntry
from transport.twilio.translate import TranslationError, translate


def _fake_client(response=None, error=None):
    client = MagicMock()
    client.session_path.side_effect = lambda project, session: (
        f"projects/{project}/agent/sessions/{session}"
    )
    client.detect_intent = AsyncMock(return_value=response, side_effect=error)
    return client


def _response(*messages, intent="greeting"):
    return dialogflow.DetectIntentResponse(
        response_id="resp-1",
        query_result=dialogflow.QueryResult(
            fulfillment_messages=list(messages),
            intent=dialogflow.Intent(display_name=intent),
        ),
    )


def _text(*texts):
    return dialogflow.Intent.Message(text=dialogflow.Intent.Message.Text(text=list(texts)))


REQUEST = NLURequest(session_id="14155550100", text="Hi", language_code="en-US", timeout_s=10)


class TestStubBackend:
    """Test deterministic stub backend."""

    @pytest.mark.asyncio
    async def test_echo(self):
        backend = StubNLUBackend(record=True)

        response = await backend.detect_intent(REQUEST)

        assert response.fulfillment_messages == [
            FulfillmentEntry(text=TextEntry(text=["You said: Hi"]))
        ]
        assert response.metadata["backend"] == "stub"
        assert backend.requests == [REQUEST]

    @pytest.mark.asyncio
    async def test_scripted_responses(self):
        scripted = [FulfillmentEntry(text=TextEntry(text=["scripted"]))]
        backend = StubNLUBackend(responses=scripted)

        response = await backend.detect_intent(REQUEST)

        assert response.fulfillment_messages == scripted

    @pytest.mark.asyncio
    async def test_requests_not_kept_by_default(self):
        backend = StubNLUBackend()

        for _ in range(5):
            await backend.detect_intent(REQUEST)

        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_fail(self):
        with pytest.raises(NLUBackendError):
            await StubNLUBackend(fail=True).detect_intent(REQUEST)


class TestDialogflowRequest:
    """Test DetectIntent request construction."""

    @pytest.mark.asyncio
    async def test_request_fields(self):
        client = _fake_client(_response(_text("Hello")))
        backend = DialogflowNLUBackend(project_id="my-agent", client=client)

        await backend.detect_intent(REQUEST)

        client.session_path.assert_called_once_with("my-agent", "14155550100")
        kwargs = client.detect_intent.call_args.kwargs
        sent = kwargs["request"]
        assert sent.session == "projects/my-agent/agent/sessions/14155550100"
        assert sent.query_input.text.text == "Hi"
        assert sent.query_input.text.language_code == "en-US"
        assert kwargs["timeout"] == 10

    @pytest.mark.asyncio
    async def test_api_error_is_wrapped(self):
        client = _fake_client(error=core_exceptions.ServiceUnavailable("down"))
        backend = DialogflowNLUBackend(project_id="my-agent", client=client)

        with pytest.raises(NLUBackendError, match="down"):
            await backend.detect_intent(REQUEST)

    @pytest.mark.asyncio
    async def test_timeout_is_wrapped(self):
        client = _fake_client(error=core_exceptions.DeadlineExceeded("too slow"))
        backend = DialogflowNLUBackend(project_id="my-agent", client=client)

        with pytest.raises(NLUBackendError):
            await backend.detect_intent(REQUEST)


class TestDialogflowResponse:
    """Test fulfillment message conversion."""

    @pytest.mark.asyncio
    async def test_text_and_payload_messages(self):
        client = _fake_client(_response(
            _text("Hello", "Hi there"),
            dialogflow.Intent.Message(payload={
                "mediaUrl": "http://x/img.png",
                "text": "caption",
            }),
        ))
        backend = DialogflowNLUBackend(project_id="my-agent", client=client)

        response = await backend.detect_intent(REQUEST)

        assert response.intent == "greeting"
        assert response.metadata["response_id"] == "resp-1"
        parts = translate(response.fulfillment_messages)
        assert [(p.body, p.media_url) for p in parts] == [
            ("Hello", None),
            ("caption", "http://x/img.png"),
        ]

    @pytest.mark.asyncio
    async def test_no_messages(self):
        backend = DialogflowNLUBackend(project_id="my-agent", client=_fake_client(_response(intent="")))

        response = await backend.detect_intent(REQUEST)

        assert response.fulfillment_messages == []
        assert response.intent is None

    def test_text_message_to_wire(self):
        assert message_to_wire(_text("a", "b")) == {"text": {"text": ["a", "b"]}}

    def test_payload_message_to_wire(self):
        message = dialogflow.Intent.Message(payload={"mediaUrl": "http://x/a.png", "count": 2})

        assert message_to_wire(message) == {
            "payload": {"fields": {
                "mediaUrl": {"stringValue": "http://x/a.png"},
                "count": {"numberValue": 2.0},
            }}
        }

    def test_nested_payload_message_to_wire(self):
        message = dialogflow.Intent.Message(payload={"card": {"title": "T"}, "tags": ["a", 1]})

        assert message_to_wire(message) == {
            "payload": {"fields": {
                "card": {"structValue": {"fields": {"title": {"stringValue": "T"}}}},
                "tags": {"listValue": {"values": [{"stringValue": "a"}, {"numberValue": 1.0}]}},
            }}
        }

    def test_unsupported_message_kind_is_dropped(self):
        message = dialogflow.Intent.Message(
            quick_replies=dialogflow.Intent.Message.QuickReplies(title="Pick one")
        )

        assert message_to_wire(message) == {}

    def test_non_string_media_url_fails_translation(self):
        entry = FulfillmentEntry.model_validate(
            message_to_wire(dialogflow.Intent.Message(payload={"mediaUrl": 5}))
        )

        with pytest.raises(TranslationError):
            translate([entry])

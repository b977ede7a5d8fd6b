"""
TwiML Rendering

Renders outbound parts as a Twilio MessagingResponse.
One <Message> per part, in order.
"""

from typing import Iterable

from twilio.twiml.messaging_response import MessagingResponse

from .schemas import OutboundPart

APOLOGY_TEXT = "Sorry, there was an error processing your request."
TWIML_MEDIA_TYPE = "application/xml"


def build_messaging_response(parts: Iterable[OutboundPart]) -> MessagingResponse:
    """Build a MessagingResponse with one <Message> per part."""
    response = MessagingResponse()

    for part in parts:
        if part.media_url is None:
            # Plain text (or empty placeholder) message
            response.message(part.body)
            continue

        message = response.message()
        message.media(part.media_url)
        if part.body is not None:
            message.body(part.body)

    return response


def render_twiml(parts: Iterable[OutboundPart]) -> str:
    """Render parts to a TwiML XML document. No parts -> empty <Response/>."""
    return str(build_messaging_response(parts))


def render_apology() -> str:
    """The single fixed reply sent when anything in the pipeline fails."""
    return render_twiml([OutboundPart(body=APOLOGY_TEXT)])

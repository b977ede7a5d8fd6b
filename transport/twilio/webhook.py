"""
Twilio WhatsApp Webhook Receiver

FastAPI router that receives WhatsApp messages from Twilio, asks the NLU
backend for a reply and answers with TwiML.

This router is the single error boundary: any failure after the request is
accepted is logged and answered with one fixed apology message and a 500,
so Twilio records the webhook as failed. Partial replies are never sent.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, Response, status

from infra import bootstrap_adapter
from .normalize import normalize_inbound
from .security import verify_signature
from .twiml import TWIML_MEDIA_TYPE, render_apology, render_twiml

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["Twilio WhatsApp Transport"])


def _twiml(content: str, status_code: int = status.HTTP_200_OK) -> Response:
    return Response(content=content, media_type=TWIML_MEDIA_TYPE, status_code=status_code)


def _apology() -> Response:
    return _twiml(render_apology(), status.HTTP_500_INTERNAL_SERVER_ERROR)


# ============================================================================
# WEBHOOK RECEIVER (Message processing)
# ============================================================================

@router.post("/whatsapp")
async def whatsapp_webhook_receiver(request: Request) -> Response:
    """
    Receive WhatsApp messages via the Twilio webhook.

    Flow:
    1. Read form body, resolve configured adapter
    2. Verify X-Twilio-Signature (when an auth token is configured)
    3. Normalize to InboundMessage
    4. DetectIntent via the NLU backend
    5. Translate fulfillment messages and render TwiML

    Returns:
        200 TwiML with one <Message> per outbound part
        500 TwiML with the apology message on any failure

    Raises:
        HTTPException(401): Missing signature
        HTTPException(403): Invalid signature
    """

    sender_id: Optional[str] = None

    # Step 1: Read form and resolve adapter (config errors surface here)
    try:
        form = await request.form()
        params = {key: value for key, value in form.items() if isinstance(value, str)}
        sender_id = params.get("From")
        adapter = bootstrap_adapter()
    except Exception as e:
        logger.error(f"Dialogflow WhatsApp integration error: {e}", exc_info=True)
        return _apology()

    # Step 2: Verify signature (security boundary)
    if adapter.config.verify_signatures:
        try:
            verify_signature(
                request,
                params,
                auth_token=adapter.config.twilio_auth_token,
                public_url=adapter.config.public_webhook_url,
            )
            logger.debug("Signature verified for Twilio webhook")
        except HTTPException as e:
            logger.warning(f"Signature verification failed: {e.detail}")
            raise

    # Steps 3-5: Normalize, detect intent, translate, render
    try:
        inbound = normalize_inbound(params)
        logger.info(
            "Message normalized",
            extra={
                "sender_id": inbound.sender_id,
                "message_sid": inbound.message_sid,
            }
        )

        parts = await adapter.get_reply_handler().handle(inbound)
        content = render_twiml(parts)

    except Exception as e:
        logger.error(
            f"Dialogflow WhatsApp integration error: {e}",
            exc_info=True,
            extra={"sender_id": sender_id, "error": str(e)},
        )
        return _apology()

    logger.info(
        "Reply rendered",
        extra={"sender_id": sender_id, "part_count": len(parts)},
    )
    return _twiml(content)


# ============================================================================
# HEALTH
# ============================================================================

@router.get("/whatsapp/health")
async def whatsapp_webhook_health() -> dict:
    """Report whether the adapter can be bootstrapped from configuration."""
    try:
        adapter = bootstrap_adapter()
    except Exception as e:
        return {"status": "not_ready", "transport": "twilio-whatsapp", "reason": str(e)}

    return {
        "status": "ok",
        "transport": "twilio-whatsapp",
        "nlu_backend": adapter.config.nlu_backend,
        "language_code": adapter.config.language_code,
    }

"""
Twilio Signature Verification

SECURITY BOUNDARY - Verify the X-Twilio-Signature header.
No NLU imports. No retries. No logic.
"""

from typing import Mapping, Optional

from fastapi import HTTPException, Request, status
from twilio.request_validator import RequestValidator

SIGNATURE_HEADER = "X-Twilio-Signature"


def verify_signature(
    request: Request,
    params: Mapping[str, str],
    auth_token: str,
    public_url: Optional[str] = None,
) -> None:
    """
    Verify Twilio's request signature on a webhook call.

    Twilio sends:
    - X-Twilio-Signature header: base64 HMAC-SHA1 of URL + sorted params
    - Form-encoded request body

    Behind a proxy the URL Twilio signed differs from the one the app sees,
    so `public_url` overrides it when configured.

    Raises:
        HTTPException(401): Missing signature
        HTTPException(403): Invalid signature

    Args:
        request: FastAPI Request object
        params: Parsed form parameters
        auth_token: Twilio account auth token
        public_url: Webhook URL as configured in the Twilio console
    """

    signature = request.headers.get(SIGNATURE_HEADER)
    if not signature:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {SIGNATURE_HEADER} header"
        )

    url = public_url or str(request.url)
    validator = RequestValidator(auth_token)

    if not validator.validate(url, dict(params), signature):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid signature"
        )

"""
Adapter configuration.

Environment-based backend selection, read once and passed explicitly.
Logic modules never read the environment themselves.
"""

import os
from typing import Optional, Literal
from dataclasses import dataclass

from nlu import NLUBackend, StubNLUBackend, DialogflowNLUBackend


NLUBackendType = Literal["dialogflow", "stub"]

DEFAULT_LANGUAGE_CODE = "en-US"


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""
    pass


@dataclass
class AdapterConfig:
    """Adapter configuration from environment."""

    # Dialogflow
    project_id: str
    language_code: str = DEFAULT_LANGUAGE_CODE
    credentials_path: Optional[str] = None

    # NLU
    nlu_backend: NLUBackendType = "dialogflow"
    nlu_timeout_s: float = 30.0

    # Twilio
    twilio_auth_token: Optional[str] = None
    public_webhook_url: Optional[str] = None

    def __post_init__(self):
        if not self.project_id:
            raise ConfigurationError("Dialogflow Project ID not configured")
        if self.nlu_backend not in ("dialogflow", "stub"):
            raise ConfigurationError(f"Unknown NLU_BACKEND: {self.nlu_backend}")
        if self.nlu_backend == "dialogflow" and not self.credentials_path:
            raise ConfigurationError("Dialogflow credentials path not configured")

    @property
    def verify_signatures(self) -> bool:
        return bool(self.twilio_auth_token)

    @classmethod
    def from_env(cls) -> "AdapterConfig":
        """
        Load configuration from environment variables.

        Required:
        - DIALOGFLOW_PROJECT_ID
        - DIALOGFLOW_CREDENTIALS_PATH (or GOOGLE_APPLICATION_CREDENTIALS)
          unless NLU_BACKEND=stub

        Raises:
            ConfigurationError: Required variable missing or invalid
        """
        try:
            timeout_s = float(os.getenv("NLU_TIMEOUT_S", "30"))
        except ValueError:
            raise ConfigurationError(f"Invalid NLU_TIMEOUT_S: {os.getenv('NLU_TIMEOUT_S')!r}")

        return cls(
            # Dialogflow Configuration
            project_id=os.getenv("DIALOGFLOW_PROJECT_ID", "").strip(),
            language_code=os.getenv("LANGUAGE_CODE") or DEFAULT_LANGUAGE_CODE,
            credentials_path=(
                os.getenv("DIALOGFLOW_CREDENTIALS_PATH")
                or os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
                or None
            ),

            # NLU Configuration
            nlu_backend=os.getenv("NLU_BACKEND", "dialogflow").lower(),  # type: ignore
            nlu_timeout_s=timeout_s,

            # Twilio Configuration
            twilio_auth_token=os.getenv("TWILIO_AUTH_TOKEN") or None,
            public_webhook_url=os.getenv("PUBLIC_WEBHOOK_URL") or None,
        )

    def create_nlu_backend(self) -> NLUBackend:
        """Create NLU backend instance based on configuration."""
        if self.nlu_backend == "stub":
            return StubNLUBackend()
        return DialogflowNLUBackend(
            project_id=self.project_id,
            credentials_path=self.credentials_path,
        )


def get_config() -> AdapterConfig:
    """Get adapter configuration from the environment."""
    return AdapterConfig.from_env()

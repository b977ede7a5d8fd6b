"""
Configuration management for the Dialogflow WhatsApp adapter.

Loads environment variables from .env file and provides typed access to
application-level configuration. Adapter settings (Dialogflow project,
language, credentials, Twilio token) live in infra.config.AdapterConfig.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)

logger = logging.getLogger(__name__)


class Config:
    """Application configuration."""

    # Server
    AGENT_PORT = int(os.getenv("AGENT_PORT", "8000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Environment
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    # Dialogflow (read here for startup reporting only)
    DIALOGFLOW_PROJECT_ID = os.getenv("DIALOGFLOW_PROJECT_ID", "")
    LANGUAGE_CODE = os.getenv("LANGUAGE_CODE", "en-US")
    NLU_BACKEND = os.getenv("NLU_BACKEND", "dialogflow")

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        required = ["DIALOGFLOW_PROJECT_ID"]
        missing = [key for key in required if not getattr(cls, key)]

        if missing:
            logger.warning(f"Missing required environment variables: {', '.join(missing)}")
            return False

        return True

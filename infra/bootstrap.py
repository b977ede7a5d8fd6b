"""
Adapter initialization and bootstrap.

Singleton pattern for creating the NLU backend and reply handler from
configuration.
"""

from typing import Optional

from nlu import NLUBackend
from transport.twilio.handler import ReplyHandler

from .config import AdapterConfig, get_config


class AdapterBootstrap:
    """
    Bootstrap the adapter based on configuration.

    Singleton pattern - single instance per process, so the authenticated
    Dialogflow client is built once and reused across requests.
    """

    _instance: Optional["AdapterBootstrap"] = None

    def __init__(
        self,
        config: Optional[AdapterConfig] = None,
        nlu_backend: Optional[NLUBackend] = None,
    ):
        """Initialize bootstrap with configuration and optional backend override."""
        self.config = config or get_config()
        self.nlu_backend = nlu_backend or self.config.create_nlu_backend()
        self.reply_handler = ReplyHandler(
            nlu=self.nlu_backend,
            language_code=self.config.language_code,
            timeout_s=self.config.nlu_timeout_s,
        )

    @classmethod
    def get_instance(
        cls,
        config: Optional[AdapterConfig] = None,
        nlu_backend: Optional[NLUBackend] = None,
    ) -> "AdapterBootstrap":
        """
        Get singleton instance.

        Args:
            config: Optional custom configuration (only used first time)
            nlu_backend: Optional backend override (only used first time)

        Returns:
            Singleton AdapterBootstrap instance

        Raises:
            ConfigurationError: Configuration from the environment is incomplete
        """
        if cls._instance is None:
            cls._instance = cls(config, nlu_backend)
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (for testing)."""
        cls._instance = None

    def get_nlu_backend(self) -> NLUBackend:
        """Get NLU backend."""
        return self.nlu_backend

    def get_reply_handler(self) -> ReplyHandler:
        """Get reply handler bound to the NLU backend."""
        return self.reply_handler

    def __repr__(self) -> str:
        """String representation showing configured backends."""
        return (
            f"AdapterBootstrap(nlu={self.config.nlu_backend}, "
            f"project={self.config.project_id}, "
            f"language={self.config.language_code}, "
            f"signatures={'on' if self.config.verify_signatures else 'off'})"
        )


def bootstrap_adapter(
    config: Optional[AdapterConfig] = None,
    nlu_backend: Optional[NLUBackend] = None,
) -> AdapterBootstrap:
    """
    Bootstrap the NLU backend and reply handler.

    Args:
        config: Optional custom configuration
        nlu_backend: Optional backend override

    Returns:
        AdapterBootstrap instance with all backends initialized
    """
    return AdapterBootstrap.get_instance(config, nlu_backend)

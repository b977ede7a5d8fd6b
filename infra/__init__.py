"""
Infrastructure module exports.

Configuration and bootstrap for the NLU backend and reply handler.
"""

from .config import AdapterConfig, ConfigurationError, NLUBackendType, get_config
from .bootstrap import AdapterBootstrap, bootstrap_adapter

__all__ = [
    "AdapterConfig",
    "ConfigurationError",
    "NLUBackendType",
    "get_config",
    "AdapterBootstrap",
    "bootstrap_adapter",
]

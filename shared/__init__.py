"""
Graph Gateway Shared Library
============================

Common utilities, configuration, and abstractions used by the gateway service.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - database: Neo4j client handle and scoped sessions
    - models: Shared Pydantic models (graph view, error and health envelopes)

Version: 0.1.0
"""

__version__ = "0.1.0"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]

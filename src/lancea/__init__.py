"""Lancea: local command-launcher engine.

Resolves free-text input to providers, streams result batches, serves
previews and executes actions over a small envelope-based protocol.
"""

from lancea.schemas.envelope import API_VERSION

__version__ = "0.1.0"

__all__ = ["API_VERSION", "__version__"]

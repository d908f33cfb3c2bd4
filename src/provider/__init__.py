"""Provider module - remote vector store and Responses API access."""
from .client import ProviderClient

__all__ = ["ProviderClient"]

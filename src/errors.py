"""
Error Types
===========

Failures the pipeline distinguishes:
- ConfigError: provider credentials missing, raised before any call
- UpstreamError: the provider answered with a non-success status
- NoParseableDocuments: a store has no file with a period in its name

An empty retrieval result is not an error; the orchestrator answers it
with a fixed refusal.
"""

from typing import Optional


class AssistantError(Exception):
    """Base class for pipeline errors."""


class ConfigError(AssistantError):
    """Raised when the provider cannot be called because of configuration."""


class UpstreamError(AssistantError):
    """Raised when the remote provider returns a non-success response."""

    def __init__(self, status: Optional[int], body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"Provider error ({status}): {body}")


class NoParseableDocuments(AssistantError):
    """Raised inside a refresh when no document carries a usable period."""

    reason = "no_period_files"

    def __init__(self, store_id: str):
        self.store_id = store_id
        super().__init__(f"No document in store {store_id} has a YYYY-MM period")

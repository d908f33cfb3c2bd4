"""
Provider Client - Vector Stores and Responses API
==================================================

Thin wrapper over the OpenAI SDK exposing the four remote operations the
pipeline needs:
- list_documents: one page of files registered in a vector store
- get_file_metadata: filename lookup by file id
- set_document_attributes: overwrite a file's attributes in a store
- complete_with_retrieval: Responses API call, returned as a plain dict

SDK errors are translated into UpstreamError so callers never depend on
openai exception types.
"""

from typing import Any, Dict, List, Optional

import openai
from openai import OpenAI

from config.settings import settings
from src.errors import ConfigError, UpstreamError


class ProviderClient:
    """
    Remote provider access for refresh and query.

    The OpenAI client is created lazily, so a missing API key only fails
    the call that needs the provider (as ConfigError).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[OpenAI] = None
    ):
        """
        Initialize provider client.

        Args:
            api_key: Provider API key
            base_url: Provider API base URL
            timeout: Per-request timeout in seconds
            client: Pre-configured OpenAI client (skips key validation)
        """
        self.api_key = api_key if api_key is not None else settings.provider.api_key
        self.base_url = base_url or settings.provider.base_url
        self.timeout = timeout or settings.provider.timeout
        self._client = client

    @property
    def client(self) -> OpenAI:
        """Lazy-create the OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise ConfigError(
                    "Provider API key not configured. "
                    "Set OPENAI_API_KEY or RAG_PROVIDER_API_KEY in .env file."
                )
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout
            )
        return self._client

    def list_documents(self, store_id: str, limit: int = 100) -> List[Dict[str, str]]:
        """List the first page of documents in a store."""
        try:
            page = self.client.vector_stores.files.list(
                vector_store_id=store_id,
                limit=limit
            )
        except openai.OpenAIError as e:
            raise _to_upstream_error(e) from e

        # A vector store file's id is the underlying file id
        return [
            {"listing_id": item.id, "file_id": item.id}
            for item in page.data
        ]

    def get_file_metadata(self, file_id: str) -> Dict[str, Any]:
        """Look up a file's metadata (the listing entry has no filename)."""
        try:
            file_obj = self.client.files.retrieve(file_id)
        except openai.OpenAIError as e:
            raise _to_upstream_error(e) from e

        return {"file_id": file_obj.id, "filename": file_obj.filename}

    def set_document_attributes(
        self,
        store_id: str,
        listing_id: str,
        attributes: Dict[str, Any]
    ) -> None:
        """Overwrite the attributes of one document in a store."""
        try:
            self.client.vector_stores.files.update(
                file_id=listing_id,
                vector_store_id=store_id,
                attributes=attributes
            )
        except openai.OpenAIError as e:
            raise _to_upstream_error(e) from e

    def complete_with_retrieval(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Issue a Responses API request and return the raw response dict."""
        try:
            response = self.client.responses.create(**request)
        except openai.OpenAIError as e:
            raise _to_upstream_error(e) from e

        return response.model_dump()


def _to_upstream_error(error: Exception) -> UpstreamError:
    """Map an SDK error to UpstreamError with status and raw body."""
    if isinstance(error, openai.APIStatusError):
        return UpstreamError(error.status_code, error.response.text)
    return UpstreamError(None, str(error))

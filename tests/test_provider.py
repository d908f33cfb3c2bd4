"""
Tests for the provider client
=============================

The OpenAI SDK client is replaced by a mock; no network access.
"""

import pytest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx
import openai


def _provider(sdk):
    from src.provider.client import ProviderClient
    return ProviderClient(api_key="sk-test", client=sdk)


def _status_error(status, body):
    request = httpx.Request("POST", "https://api.openai.com/v1/responses")
    response = httpx.Response(status, request=request, text=body)
    return openai.APIStatusError("provider error", response=response, body=None)


class TestProviderClient:

    def test_list_documents(self):
        sdk = MagicMock()
        sdk.vector_stores.files.list.return_value = SimpleNamespace(
            data=[SimpleNamespace(id="file-1"), SimpleNamespace(id="file-2")]
        )

        docs = _provider(sdk).list_documents("vs_1", 50)

        sdk.vector_stores.files.list.assert_called_once_with(vector_store_id="vs_1", limit=50)
        assert docs == [
            {"listing_id": "file-1", "file_id": "file-1"},
            {"listing_id": "file-2", "file_id": "file-2"},
        ]

    def test_get_file_metadata(self):
        sdk = MagicMock()
        sdk.files.retrieve.return_value = SimpleNamespace(id="file-1", filename="cpi_2026-01.pdf")

        meta = _provider(sdk).get_file_metadata("file-1")

        assert meta == {"file_id": "file-1", "filename": "cpi_2026-01.pdf"}

    def test_set_document_attributes(self):
        sdk = MagicMock()
        attrs = {"period": "2026-01", "period_int": 202601, "is_latest": True, "filename": "x"}

        _provider(sdk).set_document_attributes("vs_1", "file-1", attrs)

        sdk.vector_stores.files.update.assert_called_once_with(
            file_id="file-1", vector_store_id="vs_1", attributes=attrs
        )

    def test_completion_returns_dict(self):
        sdk = MagicMock()
        sdk.responses.create.return_value.model_dump.return_value = {"output": []}

        result = _provider(sdk).complete_with_retrieval({"model": "m", "input": []})

        sdk.responses.create.assert_called_once_with(model="m", input=[])
        assert result == {"output": []}

    def test_status_error_becomes_upstream_error(self):
        from src.errors import UpstreamError

        sdk = MagicMock()
        sdk.responses.create.side_effect = _status_error(401, '{"error": "bad key"}')

        with pytest.raises(UpstreamError) as exc_info:
            _provider(sdk).complete_with_retrieval({})

        assert exc_info.value.status == 401
        assert "bad key" in exc_info.value.body

    def test_connection_error_has_no_status(self):
        from src.errors import UpstreamError

        sdk = MagicMock()
        request = httpx.Request("GET", "https://api.openai.com/v1/files/file-1")
        sdk.files.retrieve.side_effect = openai.APIConnectionError(request=request)

        with pytest.raises(UpstreamError) as exc_info:
            _provider(sdk).get_file_metadata("file-1")

        assert exc_info.value.status is None

    def test_missing_key_is_config_error(self):
        from src.errors import ConfigError
        from src.provider.client import ProviderClient

        with pytest.raises(ConfigError):
            ProviderClient(api_key="").list_documents("vs_1")

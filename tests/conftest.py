"""Shared fixtures: an in-memory stand-in for the remote provider."""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.errors import UpstreamError


class FakeProvider:
    """
    In-memory provider.

    files: listing_id -> filename for a single store
    fail_write_on: listing_id whose attribute write raises UpstreamError
    response: dict returned by complete_with_retrieval
    """

    def __init__(self, files=None, fail_write_on=None, response=None, completion_error=None):
        self.files = dict(files or {})
        self.fail_write_on = fail_write_on
        self.response = response or {"output": []}
        self.completion_error = completion_error
        self.attributes = {}
        self.writes = []
        self.requests = []

    def list_documents(self, store_id, limit=100):
        return [
            {"listing_id": listing_id, "file_id": f"file-{listing_id}"}
            for listing_id in list(self.files)[:limit]
        ]

    def get_file_metadata(self, file_id):
        listing_id = file_id[len("file-"):]
        return {"file_id": file_id, "filename": self.files[listing_id]}

    def set_document_attributes(self, store_id, listing_id, attributes):
        if listing_id == self.fail_write_on:
            raise UpstreamError(500, '{"error": "write failed"}')
        self.writes.append((store_id, listing_id))
        self.attributes[listing_id] = dict(attributes)

    def complete_with_retrieval(self, request):
        self.requests.append(request)
        if self.completion_error is not None:
            raise self.completion_error
        return self.response


def make_response(text="", results=None, with_search=True):
    """Build a Responses API style dict."""
    output = []
    if with_search:
        output.append({
            "type": "file_search_call",
            "status": "completed",
            "queries": ["figure"],
            "results": results,
        })
    if text:
        output.append({
            "type": "message",
            "role": "assistant",
            "content": [{"type": "output_text", "text": text, "annotations": []}],
        })
    return {"output": output}


@pytest.fixture
def fake_provider():
    return FakeProvider()

"""Shared fixtures for the semantic search service tests."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from semantic_search.services.vector_store import PineconeVectorStore

INDEX_HOST = "https://test-index.svc.pinecone.io"


@pytest.fixture
def mock_embedder():
    embedder = MagicMock()
    embedder.embed_query = AsyncMock(return_value=[0.1, 0.2, 0.3])
    embedder.embed_documents = AsyncMock(side_effect=lambda texts: [[0.1, 0.2, 0.3] for _ in texts])
    return embedder


class PineconeStub:
    """Records every request and answers with canned JSON per path."""

    def __init__(self):
        self.requests = []
        self.responses = {
            "/query": {
                "matches": [
                    {
                        "id": "test-doc-1",
                        "score": 0.9,
                        "metadata": {
                            "pageContent": "Test content",
                            "document_id": "doc-123",
                            "file_name": "test.md",
                            "file_type": "text/markdown",
                        },
                    }
                ]
            },
            "/vectors/upsert": {"upsertedCount": 1},
            "/vectors/delete": {},
            "/describe_index_stats": {"totalVectorCount": 10},
            "/indexes/test-index": {"host": "test-index.svc.pinecone.io"},
        }
        self.failures = {}

    def calls(self, path):
        return [req for req in self.requests if req.url.path == path]

    def payloads(self, path):
        return [json.loads(req.content) for req in self.calls(path)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        fail_on = self.failures.get(path)
        if fail_on is not None and len(self.calls(path)) in fail_on:
            return httpx.Response(500, text="internal error")

        if path not in self.responses:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, json=self.responses[path])


@pytest.fixture
def pinecone_stub():
    return PineconeStub()


@pytest.fixture
def make_store(mock_embedder, pinecone_stub):
    def _make(**kwargs):
        params = {
            "api_key": "test-api-key",
            "environment": "test-env",
            "index_name": "test-index",
            "index_host": INDEX_HOST,
        }
        params.update(kwargs)
        client = httpx.AsyncClient(transport=httpx.MockTransport(pinecone_stub))
        return PineconeVectorStore(embedder=mock_embedder, http_client=client, **params)
    return _make


def chat_response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def mock_openai():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=chat_response("Test Document Title"))
    client.embeddings.create = AsyncMock()
    return client

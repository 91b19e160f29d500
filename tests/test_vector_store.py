"""Tests for the Pinecone vector store client."""

import httpx
import pytest

from semantic_search.models import Document, RawHit
from semantic_search.services.vector_store import PineconeVectorStore


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_missing_api_key_fails_fast(self, mock_embedder):
        with pytest.raises(ValueError, match="PINECONE_API_KEY is required"):
            PineconeVectorStore(embedder=mock_embedder, api_key=None, environment="env", index_name="idx")

    def test_missing_environment_fails_fast(self, mock_embedder):
        with pytest.raises(ValueError, match="PINECONE_ENVIRONMENT is required"):
            PineconeVectorStore(embedder=mock_embedder, api_key="key", environment="", index_name="idx")

    def test_missing_index_name_fails_fast(self, mock_embedder):
        with pytest.raises(ValueError, match="PINECONE_INDEX_NAME is required"):
            PineconeVectorStore(embedder=mock_embedder, api_key="key", environment="env", index_name="")

    @pytest.mark.asyncio
    async def test_initialize_logs_stats(self, make_store, pinecone_stub):
        store = make_store()
        await store.initialize()
        assert len(pinecone_stub.calls("/describe_index_stats")) == 1

    @pytest.mark.asyncio
    async def test_initialize_survives_unreachable_index(self, make_store, pinecone_stub):
        pinecone_stub.failures["/describe_index_stats"] = {1}
        store = make_store()
        await store.initialize()  # must not raise

    @pytest.mark.asyncio
    async def test_resolves_index_host_once(self, make_store, pinecone_stub):
        store = make_store(index_host=None)

        await store.semantic_search("first")
        await store.semantic_search("second")

        assert len(pinecone_stub.calls("/indexes/test-index")) == 1
        queries = pinecone_stub.calls("/query")
        assert len(queries) == 2
        assert queries[0].url.host == "test-index.svc.pinecone.io"

    @pytest.mark.asyncio
    async def test_sends_api_key_header(self, make_store, pinecone_stub):
        store = make_store()
        await store.semantic_search("anything")
        assert pinecone_stub.requests[0].headers["Api-Key"] == "test-api-key"


# ---------------------------------------------------------------------------
# semantic_search
# ---------------------------------------------------------------------------


class TestSemanticSearch:
    @pytest.mark.asyncio
    async def test_returns_raw_hits(self, make_store, pinecone_stub, mock_embedder):
        store = make_store()

        results = await store.semantic_search("test query", 3)

        mock_embedder.embed_query.assert_awaited_once_with("test query")
        assert pinecone_stub.payloads("/query") == [
            {"vector": [0.1, 0.2, 0.3], "topK": 3, "includeMetadata": True}
        ]
        assert len(results) == 1
        hit = results[0]
        assert isinstance(hit, RawHit)
        assert hit.id == "test-doc-1"
        assert hit.score == 0.9
        assert hit.content == "Test content"
        assert hit.page_content == "Test content"
        assert hit.metadata["document_id"] == "doc-123"

    @pytest.mark.asyncio
    async def test_default_top_k(self, make_store, pinecone_stub):
        store = make_store()
        await store.semantic_search("q")
        assert pinecone_stub.payloads("/query")[0]["topK"] == 5

    @pytest.mark.asyncio
    async def test_no_matches_returns_empty_list(self, make_store, pinecone_stub):
        pinecone_stub.responses["/query"] = {"matches": []}
        store = make_store()

        assert await store.semantic_search("no results query") == []

    @pytest.mark.asyncio
    async def test_non_string_page_content_is_ignored(self, make_store, pinecone_stub):
        pinecone_stub.responses["/query"] = {
            "matches": [{"id": "x", "score": 0.5, "metadata": {"pageContent": 42}}]
        }
        store = make_store()

        results = await store.semantic_search("q")
        assert results[0].content == ""
        assert results[0].metadata == {"pageContent": 42}

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self, make_store, pinecone_stub):
        pinecone_stub.failures["/query"] = {1}
        store = make_store()

        with pytest.raises(RuntimeError, match="Pinecone API error \\(500\\)"):
            await store.semantic_search("q")

    @pytest.mark.asyncio
    async def test_embedding_error_propagates(self, make_store, mock_embedder):
        mock_embedder.embed_query.side_effect = RuntimeError("OPENAI_API_KEY is required for embeddings")
        store = make_store()

        with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
            await store.semantic_search("q")

    @pytest.mark.asyncio
    async def test_connection_error_is_mapped(self, mock_embedder):
        def refuse(request):
            raise httpx.ConnectError("refused", request=request)

        store = PineconeVectorStore(
            embedder=mock_embedder,
            api_key="key",
            environment="env",
            index_name="idx",
            index_host="idx.svc.pinecone.io",
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(refuse)),
        )
        with pytest.raises(ConnectionError):
            await store.semantic_search("q")


# ---------------------------------------------------------------------------
# store_documents
# ---------------------------------------------------------------------------


class TestStoreDocuments:
    @pytest.mark.asyncio
    async def test_stores_documents(self, make_store, pinecone_stub, mock_embedder):
        store = make_store()
        documents = [
            Document(text="Test document 1", metadata={"id": "doc1", "author": "test-author"}),
            Document(text="Test document 2", metadata={"id": "doc2"}),
        ]

        result = await store.store_documents(documents)

        assert result == {"success": True, "count": 2}
        mock_embedder.embed_documents.assert_awaited_once_with(["Test document 1", "Test document 2"])

        vectors = pinecone_stub.payloads("/vectors/upsert")[0]["vectors"]
        assert [v["id"] for v in vectors] == ["doc1", "doc2"]
        assert vectors[0]["values"] == [0.1, 0.2, 0.3]
        assert vectors[0]["metadata"] == {"id": "doc1", "author": "test-author", "pageContent": "Test document 1"}

    @pytest.mark.asyncio
    async def test_generates_ids_when_missing(self, make_store, pinecone_stub):
        store = make_store()

        await store.store_documents([Document(text="a"), Document(text="b", metadata={"id": 7})])

        ids = [v["id"] for v in pinecone_stub.payloads("/vectors/upsert")[0]["vectors"]]
        assert ids[0].startswith("doc-") and ids[0].endswith("-0")
        assert ids[1] == "7"

    @pytest.mark.asyncio
    async def test_upserts_in_batches_of_100(self, make_store, pinecone_stub, mock_embedder):
        store = make_store()
        documents = [Document(text=f"text {i}", metadata={"id": f"d{i}"}) for i in range(250)]

        result = await store.store_documents(documents)

        assert result == {"success": True, "count": 250}
        assert mock_embedder.embed_documents.await_count == 1
        batches = pinecone_stub.payloads("/vectors/upsert")
        assert [len(b["vectors"]) for b in batches] == [100, 100, 50]
        assert batches[2]["vectors"][-1]["id"] == "d249"

    @pytest.mark.asyncio
    async def test_flattens_metadata(self, make_store, pinecone_stub):
        store = make_store()

        await store.store_documents([
            Document(text="t", metadata={"tags": ["a", 1], "extra": {"k": "v"}, "missing": None}),
        ])

        metadata = pinecone_stub.payloads("/vectors/upsert")[0]["vectors"][0]["metadata"]
        assert metadata == {"tags": ["a", "1"], "extra": '{"k": "v"}', "pageContent": "t"}

    @pytest.mark.asyncio
    async def test_failed_batch_fails_whole_store(self, make_store, pinecone_stub):
        pinecone_stub.failures["/vectors/upsert"] = {2}
        store = make_store()
        documents = [Document(text=f"t{i}") for i in range(150)]

        with pytest.raises(RuntimeError):
            await store.store_documents(documents)

        # first batch already written, no rollback
        assert len(pinecone_stub.calls("/vectors/upsert")) == 2


# ---------------------------------------------------------------------------
# delete_documents
# ---------------------------------------------------------------------------


class TestDeleteDocuments:
    @pytest.mark.asyncio
    async def test_single_bulk_delete(self, make_store, pinecone_stub):
        store = make_store()

        result = await store.delete_documents(["a", "b"])

        assert result == {"success": True, "count": 2}
        assert pinecone_stub.payloads("/vectors/delete") == [{"ids": ["a", "b"]}]

    @pytest.mark.asyncio
    async def test_delete_error_propagates(self, make_store, pinecone_stub):
        pinecone_stub.failures["/vectors/delete"] = {1}
        store = make_store()

        with pytest.raises(RuntimeError):
            await store.delete_documents(["a"])

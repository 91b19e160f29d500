import time
import logging
import httpx

from typing import Any, Dict, List, Optional
from ..config import (
    PINECONE_API_KEY,
    PINECONE_ENVIRONMENT,
    PINECONE_INDEX_NAME,
    PINECONE_INDEX_HOST,
    PINECONE_CONTROLLER_URL,
    UPSERT_BATCH_SIZE,
    DEFAULT_TOP_K,
    REQUEST_TIMEOUT,
)
from ..models import Document, RawHit
from .embedder import OpenAIEmbedder
from .utils import normalize_metadata

PINECONE_API_VERSION = "2024-07"


# -------------------------
# VECTOR STORE
# -------------------------

class PineconeVectorStore:
    def __init__(
        self,
        embedder: OpenAIEmbedder,
        api_key: Optional[str] = PINECONE_API_KEY,
        environment: Optional[str] = PINECONE_ENVIRONMENT,
        index_name: Optional[str] = PINECONE_INDEX_NAME,
        index_host: Optional[str] = PINECONE_INDEX_HOST,
        controller_url: str = PINECONE_CONTROLLER_URL,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            raise ValueError("PINECONE_API_KEY is required")
        if not environment:
            raise ValueError("PINECONE_ENVIRONMENT is required")
        if not index_name:
            raise ValueError("PINECONE_INDEX_NAME is required")

        self.embedder = embedder
        self.environment = environment
        self.index_name = index_name
        self.controller_url = controller_url.rstrip("/")
        self._host = _with_scheme(index_host) if index_host else None
        self._client = http_client or httpx.AsyncClient(timeout=REQUEST_TIMEOUT)
        self._headers = {
            "Api-Key": api_key,
            "X-Pinecone-API-Version": PINECONE_API_VERSION,
        }

        logging.info(f"[Pinecone] Service initialized with index: {self.index_name} ({self.environment})")

    async def initialize(self):
        """Log index statistics. Failure here is not fatal."""
        try:
            stats = await self.describe_index_stats()
            logging.info(
                f"[Pinecone] Connected to index with {stats.get('totalVectorCount') or 0} vectors"
            )
        except Exception as e:
            logging.warning(f"[Pinecone] Could not access index: {e}")

    async def close(self):
        await self._client.aclose()

    # -------------------------
    # HTTP PLUMBING
    # -------------------------
    async def _index_host(self) -> str:
        if self._host is None:
            data = await self._request("GET", f"{self.controller_url}/indexes/{self.index_name}")
            host = data.get("host")
            if not host:
                raise RuntimeError(f"Pinecone index '{self.index_name}' has no host")
            self._host = _with_scheme(host)
        return self._host

    async def _request(self, method: str, url: str, payload: Optional[Dict] = None) -> Dict[str, Any]:
        try:
            resp = await self._client.request(method, url, json=payload, headers=self._headers)
            resp.raise_for_status()
        except httpx.ConnectError:
            raise ConnectionError(f"Cannot connect to Pinecone at {url}")
        except httpx.HTTPStatusError as e:
            raise RuntimeError(f"Pinecone API error ({e.response.status_code}): {e.response.text}")

        if not resp.content:
            return {}
        return resp.json()

    async def _post(self, path: str, payload: Dict) -> Dict[str, Any]:
        host = await self._index_host()
        return await self._request("POST", f"{host}{path}", payload)

    # -------------------------
    # STATS
    # -------------------------
    async def describe_index_stats(self) -> Dict[str, Any]:
        return await self._post("/describe_index_stats", {})

    # -------------------------
    # SEARCH
    # -------------------------
    async def semantic_search(self, query: str, top_k: int = DEFAULT_TOP_K) -> List[RawHit]:
        try:
            logging.info(f'[Pinecone] Performing semantic search for query: "{query}" with topK={top_k}')

            query_vector = await self.embedder.embed_query(query)
            logging.debug(f"[Pinecone] Generated embedding of length: {len(query_vector)}")

            response = await self._post(
                "/query",
                {"vector": query_vector, "topK": top_k, "includeMetadata": True},
            )

            matches = response.get("matches") or []
            if not matches:
                logging.info("[Pinecone] No matches found for query")
                return []

            results = []
            for match in matches:
                metadata = match.get("metadata") or {}
                page_content = metadata.get("pageContent")
                content = page_content if isinstance(page_content, str) else ""
                results.append(RawHit(
                    id=match.get("id", ""),
                    score=match.get("score"),
                    content=content,
                    page_content=content,
                    metadata=metadata,
                ))

            logging.info(f"[Pinecone] Found {len(results)} results for query")
            return results

        except Exception as e:
            logging.error(f"[Pinecone] Error in semantic search: {e}", exc_info=True)
            raise

    # -------------------------
    # STORE
    # -------------------------
    async def store_documents(self, documents: List[Document]) -> Dict[str, Any]:
        try:
            logging.info(f"[Pinecone] Storing {len(documents)} documents")

            embeddings = await self.embedder.embed_documents([doc.text for doc in documents])

            stamp = int(time.time() * 1000)
            vectors = []
            for i, doc in enumerate(documents):
                doc_id = str(doc.metadata["id"]) if doc.metadata.get("id") else f"doc-{stamp}-{i}"
                metadata = normalize_metadata({**doc.metadata, "pageContent": doc.text})
                vectors.append({"id": doc_id, "values": embeddings[i], "metadata": metadata})

            for start in range(0, len(vectors), UPSERT_BATCH_SIZE):
                batch = vectors[start:start + UPSERT_BATCH_SIZE]
                await self._post("/vectors/upsert", {"vectors": batch})

            logging.info(f"[Pinecone] ✅ Successfully stored {len(documents)} documents")
            return {"success": True, "count": len(documents)}

        except Exception as e:
            logging.error(f"[Pinecone] Error storing documents: {e}", exc_info=True)
            raise

    # -------------------------
    # DELETE
    # -------------------------
    async def delete_documents(self, ids: List[str]) -> Dict[str, Any]:
        try:
            logging.info(f"[Pinecone] Deleting {len(ids)} documents")

            await self._post("/vectors/delete", {"ids": list(ids)})

            logging.info(f"[Pinecone] Successfully deleted {len(ids)} documents")
            return {"success": True, "count": len(ids)}

        except Exception as e:
            logging.error(f"[Pinecone] Error deleting documents: {e}", exc_info=True)
            raise


def _with_scheme(host: str) -> str:
    host = host.rstrip("/")
    if host.startswith("http://") or host.startswith("https://"):
        return host
    return f"https://{host}"

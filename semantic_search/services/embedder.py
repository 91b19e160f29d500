"""
OpenAI embedding client.

Turns text into vectors for the vector store. Queries are embedded one at a
time, documents in a single batch request.
"""
import logging
from typing import List, Optional

from openai import AsyncOpenAI

from ..config import EMBEDDING_MODEL, OPENAI_API_KEY, REQUEST_TIMEOUT


class OpenAIEmbedder:
    def __init__(
        self,
        api_key: Optional[str] = OPENAI_API_KEY,
        model: str = EMBEDDING_MODEL,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        if client is None and api_key:
            client = AsyncOpenAI(api_key=api_key, timeout=REQUEST_TIMEOUT, max_retries=0)
        self._client = client

    def _require_client(self) -> AsyncOpenAI:
        if self._client is None:
            raise RuntimeError("OPENAI_API_KEY is required for embeddings")
        return self._client

    async def embed_query(self, text: str) -> List[float]:
        vectors = await self.embed_documents([text])
        return vectors[0]

    async def embed_documents(self, texts: List[str]) -> List[List[float]]:
        client = self._require_client()
        resp = await client.embeddings.create(model=self.model, input=texts)
        if not resp.data:
            raise ValueError("No embeddings returned")

        # results are keyed by input position
        items = sorted(resp.data, key=lambda item: item.index)
        vectors = [item.embedding for item in items]
        logging.debug(f"[Embedder] Generated {len(vectors)} embedding(s) of length {len(vectors[0])}")
        return vectors

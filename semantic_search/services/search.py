"""
Search façade.

Validates requests, delegates to the vector store, normalizes and sorts hits,
and optionally enriches them with generated titles.
"""
import logging
import traceback
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from ..config import DEFAULT_TOP_K, DEMO_TOP_K, GENERATE_TITLES
from ..models import Document, DocumentIn, SearchHit
from .demo import demo_results
from .normalizer import normalize_hit, sort_by_score
from .titles import TitleGenerator
from .utils import clean_query
from .vector_store import PineconeVectorStore

HEALTH_MESSAGE = "Semantic search API is operational"
ERROR_TITLE = "Error Occurred"


class SearchService:
    def __init__(
        self,
        vector_store: PineconeVectorStore,
        title_generator: Optional[TitleGenerator] = None,
        generate_titles: bool = GENERATE_TITLES,
    ):
        self.vector_store = vector_store
        self.title_generator = title_generator
        self.generate_titles = generate_titles

    def _titles_enabled(self, with_titles: Optional[bool]) -> bool:
        enabled = self.generate_titles if with_titles is None else with_titles
        return enabled and self.title_generator is not None

    # -------------------------
    # SEMANTIC SEARCH
    # -------------------------
    async def semantic_search(
        self,
        query: Optional[str],
        top_k: Optional[int] = None,
        threshold: Optional[float] = None,
        with_titles: Optional[bool] = None,
    ) -> List[SearchHit]:
        if not clean_query(query):
            raise HTTPException(status_code=400, detail="Query parameter is required")

        logging.info(f'[Search] Received semantic search request for query: "{query}"')

        try:
            raw_hits = await self.vector_store.semantic_search(query, DEFAULT_TOP_K if top_k is None else top_k)

            # threshold is accepted but not applied
            hits = sort_by_score(normalize_hit(raw) for raw in raw_hits)

            if self._titles_enabled(with_titles):
                hits = await self.title_generator.enrich(hits)

            logging.info(f"[Search] Final results scores: {', '.join(str(h.score) for h in hits)}")
            return hits

        except Exception as e:
            # Degrade to a single error hit instead of failing the request
            logging.error(f"[Search] Error in semantic search: {e}")
            error_hit = SearchHit(
                id="error",
                score=0,
                content=f"Error occurred: {e}",
                metadata={"error": str(e), "stack": traceback.format_exc()},
            )
            if self._titles_enabled(with_titles):
                error_hit.title = ERROR_TITLE
            return [error_hit]

    # -------------------------
    # STORE / DELETE
    # -------------------------
    async def store_documents(self, documents: Optional[List[DocumentIn]]) -> Dict[str, Any]:
        if not documents:
            raise HTTPException(status_code=400, detail="Valid documents array is required")

        docs = [Document(text=doc.text, metadata=dict(doc.metadata or {})) for doc in documents]
        return await self.vector_store.store_documents(docs)

    async def delete_documents(self, ids: Optional[List[str]]) -> Dict[str, Any]:
        if not ids:
            raise HTTPException(status_code=400, detail="Valid ids array is required")

        return await self.vector_store.delete_documents(ids)

    # -------------------------
    # HEALTH / DEMO
    # -------------------------
    def health_check(self) -> Dict[str, str]:
        return {"status": "ok", "message": HEALTH_MESSAGE}

    async def demo_search(
        self,
        query: Optional[str],
        top_k: Optional[int] = None,
        with_titles: Optional[bool] = None,
    ) -> List[SearchHit]:
        hits = demo_results(query or "")[:DEMO_TOP_K if top_k is None else top_k]

        if self._titles_enabled(with_titles):
            hits = await self.title_generator.enrich(hits)

        logging.info(f"[Search] Final demo results scores: {', '.join(str(h.score) for h in hits)}")
        return hits

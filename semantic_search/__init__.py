"""
Semantic Search Service.

A FastAPI service that forwards search, storage and deletion requests to a
Pinecone index, using OpenAI for embeddings and for short result titles.

Main components:
- main: FastAPI application factory and lifespan wiring
- config: Configuration and environment variables
- models: Pydantic request/response models and internal records
- routes: API endpoint handlers
- services: Vector store client, embedder, normalizer, title generator, demo data
"""

from .main import app, create_app
from .config import PINECONE_INDEX_NAME, EMBEDDING_MODEL, TITLE_MODEL
from .models import SemanticSearchRequest, StoreDocumentsRequest, DeleteDocumentsRequest, SearchHit

__all__ = [
    "app",
    "create_app",
    "PINECONE_INDEX_NAME",
    "EMBEDDING_MODEL",
    "TITLE_MODEL",
    "SemanticSearchRequest",
    "StoreDocumentsRequest",
    "DeleteDocumentsRequest",
    "SearchHit",
]

import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from openai import AsyncOpenAI

from .config import OPENAI_API_KEY, REQUEST_TIMEOUT, configure_logging
from .routes import search
from .services.embedder import OpenAIEmbedder
from .services.search import SearchService
from .services.titles import TitleGenerator
from .services.vector_store import PineconeVectorStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the provider clients once at startup and close them on shutdown."""
    if getattr(app.state, "search_service", None) is not None:
        yield
        return

    openai_client = None
    if OPENAI_API_KEY:
        openai_client = AsyncOpenAI(api_key=OPENAI_API_KEY, timeout=REQUEST_TIMEOUT, max_retries=0)

    try:
        vector_store = PineconeVectorStore(embedder=OpenAIEmbedder(client=openai_client))
    except ValueError as e:
        logging.error(f"[Startup] Error initializing Pinecone service: {e}")
        raise

    await vector_store.initialize()
    app.state.search_service = SearchService(
        vector_store=vector_store,
        title_generator=TitleGenerator(client=openai_client),
    )
    logging.info("[Startup] Search service ready 🚀")

    yield

    await vector_store.close()
    if openai_client is not None:
        await openai_client.close()


def create_app(search_service: Optional[SearchService] = None) -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Semantic Search Service",
        version="1.0",
        description="Semantic search over a Pinecone index with OpenAI embeddings and generated titles",
        lifespan=lifespan,
    )
    if search_service is not None:
        app.state.search_service = search_service

    app.include_router(search.router)

    @app.get("/")
    def root():
        return {"message": "Semantic Search Service is running 🚀"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 3000))
    host = os.getenv("HOST", "0.0.0.0")
    print(f"Starting Semantic Search Service on {host}:{port}")
    uvicorn.run(app, host=host, port=port)

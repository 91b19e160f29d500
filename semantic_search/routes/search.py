import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from ..models import (
    SemanticSearchRequest,
    DemoSearchRequest,
    StoreDocumentsRequest,
    DeleteDocumentsRequest,
)
from ..services.search import SearchService

router = APIRouter(prefix="/search", tags=["search"])


def get_search_service(request: Request) -> SearchService:
    return request.app.state.search_service


# -------------------------
# SEMANTIC SEARCH
# -------------------------
@router.post("/semantic")
async def semantic_search(req: SemanticSearchRequest, service: SearchService = Depends(get_search_service)):
    hits = await service.semantic_search(req.query, top_k=req.top_k, threshold=req.threshold)
    return [hit.model_dump(exclude_none=True) for hit in hits]


# -------------------------
# STORE DOCUMENTS
# -------------------------
@router.post("/documents")
async def store_documents(req: StoreDocumentsRequest, service: SearchService = Depends(get_search_service)):
    try:
        return await service.store_documents(req.documents)
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"[Search:documents] Failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


# -------------------------
# DELETE DOCUMENTS
# -------------------------
@router.post("/delete")
async def delete_documents(req: DeleteDocumentsRequest, service: SearchService = Depends(get_search_service)):
    try:
        return await service.delete_documents(req.ids)
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"[Search:delete] Failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


# -------------------------
# HEALTH
# -------------------------
@router.get("/health")
async def health_check(service: SearchService = Depends(get_search_service)):
    return service.health_check()


# -------------------------
# DEMO (NO EXTERNAL STORE)
# -------------------------
@router.post("/demo")
async def demo_search(req: DemoSearchRequest, service: SearchService = Depends(get_search_service)):
    """Search a fixed in-memory dataset; works without Pinecone."""
    hits = await service.demo_search(req.query, top_k=req.top_k)
    return [hit.model_dump(exclude_none=True) for hit in hits]

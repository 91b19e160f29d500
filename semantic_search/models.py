from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# -------------------------
# REQUESTS
# -------------------------

class SemanticSearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = None
    top_k: Optional[int] = Field(default=None, alias="topK")
    threshold: Optional[float] = None


class DemoSearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = ""
    top_k: Optional[int] = Field(default=None, alias="topK")


class DocumentIn(BaseModel):
    text: str
    metadata: Optional[Dict[str, Any]] = None


class StoreDocumentsRequest(BaseModel):
    documents: Optional[List[DocumentIn]] = None


class DeleteDocumentsRequest(BaseModel):
    ids: Optional[List[str]] = None


# -------------------------
# RESPONSES
# -------------------------

class SearchHit(BaseModel):
    id: str
    score: float
    content: str
    title: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


# -------------------------
# INTERNAL
# -------------------------

@dataclass
class Document:
    text: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RawHit:
    """A match as returned by the vector store, before normalization.

    Every field except ``id`` is optional because providers and ingestion
    pipelines disagree on where the text lives.
    """
    id: str
    score: Optional[float] = None
    content: Optional[str] = None
    page_content: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

"""
Result normalization.

Raw hits coming back from the vector store do not agree on where the original
text lives: LangChain writes ``pageContent``, LlamaIndex packs a JSON node into
``_node_content``, other loaders use ``content`` or ``text``. Content is
recovered by walking an ordered list of extraction rules; the first rule that
yields a non-empty string wins.
"""
import json
import logging
from typing import Callable, Iterable, List, Optional

from ..models import RawHit, SearchHit

NO_CONTENT = "No content available"

ExtractionRule = Callable[[RawHit], Optional[str]]


def _direct_text(hit: RawHit) -> Optional[str]:
    if isinstance(hit.page_content, str) and hit.page_content:
        return hit.page_content
    return None


def _content_field(hit: RawHit) -> Optional[str]:
    return str(hit.content) if hit.content else None


def _node_content(hit: RawHit) -> Optional[str]:
    raw = hit.metadata.get("_node_content")
    if not raw:
        return None
    try:
        node = json.loads(raw)
    except (TypeError, ValueError) as e:
        logging.error(f"[Normalizer] Error parsing _node_content for {hit.id}: {e}")
        return None
    if isinstance(node, dict) and node.get("text"):
        return str(node["text"])
    return None


def _metadata_field(key: str) -> ExtractionRule:
    def rule(hit: RawHit) -> Optional[str]:
        value = hit.metadata.get(key)
        return str(value) if value else None
    rule.__name__ = f"_metadata_{key}"
    return rule


EXTRACTION_RULES: List[ExtractionRule] = [
    _direct_text,
    _content_field,
    _node_content,
    _metadata_field("pageContent"),
    _metadata_field("content"),
    _metadata_field("text"),
]


def extract_content(hit: RawHit) -> str:
    for rule in EXTRACTION_RULES:
        content = rule(hit)
        if content:
            return content

    logging.warning(f"[Normalizer] No content found for result {hit.id}")
    return NO_CONTENT


def normalize_hit(hit: RawHit) -> SearchHit:
    meta = hit.metadata or {}
    return SearchHit(
        id=hit.id,
        score=abs(hit.score or 0),
        content=extract_content(hit),
        metadata={
            "document_id": meta.get("document_id") or meta.get("doc_id") or "",
            "file_name": meta.get("file_name") or "",
            "file_type": meta.get("file_type") or "",
        },
    )


def sort_by_score(hits: Iterable[SearchHit]) -> List[SearchHit]:
    return sorted(hits, key=lambda h: h.score, reverse=True)

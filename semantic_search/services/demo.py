"""
Offline demo search.

Serves a small fixed dataset so the API can be exercised without Pinecone or
OpenAI credentials. Scores are nudged by simple keyword matching.
"""
from typing import List

from ..models import SearchHit
from .normalizer import sort_by_score

DEMO_DOCUMENTS = [
    {
        "id": "jmi-newsletter-1",
        "score": 0.92,
        "content": (
            "# James Madison Intermediate School | Smore Newsletters\n\n"
            "Table of Contents vertical_align_top\n\n"
            "[SCIENCE FAIR REMINDERS](#bb2dy8flk7)\n"
            "[FEBRUARY IS THE MONTH OF KINDNESS AT JMI](#bprmklsur4)\n"
            "[VALENTINE'S DAY REMINDERS FOR JMI](#bd988o7zgj)\n"
            "[JMI'S 2ND ANNUAL VOCABULARY PARADE](#bjo73hlunw)\n"
            "[JMI FAMILY HANDBOOK 2024-2025](#bgu50p3rin)\n"
            "[JMI SUNDAY UPDATES](#b4h22sz2sz)\n\n"
            "# James Madison Intermediate School\n\n"
            "## FEBRUARY 2025\n\n"
            "# February 2025\n\n"
            "\"Let your KNIGHT Light Shine Bright!\""
        ),
        "metadata": {
            "document_id": "8b161afb-4d6a-4ce1-a113-3dbccc2da79d",
            "file_name": "jmi-newsletter-feb-2025.md",
            "file_type": "text/markdown",
            "topic": "school newsletter",
        },
    },
    {
        "id": "jmi-events-1",
        "score": 0.87,
        "content": (
            "## JMI STEM Night -6:00 p.m.\n\n"
            "Guest Reader Day\n"
            "Green Eggs and Ham Day! Wear Green!\n"
            "Golden Knight Luncheon\n"
            "Reading Jogs the Mind! Wear Workout Attire!\n"
            "Rutgers's Women Lacrosse Visit\n"
            "Thing 1 and 2 Day! Wear Matching Outfits with a friend or more!\n"
            "If I Ran the Zoo Day! Wear Animal Print!\n"
            "Let's Have a Parade! Dress up as the word you Choose for the Vocabulary Parade!"
        ),
        "metadata": {
            "document_id": "fb83a294-cf85-4298-9b4e-af30783e8894",
            "file_name": "march-2025-calendar.md",
            "file_type": "text/markdown",
            "topic": "school events",
        },
    },
    {
        "id": "jmi-departments-1",
        "score": 0.78,
        "content": (
            "#### GIFTED AND TALENTED\n\n"
            "[Please click here to view the February Newsletter from Mrs. Lehrman.]\n\n"
            "#### STRINGS\n\n"
            "[Please click here to view the February Newsletter from Mrs. Biscocho.]\n\n"
            "#### SPANISH\n\n"
            "[Please click here to view the February Newsletter from Sra. Nunez.]\n\n"
            "#### PHYSICAL EDUCATION\n\n"
            "[Please click here to view the February Newsletter from Mr. Molnar and Mr. Morales.]\n\n"
            "#### RESPONSE TO INTERVENTION (Math and Reading)\n\n"
            "[Please click here to view the February Newsletter from Mrs. Rudnick and Mrs. Zapoticzny.]"
        ),
        "metadata": {
            "document_id": "8b161afb-4d6a-4ce1-a113-3dbccc2da79d",
            "file_name": "jmi-departments.md",
            "file_type": "text/markdown",
            "topic": "school departments",
        },
    },
    {
        "id": "pinecone-info-1",
        "score": 0.89,
        "content": (
            "Pinecone is a vector database that makes it easy to build high-performance vector "
            "search applications. It provides scalable vector storage with fast, approximate "
            "nearest neighbor search capabilities."
        ),
        "metadata": {
            "document_id": "pinecone-doc-1",
            "file_name": "pinecone-overview.md",
            "file_type": "text/markdown",
            "topic": "databases",
        },
    },
    {
        "id": "semantic-search-1",
        "score": 0.82,
        "content": (
            "Semantic search understands the intent and contextual meaning of search queries "
            "rather than just matching keywords. It uses embeddings to represent the meaning "
            "of text in a high-dimensional vector space."
        ),
        "metadata": {
            "document_id": "semantic-doc-1",
            "file_name": "semantic-search-overview.md",
            "file_type": "text/markdown",
            "topic": "search technology",
        },
    },
]

EXACT_MATCH_BOOST, EXACT_MATCH_CAP = 1.2, 0.99
TOPIC_MATCH_BOOST, TOPIC_MATCH_CAP = 1.1, 0.95
NO_MATCH_PENALTY = 0.7


def adjust_score(score: float, content: str, topic: str, query: str) -> float:
    """Rescore one demo entry against a lower-cased query."""
    content = content.lower()

    if query in content:
        return min(score * EXACT_MATCH_BOOST, EXACT_MATCH_CAP)

    if query in topic.lower():
        return min(score * TOPIC_MATCH_BOOST, TOPIC_MATCH_CAP)

    # partial overlap leaves the score alone
    if any(term in content for term in query.split(" ")):
        return score

    return score * NO_MATCH_PENALTY


def demo_results(query: str) -> List[SearchHit]:
    lower_query = (query or "").lower()

    hits = []
    for doc in DEMO_DOCUMENTS:
        score = doc["score"]
        if lower_query:
            score = adjust_score(score, doc["content"], doc["metadata"].get("topic", ""), lower_query)
        hits.append(SearchHit(
            id=doc["id"],
            score=score,
            content=doc["content"],
            metadata=dict(doc["metadata"]),
        ))

    return sort_by_score(hits)

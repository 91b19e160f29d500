import re
import asyncio
import logging
from typing import List, Optional

from openai import AsyncOpenAI

from ..config import OPENAI_API_KEY, TITLE_MODEL, REQUEST_TIMEOUT
from ..models import SearchHit
from .normalizer import NO_CONTENT

FALLBACK_TITLE = "Untitled Document"
MAX_CONTENT_CHARS = 1000

TITLE_SYSTEM_PROMPT = (
    "You are a helpful assistant that generates concise, descriptive titles for text content. "
    "Create a title that is brief (5-7 words maximum) but captures the essence of the content."
)

_QUOTES_RE = re.compile(r"^[\"']|[\"']$")


class TitleGenerator:
    def __init__(
        self,
        api_key: Optional[str] = OPENAI_API_KEY,
        model: str = TITLE_MODEL,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        if client is None and api_key:
            client = AsyncOpenAI(api_key=api_key, timeout=REQUEST_TIMEOUT, max_retries=0)
        if client is None:
            logging.warning("[Titles] OPENAI_API_KEY not set → fallback titles only")
        self._client = client

    async def generate_title(self, content: str) -> str:
        if not content or content == NO_CONTENT or self._client is None:
            return FALLBACK_TITLE

        try:
            truncated = content[:MAX_CONTENT_CHARS] + "..." if len(content) > MAX_CONTENT_CHARS else content

            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": TITLE_SYSTEM_PROMPT},
                    {"role": "user", "content": f'Generate a concise title for this content: "{truncated}"'},
                ],
                max_tokens=30,
                temperature=0.7,
            )

            title = ""
            if response.choices:
                title = (response.choices[0].message.content or "").strip()
            if not title:
                return FALLBACK_TITLE
            return _QUOTES_RE.sub("", title)

        except Exception as e:
            logging.error(f"[Titles] Error generating title: {e}")
            return FALLBACK_TITLE

    async def enrich(self, hits: List[SearchHit]) -> List[SearchHit]:
        """Attach a generated title to every hit; order is preserved."""
        titles = await asyncio.gather(*(self.generate_title(hit.content) for hit in hits))
        return [hit.model_copy(update={"title": title}) for hit, title in zip(hits, titles)]

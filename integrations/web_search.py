"""Web search integration backed by the Brave Search API."""
from __future__ import annotations

from typing import Dict, List, Optional
import logging
import os

import requests

logger = logging.getLogger(__name__)

BRAVE_ENDPOINT = "https://api.search.brave.com/res/v1/web/search"
PLACEHOLDER_URL = "https://example.com"


def placeholder_results(query: str) -> List[Dict[str, str]]:
    """Single stub result used when no API key is configured."""
    return [
        {
            "title": f"Search result for: {query}",
            "url": PLACEHOLDER_URL,
            "snippet": "API key not configured. Set BRAVE_API_KEY for real search results.",
        }
    ]


class WebSearchAPI:
    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 12.0,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.brave_key = api_key or os.getenv("BRAVE_API_KEY")
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.brave_key)

    def search(self, query: str, max_results: int = 5) -> List[Dict[str, str]]:
        """
        Search the web for ``query``.

        Without credentials one placeholder result is returned so callers
        always have a stub source. Provider errors yield an empty list.
        """
        if not query:
            return []
        if not self.brave_key:
            logger.info("BRAVE_API_KEY not set; returning placeholder result")
            return placeholder_results(query)
        return self._search_brave(query, max_results)

    def _search_brave(self, query: str, max_results: int) -> List[Dict[str, str]]:
        try:
            response = self.session.get(
                BRAVE_ENDPOINT,
                params={"q": query, "count": max_results},
                headers={
                    "Accept": "application/json",
                    "X-Subscription-Token": self.brave_key,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except Exception as exc:
            logger.warning("Brave search failed for %r: %s", query, exc)
            return []
        if not isinstance(payload, dict):
            logger.warning("Brave search returned an unexpected payload for %r", query)
            return []

        results = []
        for item in (payload.get("web") or {}).get("results", []):
            results.append(
                {
                    "title": item.get("title", ""),
                    "url": item.get("url", ""),
                    "snippet": item.get("description", ""),
                }
            )
            if len(results) >= max_results:
                break
        return results

"""
Research agent.

Expands a topic into search queries, runs a web search per query, keeps a
deduplicated, depth-capped list of sources, asks the LLM for a cited
synthesis and files the report at the top of RESEARCH.md.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from integrations.web_search import WebSearchAPI

from ..config import ToolkitConfig
from ..llm_client import LLMClient
from ..markdown_editor import insert
from .. import templates
from .base import BaseAgent, now_iso, today_iso

logger = logging.getLogger(__name__)

# depth -> (search queries, max sources)
DEPTH_LIMITS: Dict[str, tuple[int, int]] = {
    "quick": (1, 2),
    "standard": (3, 5),
    "deep": (5, 10),
}
DEFAULT_DEPTH = "standard"

QUERY_PROMPT = """Generate {count} diverse search queries to research this topic thoroughly.

Topic: {topic}
{context_line}

Requirements:
- Each query should explore a different angle
- Include both broad and specific queries
- Consider: definitions, examples, comparisons, best practices, recent developments

Return ONLY the queries, one per line, no numbering or explanations."""

SYNTHESIS_PROMPT = """You are a research analyst. Synthesize the following sources into a comprehensive research summary.

TOPIC: {topic}
{context_line}

SOURCES:
{sources}

Instructions:
1. Provide a clear, well-organized summary of the key findings
2. Highlight important facts, statistics, and insights
3. Note any conflicting information or gaps
4. Include practical takeaways or recommendations
5. Cite sources using [1], [2], etc.

Format your response with clear sections using markdown headers."""


def depth_limits(depth: str) -> tuple[int, int]:
    """Return (query count, source cap) for a depth; unknown depths use standard."""
    if depth not in DEPTH_LIMITS:
        logger.warning(f"Unknown research depth {depth!r}; using {DEFAULT_DEPTH}")
    return DEPTH_LIMITS.get(depth, DEPTH_LIMITS[DEFAULT_DEPTH])


class ResearchAgent(BaseAgent):
    """Web research over a search provider and the local LLM."""

    def __init__(
        self,
        config: Optional[ToolkitConfig] = None,
        llm: Optional[LLMClient] = None,
        search: Optional[WebSearchAPI] = None,
    ):
        super().__init__(config, llm)
        self.search_api = search or WebSearchAPI(api_key=self.config.search.api_key)

    @property
    def research_path(self):
        return self.path_for(templates.RESEARCH_FILE)

    def research(
        self,
        topic: str,
        depth: str = DEFAULT_DEPTH,
        save: bool = True,
        context: str = "",
    ) -> Dict[str, Any]:
        """
        Research a topic end to end.

        Args:
            topic: What to research
            depth: 'quick', 'standard' or 'deep'
            save: Whether to file the report in RESEARCH.md
            context: Additional context for query generation and synthesis

        Returns:
            Dict with topic, synthesis, sources, report and saved_at
        """
        logger.info(f"Starting {depth} research on: {topic}")
        query_count, _ = depth_limits(depth)

        queries = self.generate_search_queries(topic, query_count, context)
        logger.info(f"Generated {len(queries)} search queries")

        search_results = []
        for query in queries:
            results = self.web_search(query)
            search_results.append({"query": query, "results": results})
            logger.info(f"{query!r} - {len(results)} results")

        sources = self.fetch_sources(search_results, depth)
        logger.info(f"Collected {len(sources)} sources")

        synthesis = self.synthesize(topic, sources, context)
        report = self.format_report(topic, synthesis, sources)

        saved_at = None
        if save:
            self.save_to_research(topic, report)
            saved_at = now_iso()
            logger.info(f"Saved to {self.research_path}")

        return {
            "topic": topic,
            "synthesis": synthesis,
            "sources": sources,
            "report": report,
            "saved_at": saved_at,
        }

    def generate_search_queries(self, topic: str, count: int, context: str = "") -> List[str]:
        prompt = QUERY_PROMPT.format(
            count=count,
            topic=topic,
            context_line=f"Context: {context}" if context else "",
        )
        response = self._call_llm(prompt)
        queries = [line.strip() for line in response.split("\n") if line.strip()][:count]

        # The literal topic is always searched
        if topic not in queries:
            queries.insert(0, topic)

        return queries[:count]

    def web_search(self, query: str) -> List[Dict[str, str]]:
        """Search one query; failures contribute zero results."""
        try:
            return self.search_api.search(query, max_results=self.config.search.max_results)
        except Exception as e:
            logger.warning(f"Search failed for {query!r}: {e}")
            return []

    def fetch_sources(
        self, search_results: List[Dict[str, Any]], depth: str = DEFAULT_DEPTH
    ) -> List[Dict[str, str]]:
        """Flatten per-query results in order, first URL occurrence wins, capped by depth."""
        _, max_sources = depth_limits(depth)
        sources: List[Dict[str, str]] = []
        seen_urls: set[str] = set()

        for entry in search_results:
            query = entry["query"]
            for result in entry["results"]:
                if len(sources) >= max_sources:
                    return sources
                url = result.get("url", "")
                if url in seen_urls:
                    continue
                seen_urls.add(url)
                sources.append(
                    {
                        "title": result.get("title", ""),
                        "url": url,
                        "snippet": result.get("snippet", ""),
                        "query": query,
                    }
                )

        return sources

    def synthesize(self, topic: str, sources: List[Dict[str, str]], context: str = "") -> str:
        sources_text = "\n\n".join(
            f"[{i}] {s['title']}\nURL: {s['url']}\nSnippet: {s['snippet']}"
            for i, s in enumerate(sources, start=1)
        )
        prompt = SYNTHESIS_PROMPT.format(
            topic=topic,
            context_line=f"CONTEXT: {context}" if context else "",
            sources=sources_text,
        )
        return self._call_llm(prompt)

    def format_report(self, topic: str, synthesis: str, sources: List[Dict[str, str]]) -> str:
        sources_list = "\n".join(
            f"{i}. [{s['title']}]({s['url']})" for i, s in enumerate(sources, start=1)
        )
        return (
            f"## {topic}\n\n"
            f"> Researched: {today_iso()}\n"
            f"> Sources: {len(sources)}\n\n"
            f"{synthesis}\n\n"
            f"### Sources\n"
            f"{sources_list}\n\n"
            f"---\n"
        )

    def save_to_research(self, topic: str, report: str) -> None:
        """Insert the report directly below the file's leading divider."""
        insert(
            self.research_path,
            templates.DIVIDER_ANCHOR,
            "\n" + report.rstrip("\n"),
            boilerplate=templates.RESEARCH_BOILERPLATE,
        )
        logger.debug(f"Filed research report for {topic!r}")

    def quick(self, topic: str, context: str = "") -> Dict[str, Any]:
        """Single search, brief summary."""
        return self.research(topic, depth="quick", context=context)

    def deep(self, topic: str, context: str = "") -> Dict[str, Any]:
        """Thorough multi-angle investigation."""
        return self.research(topic, depth="deep", context=context)

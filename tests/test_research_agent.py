"""Tests for the research agent with fake search and LLM backends."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from unittest.mock import Mock

import pytest

from integrations.web_search import PLACEHOLDER_URL, WebSearchAPI
from toolkit.agents.research_agent import DEPTH_LIMITS, ResearchAgent, depth_limits


def result(n: int) -> dict:
    return {"title": f"Title {n}", "url": f"https://site{n}.example", "snippet": f"Snippet {n}"}


def query_reply(*queries: str) -> str:
    return "\n".join(queries)


@pytest.fixture
def search():
    api = Mock(spec=WebSearchAPI)
    api.search.return_value = []
    return api


@pytest.fixture
def agent_factory(make_config, fake_llm_factory, search):
    def _make(replies):
        llm = fake_llm_factory(replies)
        return ResearchAgent(make_config(), llm=llm, search=search), llm

    return _make


class TestDepthLimits:
    def test_table(self):
        assert DEPTH_LIMITS == {"quick": (1, 2), "standard": (3, 5), "deep": (5, 10)}

    def test_unknown_depth_is_standard(self):
        assert depth_limits("exhaustive") == (3, 5)


class TestGenerateSearchQueries:
    def test_topic_prepended_when_missing(self, agent_factory):
        agent, _ = agent_factory(query_reply("angle one", "angle two", "angle three"))

        queries = agent.generate_search_queries("vector databases", 3)

        assert queries == ["vector databases", "angle one", "angle two"]

    def test_topic_not_duplicated(self, agent_factory):
        agent, _ = agent_factory(query_reply("angle one", "vector databases", "angle two"))

        queries = agent.generate_search_queries("vector databases", 3)

        assert queries == ["angle one", "vector databases", "angle two"]

    def test_blank_lines_dropped_and_trimmed(self, agent_factory):
        agent, _ = agent_factory("\n  a  \n\n b\n")

        assert agent.generate_search_queries("topic", 5) == ["topic", "a", "b"]

    def test_quick_is_topic_only(self, agent_factory):
        agent, _ = agent_factory(query_reply("x", "y"))

        assert agent.generate_search_queries("topic", 1) == ["topic"]

    def test_context_in_prompt(self, agent_factory):
        agent, llm = agent_factory("")

        agent.generate_search_queries("topic", 3, context="for a talk")

        assert "Context: for a talk" in llm.prompts[0]
        assert "Generate 3 diverse search queries" in llm.prompts[0]


class TestFetchSources:
    def test_dedup_first_occurrence_wins(self, agent_factory):
        agent, _ = agent_factory("")
        duplicate = {"title": "Other", "url": "https://site1.example", "snippet": "Other"}

        sources = agent.fetch_sources(
            [
                {"query": "first", "results": [result(1), result(2)]},
                {"query": "second", "results": [duplicate, result(3)]},
            ]
        )

        assert [s["url"] for s in sources] == [
            "https://site1.example",
            "https://site2.example",
            "https://site3.example",
        ]
        assert sources[0] == {
            "title": "Title 1",
            "url": "https://site1.example",
            "snippet": "Snippet 1",
            "query": "first",
        }
        assert sources[2]["query"] == "second"

    @pytest.mark.parametrize("depth, cap", [("quick", 2), ("standard", 5), ("deep", 10)])
    def test_capped_by_depth(self, agent_factory, depth, cap):
        agent, _ = agent_factory("")
        batches = [
            {"query": f"q{b}", "results": [result(b * 10 + i) for i in range(5)]}
            for b in range(4)
        ]

        assert len(agent.fetch_sources(batches, depth)) == cap

    def test_no_results(self, agent_factory):
        agent, _ = agent_factory("")

        assert agent.fetch_sources([{"query": "q", "results": []}]) == []


class TestResearch:
    @pytest.mark.parametrize("depth, queries", [("quick", 1), ("standard", 3), ("deep", 5)])
    def test_query_count_per_depth(self, agent_factory, search, depth, queries):
        reply = query_reply(*[f"angle {i}" for i in range(10)])
        agent, _ = agent_factory([reply, "synthesis"])

        agent.research("topic", depth=depth, save=False)

        assert search.search.call_count == queries
        assert search.search.call_args_list[0].args[0] == "topic"

    def test_failing_query_does_not_abort(self, agent_factory, search):
        def fake_search(query, max_results=5):
            if query == "broken":
                raise RuntimeError("rate limited")
            return [{"title": query, "url": f"https://{query}.example", "snippet": query}]

        search.search.side_effect = fake_search
        agent, _ = agent_factory([query_reply("broken", "works"), "synthesis"])

        outcome = agent.research("topic", save=False)

        assert search.search.call_count == 3
        assert [s["query"] for s in outcome["sources"]] == ["topic", "works"]

    def test_synthesis_prompt_numbers_sources(self, agent_factory, search):
        search.search.side_effect = lambda query, max_results=5: [result(len(query))]
        agent, llm = agent_factory(["", "the synthesis"])

        outcome = agent.research("abc", depth="quick", save=False, context="beginners")

        prompt, temperature = llm.calls[1]
        assert "TOPIC: abc" in prompt
        assert "CONTEXT: beginners" in prompt
        assert "[1] Title 3\nURL: https://site3.example\nSnippet: Snippet 3" in prompt
        assert temperature == 0.7
        assert outcome["synthesis"] == "the synthesis"
        assert outcome["saved_at"] is None

    def test_report_format(self, agent_factory, search):
        search.search.side_effect = lambda query, max_results=5: [result(1), result(2)]
        agent, _ = agent_factory(["", "Key findings [1]."])

        outcome = agent.research("Topic", depth="quick", save=False)

        today = date.today().isoformat()
        assert outcome["report"] == (
            "## Topic\n\n"
            f"> Researched: {today}\n"
            "> Sources: 2\n\n"
            "Key findings [1].\n\n"
            "### Sources\n"
            "1. [Title 1](https://site1.example)\n"
            "2. [Title 2](https://site2.example)\n\n"
            "---\n"
        )

    def test_saved_below_divider_newest_first(self, agent_factory, search, workspace: Path):
        search.search.side_effect = lambda query, max_results=5: [result(1)]
        agent, _ = agent_factory(["", "older synthesis", "", "newer synthesis"])

        agent.research("Older", depth="quick")
        outcome = agent.research("Newer", depth="quick")

        text = (workspace / "RESEARCH.md").read_text()
        assert text.startswith("# Research Notes")
        assert text.index("## Newer") < text.index("## Older")
        assert text.index("---") < text.index("## Newer")
        assert outcome["saved_at"] is not None

    def test_existing_file_without_divider_gets_one(self, agent_factory, workspace: Path):
        path = workspace / "RESEARCH.md"
        path.write_text("# Research Notes\n\n## To Research\n- [ ] something\n")
        agent, _ = agent_factory(["", "synthesis"])

        agent.research("Topic", depth="quick")

        text = path.read_text()
        assert text.startswith("# Research Notes\n\n## To Research\n- [ ] something\n")
        assert "\n---\n\n\n## Topic" in text

    def test_search_max_results_from_config(self, make_config, fake_llm_factory, search):
        agent = ResearchAgent(
            make_config(max_results=3), llm=fake_llm_factory(["", "s"]), search=search
        )

        agent.research("topic", depth="quick", save=False)

        assert search.search.call_args.kwargs["max_results"] == 3


class TestWithoutSearchKey:
    def test_placeholder_source(self, make_config, fake_llm_factory):
        llm = fake_llm_factory(["", "synthesis"])
        agent = ResearchAgent(make_config(), llm=llm, search=WebSearchAPI(session=Mock()))

        outcome = agent.research("vector databases", depth="quick", save=False)

        assert len(outcome["sources"]) == 1
        assert outcome["sources"][0]["url"] == PLACEHOLDER_URL
        assert outcome["sources"][0]["title"] == "Search result for: vector databases"


class TestWrappers:
    def test_quick_and_deep(self, agent_factory):
        agent, _ = agent_factory("")
        agent.research = Mock(return_value={})

        agent.quick("a", context="c")
        agent.deep("b")

        agent.research.assert_any_call("a", depth="quick", context="c")
        agent.research.assert_any_call("b", depth="deep", context="")

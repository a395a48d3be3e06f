"""Tests for the content writer agent."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from unittest.mock import Mock

import pytest

from toolkit.agents.content_writer import (
    CONTENT_TYPES,
    TYPE_INSTRUCTIONS,
    ContentWriter,
    extract_keywords,
    type_instructions,
)


RESEARCH = """# Research Notes

---

## Vector databases

Embeddings and similarity search.

## Kubernetes operators

Nothing about storage here.

## Choosing a vector store

Pinecone versus pgvector.

## Vector search at scale

Sharding notes.
"""


@pytest.fixture
def writer_factory(make_config, fake_llm_factory):
    def _make(replies="Generated body"):
        llm = fake_llm_factory(replies)
        return ContentWriter(make_config(), llm=llm), llm

    return _make


class TestKeywords:
    def test_short_words_dropped(self):
        assert extract_keywords("AI in the Cloud era") == ["cloud"]

    def test_lowercased(self):
        assert extract_keywords("Vector Databases") == ["vector", "databases"]


class TestRelevantResearch:
    def test_at_most_two_matching_sections(self, writer_factory, workspace: Path):
        (workspace / "RESEARCH.md").write_text(RESEARCH)
        writer, _ = writer_factory()

        research = writer.get_relevant_research("vector stuff")

        assert research.startswith("## Vector databases")
        assert "## Choosing a vector store" in research
        assert "Kubernetes" not in research
        assert "Vector search at scale" not in research

    def test_no_keywords_means_no_research(self, writer_factory, workspace: Path):
        (workspace / "RESEARCH.md").write_text(RESEARCH)
        writer, _ = writer_factory()

        assert writer.get_relevant_research("AI ML") == ""

    def test_missing_research_file(self, writer_factory):
        writer, _ = writer_factory()

        assert writer.get_relevant_research("vector databases") == ""

    def test_research_reaches_prompt(self, writer_factory, workspace: Path):
        (workspace / "RESEARCH.md").write_text(RESEARCH)
        writer, llm = writer_factory()

        writer.write("vector databases", save=False)

        assert "RELEVANT RESEARCH (incorporate naturally):" in llm.prompts[0]
        assert "Embeddings and similarity search." in llm.prompts[0]

    def test_research_can_be_disabled(self, writer_factory, workspace: Path):
        (workspace / "RESEARCH.md").write_text(RESEARCH)
        writer, llm = writer_factory()

        writer.write("vector databases", use_research=False, save=False)

        assert "RELEVANT RESEARCH" not in llm.prompts[0]


class TestPrompt:
    def test_type_tone_audience(self, writer_factory):
        writer, llm = writer_factory()

        writer.write("Remote work", type="email", tone="casual", audience="managers", save=False)

        prompt, temperature = llm.calls[0]
        assert "Create email content" in prompt
        assert "TOPIC: Remote work" in prompt
        assert "AUDIENCE: managers" in prompt
        assert "TONE: casual" in prompt
        assert "talking to a friend" in prompt
        assert "Subject line" in prompt
        assert temperature == 0.8

    def test_unknown_tone_has_no_guide(self, writer_factory):
        writer, llm = writer_factory()

        writer.write("Remote work", tone="pirate", save=False)

        assert "TONE: pirate\n\n" in llm.prompts[0]

    def test_context_block(self, writer_factory):
        writer, llm = writer_factory()

        writer.write("Remote work", context="Company all-hands", save=False)

        assert "ADDITIONAL CONTEXT:\nCompany all-hands" in llm.prompts[0]

    def test_unknown_type_uses_blog_instructions(self, writer_factory):
        writer, llm = writer_factory()

        writer.write("Remote work", type="haiku", save=False)

        assert "Write a blog post." in llm.prompts[0]
        assert "Create haiku content" in llm.prompts[0]


class TestTypeInstructions:
    @pytest.mark.parametrize("content_type", CONTENT_TYPES)
    def test_every_type_has_instructions(self, content_type):
        assert type_instructions(content_type)

    def test_table_keyed_by_type(self):
        assert set(TYPE_INSTRUCTIONS) == {"blog", "social", "email", "script", "outline", "thread"}
        assert CONTENT_TYPES == tuple(TYPE_INSTRUCTIONS)

    def test_unknown_type_matches_blog(self):
        assert type_instructions("haiku", 500) == type_instructions("blog", 500)

    def test_types_without_length_hint_ignore_length(self):
        assert type_instructions("outline", 900) == TYPE_INSTRUCTIONS["outline"]

    def test_blog_default_length(self):
        assert "Aim for 600-800 words." in type_instructions("blog")

    def test_blog_target_length(self):
        assert "Target approximately 1200 words." in type_instructions("blog", 1200)

    def test_script_minutes(self):
        assert "Target 450 words (roughly 3 minutes)." in type_instructions("script", 450)
        assert "Aim for 3-5 minutes of content." in type_instructions("script")

    def test_email_length_only_when_given(self):
        assert "Target approximately" not in type_instructions("email")
        assert "Target approximately 300 words for the body." in type_instructions("email", 300)


class TestOutputAndSave:
    def test_output_header(self, writer_factory):
        writer, _ = writer_factory("Body text")

        outcome = writer.write("Remote work", type="social", tone="witty", save=False)

        today = date.today().isoformat()
        assert outcome["output"] == (
            "### Remote work\n\n"
            f"> Type: social | Tone: witty | Created: {today}\n\n"
            "Body text\n\n"
            "---\n"
        )
        assert outcome["content"] == "Body text"
        assert outcome["saved_at"] is None

    def test_saved_under_drafts_newest_first(self, writer_factory, workspace: Path):
        writer, _ = writer_factory(["first body", "second body"])

        writer.write("First", use_research=False)
        outcome = writer.write("Second", use_research=False)

        text = (workspace / "CONTENT.md").read_text()
        assert text.startswith("# Content Drafts")
        assert text.index("## Drafts") < text.index("### Second") < text.index("### First")
        assert outcome["saved_at"] is not None

    def test_ideas_section_left_alone(self, writer_factory, workspace: Path):
        path = workspace / "CONTENT.md"
        path.write_text("# Content\n\n## Ideas\n- [ ] idea\n\n## Drafts\n")
        writer, _ = writer_factory("body")

        writer.write("Topic", use_research=False)

        text = path.read_text()
        assert text.startswith("# Content\n\n## Ideas\n- [ ] idea\n\n## Drafts\n\n### Topic")


class TestWrappers:
    @pytest.mark.parametrize("name", CONTENT_TYPES)
    def test_wrapper_fixes_type(self, writer_factory, name):
        writer, _ = writer_factory()
        writer.write = Mock(return_value={})

        getattr(writer, name)("topic", tone="casual", type="ignored")

        writer.write.assert_called_once_with("topic", tone="casual", type=name)

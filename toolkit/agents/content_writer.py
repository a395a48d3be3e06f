"""Content writer agent: drafts blog posts, social copy, emails and scripts."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..markdown_editor import insert
from .. import templates
from .base import BaseAgent, now_iso, today_iso

logger = logging.getLogger(__name__)

MAX_RESEARCH_SECTIONS = 2
MIN_KEYWORD_LENGTH = 4


DEFAULT_CONTENT_TYPE = "blog"

TYPE_INSTRUCTIONS: Dict[str, str] = {
    "blog": (
        "Write a blog post. Include an engaging introduction, clear sections with "
        "headers, and a conclusion with a call to action. "
    ),
    "social": (
        "Write social media posts for multiple platforms:\n"
        "- LinkedIn post (professional, 150-200 words)\n"
        "- Twitter/X thread (3-5 tweets, each under 280 chars)\n"
        "- Instagram caption (engaging, with emoji suggestions and hashtags)"
    ),
    "email": (
        "Write an email. Include:\n"
        "- Subject line (compelling, under 50 chars)\n"
        "- Preview text (40-90 chars)\n"
        "- Body with clear sections\n"
        "- Call to action\n"
    ),
    "script": (
        "Write a video/podcast script. Include:\n"
        "- Hook (first 10 seconds)\n"
        "- Main content with timestamps\n"
        "- Transitions between sections\n"
        "- Call to action\n"
        "- Suggested B-roll or visual notes\n"
    ),
    "outline": (
        "Create a detailed content outline. Include:\n"
        "- Main thesis/angle\n"
        "- Key sections with bullet points\n"
        "- Supporting data points or examples needed\n"
        "- Potential quotes or sources to include\n"
        "- Questions to answer"
    ),
    "thread": (
        "Write a Twitter/X thread. Include:\n"
        "- Strong hook in first tweet\n"
        "- 5-10 tweets that build on each other\n"
        "- Each tweet under 280 characters\n"
        "- End with a summary or call to action\n"
        "- Number each tweet"
    ),
}

CONTENT_TYPES = tuple(TYPE_INSTRUCTIONS)

# type -> (hint when a length is given, hint otherwise)
LENGTH_HINTS: Dict[str, tuple[str, str]] = {
    "blog": ("Target approximately {length} words.", "Aim for 600-800 words."),
    "email": ("Target approximately {length} words for the body.", ""),
    "script": (
        "Target {length} words (roughly {minutes} minutes).",
        "Aim for 3-5 minutes of content.",
    ),
}

# Spoken words per minute for script timing
WORDS_PER_MINUTE = 150


def type_instructions(content_type: str, length: Optional[int] = None) -> str:
    """Instruction block for a content type; unknown types get blog instructions."""
    if content_type not in TYPE_INSTRUCTIONS:
        content_type = DEFAULT_CONTENT_TYPE

    instructions = TYPE_INSTRUCTIONS[content_type]
    if content_type in LENGTH_HINTS:
        with_length, without_length = LENGTH_HINTS[content_type]
        if length:
            instructions += with_length.format(
                length=length, minutes=round(length / WORDS_PER_MINUTE)
            )
        else:
            instructions += without_length
    return instructions


TONE_GUIDES: Dict[str, str] = {
    "professional": "Use clear, confident language. Be informative but not stuffy.",
    "casual": "Write like you're talking to a friend. Use contractions and simple language.",
    "friendly": "Be warm and approachable. Use inclusive language.",
    "authoritative": "Position as an expert. Use data and strong statements.",
    "witty": "Include clever observations and light humor. Be smart but not try-hard.",
}

WRITE_PROMPT = """You are a skilled content writer. Create {type} content on the following topic.

TOPIC: {topic}

AUDIENCE: {audience}

TONE: {tone}
{tone_guide}

{context_block}
{research_block}
INSTRUCTIONS:
{instructions}

Write the content now. Be specific, add value, and make it engaging."""


def extract_keywords(topic: str) -> list[str]:
    """Lower-cased topic words longer than three characters."""
    return [word for word in topic.lower().split() if len(word) >= MIN_KEYWORD_LENGTH]


class ContentWriter(BaseAgent):
    """Generate drafts and file them under ``## Drafts`` in CONTENT.md."""

    temperature = 0.8

    @property
    def content_path(self):
        return self.path_for(templates.CONTENT_FILE)

    @property
    def research_path(self):
        return self.path_for(templates.RESEARCH_FILE)

    def write(
        self,
        topic: str,
        type: str = "blog",
        tone: str = "professional",
        audience: str = "general audience",
        length: Optional[int] = None,
        use_research: bool = True,
        save: bool = True,
        context: str = "",
    ) -> Dict[str, Any]:
        """
        Generate a piece of content.

        Args:
            topic: What to write about
            type: blog, social, email, script, outline or thread
            tone: professional, casual, friendly, authoritative or witty
            audience: Target audience description
            length: Approximate word count
            use_research: Pull relevant sections from RESEARCH.md
            save: File the draft in CONTENT.md
            context: Extra free-text context for the prompt

        Returns:
            Dict with topic, type, content, output and saved_at
        """
        logger.info(f"Writing {type} about: {topic}")

        research = ""
        if use_research:
            research = self.get_relevant_research(topic)
            if research:
                logger.info("Found relevant research to incorporate")

        content = self.generate(
            topic,
            type=type,
            tone=tone,
            audience=audience,
            length=length,
            research=research,
            context=context,
        )
        output = self.format_output(topic, content, type=type, tone=tone)

        saved_at = None
        if save:
            self.save_to_content(output)
            saved_at = now_iso()
            logger.info(f"Saved to {self.content_path}")

        return {
            "topic": topic,
            "type": type,
            "content": content,
            "output": output,
            "saved_at": saved_at,
        }

    def get_relevant_research(self, topic: str) -> str:
        """First research sections mentioning any topic keyword, unranked."""
        try:
            research = self.research_path.read_text(encoding="utf-8")
        except OSError:
            return ""

        sections = research.split("## ")[1:]
        keywords = extract_keywords(topic)
        if not keywords:
            return ""

        relevant = [
            section
            for section in sections
            if any(keyword in section.lower() for keyword in keywords)
        ]
        return "\n".join("## " + section for section in relevant[:MAX_RESEARCH_SECTIONS])

    def generate(
        self,
        topic: str,
        type: str = "blog",
        tone: str = "professional",
        audience: str = "general audience",
        length: Optional[int] = None,
        research: str = "",
        context: str = "",
    ) -> str:
        if type not in CONTENT_TYPES:
            logger.warning(f"Unknown content type {type!r}; using blog instructions")

        prompt = WRITE_PROMPT.format(
            type=type,
            topic=topic,
            audience=audience,
            tone=tone,
            tone_guide=TONE_GUIDES.get(tone, ""),
            context_block=f"ADDITIONAL CONTEXT:\n{context}\n" if context else "",
            research_block=(
                f"RELEVANT RESEARCH (incorporate naturally):\n{research}\n" if research else ""
            ),
            instructions=type_instructions(type, length),
        )
        return self._call_llm(prompt)

    def format_output(self, topic: str, content: str, type: str, tone: str) -> str:
        return (
            f"### {topic}\n\n"
            f"> Type: {type} | Tone: {tone} | Created: {today_iso()}\n\n"
            f"{content}\n\n"
            f"---\n"
        )

    def save_to_content(self, output: str) -> None:
        insert(
            self.content_path,
            templates.DRAFTS_ANCHOR,
            "\n" + output.rstrip("\n"),
            boilerplate=templates.CONTENT_BOILERPLATE,
        )

    # Convenience wrappers
    def blog(self, topic: str, **options: Any) -> Dict[str, Any]:
        return self.write(topic, **{**options, "type": "blog"})

    def social(self, topic: str, **options: Any) -> Dict[str, Any]:
        return self.write(topic, **{**options, "type": "social"})

    def email(self, topic: str, **options: Any) -> Dict[str, Any]:
        return self.write(topic, **{**options, "type": "email"})

    def script(self, topic: str, **options: Any) -> Dict[str, Any]:
        return self.write(topic, **{**options, "type": "script"})

    def outline(self, topic: str, **options: Any) -> Dict[str, Any]:
        return self.write(topic, **{**options, "type": "outline"})

    def thread(self, topic: str, **options: Any) -> Dict[str, Any]:
        return self.write(topic, **{**options, "type": "thread"})

"""
Capture inbox processing.

Reads unchecked checklist items from CAPTURE.md, classifies each one with
the LLM into a fixed category set, routes it to the matching tracker file,
and checks it off in the inbox.

Item lifecycle: unprocessed -> categorized -> routed -> marked. Tasks are
the exception: they stay unchecked in the inbox and nothing is written.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..agents.base import BaseAgent, now_iso, today_iso
from ..markdown_editor import MarkdownDocument, insert
from .. import templates

logger = logging.getLogger(__name__)


CATEGORIES = ("task", "project", "research", "content", "client", "reference", "idea")
DEFAULT_CATEGORY = "reference"

PENDING_PATTERN = re.compile(r"^- \[ \] (.+)$")

CLASSIFY_PROMPT = """Categorize this captured item into ONE of these categories:

ITEM: "{text}"

CATEGORIES:
- task: Actionable to-do item (something to do)
- project: A larger initiative or project idea
- research: Something to research or learn about
- content: Content idea (blog, video, social media)
- client: Client-related note or follow-up
- reference: Useful info to save for later
- idea: General idea or thought to remember

Reply with ONLY the category name, nothing else."""


@dataclass
class CaptureItem:
    """One unchecked checklist line in the inbox."""

    text: str
    line: int
    raw: str


@dataclass(frozen=True)
class Route:
    """Destination for a category. ``filename`` None means keep in place."""

    filename: Optional[str]
    anchor: Optional[str]
    format: Callable[[str, str], str]


ROUTES: dict[str, Route] = {
    "task": Route(None, None, lambda text, day: f"- [ ] {text}"),
    "project": Route(
        templates.PROJECTS_FILE,
        templates.IDEAS_ANCHOR,
        lambda text, day: f"- 🔵 **{text}** - Added {day}",
    ),
    "research": Route(
        templates.RESEARCH_FILE,
        templates.TO_RESEARCH_ANCHOR,
        lambda text, day: f"- [ ] {text} (added {day})",
    ),
    "content": Route(
        templates.CONTENT_FILE,
        templates.IDEAS_ANCHOR,
        lambda text, day: f"- [ ] {text} (added {day})",
    ),
    "client": Route(
        templates.CLIENTS_FILE,
        templates.NOTES_ANCHOR,
        lambda text, day: f"- {day}: {text}",
    ),
    "reference": Route(
        templates.CAPTURE_FILE,
        templates.REFERENCE_ANCHOR,
        lambda text, day: f"- {text}",
    ),
    "idea": Route(
        templates.CAPTURE_FILE,
        templates.IDEAS_ANCHOR,
        lambda text, day: f"- 💡 {text}",
    ),
}


def parse_category(reply: Optional[str]) -> str:
    """
    Decode a classifier reply into one of CATEGORIES.

    Surrounding whitespace and case are ignored. Anything outside the set
    (including an empty reply) maps to DEFAULT_CATEGORY.
    """
    normalized = (reply or "").strip().lower()
    if normalized in CATEGORIES:
        return normalized
    logger.warning(
        f"Unrecognized category reply {normalized[:40]!r}; defaulting to {DEFAULT_CATEGORY}"
    )
    return DEFAULT_CATEGORY


def _preview(text: str, limit: int = 40) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class CaptureProcessor(BaseAgent):
    """Capture items into the inbox and route them to tracker files."""

    # Low temperature keeps classification close to deterministic
    temperature = 0.3

    @property
    def capture_path(self):
        return self.path_for(templates.CAPTURE_FILE)

    def capture(self, text: str) -> dict[str, str]:
        """Add an unchecked item under the inbox heading."""
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValueError("Capture text must not be empty")

        insert(
            self.capture_path,
            templates.INBOX_ANCHOR,
            f"- [ ] {cleaned}",
            boilerplate=templates.CAPTURE_BOILERPLATE,
        )
        logger.info(f"Captured: {cleaned!r}")
        return {"text": cleaned, "captured_at": now_iso()}

    def process(self) -> dict[str, Any]:
        """
        Process all pending captured items.

        Returns:
            Dict with keys:
                - processed: number of items routed successfully
                - items: per-item results; failures carry an ``error`` key
        """
        items = self.get_pending_items()
        if not items:
            logger.info("Inbox is clear")
            return {"processed": 0, "items": []}

        logger.info(f"Found {len(items)} items to process")

        results: list[dict[str, Any]] = []
        for item in items:
            try:
                result = self.process_item(item)
            except Exception as e:
                logger.error(f"Failed to process {_preview(item.text)!r}: {e}")
                results.append({"item": item, "error": str(e)})
                continue
            logger.info(f"{_preview(item.text)!r} -> {result['category']}")
            results.append(result)

        succeeded = [r for r in results if "error" not in r]
        self.mark_processed(succeeded)

        logger.info(f"Processed {len(succeeded)}/{len(items)} items")
        return {"processed": len(succeeded), "items": results}

    def get_pending_items(self) -> list[CaptureItem]:
        try:
            content = self.capture_path.read_text(encoding="utf-8")
        except OSError:
            return []

        items: list[CaptureItem] = []
        for index, line in enumerate(content.split("\n")):
            match = PENDING_PATTERN.match(line)
            if match:
                items.append(CaptureItem(text=match.group(1), line=index, raw=line))
        return items

    def process_item(self, item: CaptureItem) -> dict[str, Any]:
        category = self.categorize(item.text)
        self.route(item, category)
        return {"item": item, "category": category, "processed_at": now_iso()}

    def categorize(self, text: str) -> str:
        reply = self._call_llm(CLASSIFY_PROMPT.format(text=text))
        return parse_category(reply)

    def route(self, item: CaptureItem, category: str) -> bool:
        """Write the item to its category destination.

        Returns False when the category keeps the item in place.
        """
        route = ROUTES[category]
        if route.filename is None:
            return False

        insert(
            self.path_for(route.filename),
            route.anchor,
            route.format(item.text, today_iso()),
            boilerplate=templates.BOILERPLATES.get(route.filename),
        )
        return True

    def mark_processed(self, results: list[dict[str, Any]]) -> int:
        """Check off routed non-task items in the inbox. Returns lines changed."""
        to_mark = [r["item"] for r in results if r.get("category") != "task"]
        if not to_mark:
            return 0

        document = MarkdownDocument.load(self.capture_path)
        if not document.existed:
            return 0
        lines = document.lines()

        changed = 0
        for item in to_mark:
            index = self._locate(lines, item)
            if index is None:
                logger.warning(f"Could not find {_preview(item.text)!r} to mark processed")
                continue
            lines[index] = lines[index].replace("- [ ]", "- [x]", 1)
            changed += 1

        document.set_lines(lines)
        document.save()
        return changed

    @staticmethod
    def _locate(lines: list[str], item: CaptureItem) -> Optional[int]:
        # Routing reference/idea items into CAPTURE.md can shift line numbers
        if 0 <= item.line < len(lines) and lines[item.line] == item.raw:
            return item.line
        for index, line in enumerate(lines):
            if line == item.raw:
                return index
        return None

"""
Weekly review generation.

Counts markers across the tracker files, asks the LLM for a short
executive summary, and prepends the rendered review to WEEKLY-REVIEW.md
(newest first).

Counts are totals over each file's current content, not a date-windowed
slice of the week; the week start is only a label.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Optional

from ..markdown_editor import insert
from .. import templates
from ..agents.base import BaseAgent

logger = logging.getLogger(__name__)

LIST_LIMIT = 5

ACTIVE_PATTERN = re.compile(r"🟢|🟡")
COMPLETED_PATTERN = re.compile(r"✅")
BLOCKED_PATTERN = re.compile(r"🟠")
PROJECT_ROW_PATTERN = re.compile(r"\[([^\]]+)\]\([^)]+\)\s*\|\s*(🟢|🟡|✅|🟠|🔵|⚪)")
DONE_TASK_PATTERN = re.compile(r"- \[x\] (.+)")
OPEN_TASK_PATTERN = re.compile(r"- \[ \] (.+)")
TOPIC_PATTERN = re.compile(r"^## ([^#\n]+)", re.M)
PIECE_PATTERN = re.compile(r"^### ([^#\n]+)", re.M)
CLIENT_ACTIVITY_PATTERN = re.compile(r"^(?:- )?\d{4}-\d{2}-\d{2}:", re.M)
TO_RESEARCH_HEADING = "To Research"

SUMMARY_PROMPT = """Generate a brief weekly review summary based on this data:

PROJECTS:
- Active: {projects_active}
- Completed this period: {projects_completed}
- Blocked: {projects_blocked}
{project_line}
TASKS:
- Completed: {tasks_completed}
- Pending: {tasks_pending}
{task_line}
RESEARCH:
- Topics explored: {research_topics}
{research_line}
CONTENT:
- Pieces created: {content_pieces}
{content_line}
CLIENT ACTIVITIES: {client_activities}

Write a 3-4 sentence executive summary of the week. Be specific about accomplishments and note any areas needing attention. Then suggest 2-3 focus areas for next week.

Format:
## Summary
[Executive summary]

## Focus for Next Week
- [Focus 1]
- [Focus 2]
- [Focus 3]"""


@dataclass
class ProjectStats:
    active: int = 0
    completed: int = 0
    blocked: int = 0
    items: list[dict[str, str]] = field(default_factory=list)


@dataclass
class TaskStats:
    completed: int = 0
    pending: int = 0
    items: list[str] = field(default_factory=list)


@dataclass
class ResearchStats:
    topics: int = 0
    items: list[str] = field(default_factory=list)


@dataclass
class ContentStats:
    pieces: int = 0
    items: list[str] = field(default_factory=list)


@dataclass
class ClientStats:
    activities: int = 0


@dataclass
class ReviewData:
    """Counts gathered from the tracker files. Zero means missing or empty."""

    projects: ProjectStats = field(default_factory=ProjectStats)
    tasks: TaskStats = field(default_factory=TaskStats)
    research: ResearchStats = field(default_factory=ResearchStats)
    content: ContentStats = field(default_factory=ContentStats)
    clients: ClientStats = field(default_factory=ClientStats)


def get_week_start(now: Optional[datetime] = None) -> datetime:
    """Most recent Monday 00:00 local time (ISO week start)."""
    current = now or datetime.now()
    monday = current - timedelta(days=current.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def _short_date(value: datetime) -> str:
    return f"{value.strftime('%b')} {value.day}"


def _bullets(items: list[str], empty: str) -> str:
    if not items:
        return f"- {empty}"
    return "\n".join(f"- {item}" for item in items[:LIST_LIMIT])


class WeeklyReviewGenerator(BaseAgent):
    """Build and archive the weekly review."""

    def generate(self, now: Optional[datetime] = None) -> dict[str, Any]:
        week_end = now or datetime.now()
        week_start = get_week_start(week_end)

        data = self.gather_data()
        logger.info(
            f"Projects: {data.projects.active} active, {data.projects.completed} completed; "
            f"Tasks: {data.tasks.completed} completed, {data.tasks.pending} pending; "
            f"Research: {data.research.topics} topics; Content: {data.content.pieces} pieces"
        )

        summary = self.generate_summary(data)
        review = self.format_review(week_start, week_end, data, summary)
        self.save_review(review)
        logger.info(f"Weekly review saved to {self.path_for(templates.REVIEW_FILE)}")

        return {"data": data, "summary": summary, "review": review}

    def _read(self, filename: str) -> Optional[str]:
        try:
            return self.path_for(filename).read_text(encoding="utf-8")
        except OSError as e:
            logger.debug(f"Skipping {filename}: {e}")
            return None

    def gather_data(self) -> ReviewData:
        """Scan each tracker file independently; unreadable files count as zero."""
        data = ReviewData()

        projects = self._read(templates.PROJECTS_FILE)
        if projects is not None:
            data.projects.active = len(ACTIVE_PATTERN.findall(projects))
            data.projects.completed = len(COMPLETED_PATTERN.findall(projects))
            data.projects.blocked = len(BLOCKED_PATTERN.findall(projects))
            data.projects.items = [
                {"name": name, "status": status}
                for name, status in PROJECT_ROW_PATTERN.findall(projects)
            ]

        capture = self._read(templates.CAPTURE_FILE)
        if capture is not None:
            done = DONE_TASK_PATTERN.findall(capture)
            data.tasks.completed = len(done)
            data.tasks.pending = len(OPEN_TASK_PATTERN.findall(capture))
            data.tasks.items = done

        research = self._read(templates.RESEARCH_FILE)
        if research is not None:
            topics = [
                topic.strip()
                for topic in TOPIC_PATTERN.findall(research)
                if TO_RESEARCH_HEADING not in topic
            ]
            data.research.topics = len(topics)
            data.research.items = topics[:LIST_LIMIT]

        content = self._read(templates.CONTENT_FILE)
        if content is not None:
            pieces = [piece.strip() for piece in PIECE_PATTERN.findall(content)]
            data.content.pieces = len(pieces)
            data.content.items = pieces[:LIST_LIMIT]

        clients = self._read(templates.CLIENTS_FILE)
        if clients is not None:
            data.clients.activities = len(CLIENT_ACTIVITY_PATTERN.findall(clients))

        return data

    def generate_summary(self, data: ReviewData) -> str:
        projects = ", ".join(f"{p['name']} ({p['status']})" for p in data.projects.items)
        prompt = SUMMARY_PROMPT.format(
            projects_active=data.projects.active,
            projects_completed=data.projects.completed,
            projects_blocked=data.projects.blocked,
            project_line=f"- Projects: {projects}\n" if projects else "",
            tasks_completed=data.tasks.completed,
            tasks_pending=data.tasks.pending,
            task_line=(
                f"- Completed tasks: {', '.join(data.tasks.items[:LIST_LIMIT])}\n"
                if data.tasks.items
                else ""
            ),
            research_topics=data.research.topics,
            research_line=(
                f"- Topics: {', '.join(data.research.items)}\n" if data.research.items else ""
            ),
            content_pieces=data.content.pieces,
            content_line=(
                f"- Content: {', '.join(data.content.items)}\n" if data.content.items else ""
            ),
            client_activities=data.clients.activities,
        )
        return self._call_llm(prompt)

    def format_review(
        self,
        week_start: datetime,
        week_end: datetime,
        data: ReviewData,
        summary: str,
        generated_at: Optional[datetime] = None,
    ) -> str:
        start_str = _short_date(week_start)
        end_str = f"{_short_date(week_end)}, {week_end.year}"
        stamp = (generated_at or datetime.now()).isoformat(timespec="seconds")

        return f"""# Weekly Review: {start_str} - {end_str}

{summary}

---

## 📊 By the Numbers

| Metric | Count |
|--------|-------|
| Active Projects | {data.projects.active} |
| Completed Projects | {data.projects.completed} |
| Tasks Completed | {data.tasks.completed} |
| Tasks Pending | {data.tasks.pending} |
| Research Topics | {data.research.topics} |
| Content Pieces | {data.content.pieces} |
| Client Activities | {data.clients.activities} |

## ✅ Completed Tasks
{_bullets(data.tasks.items, "(none recorded)")}

## 🔬 Research Done
{_bullets(data.research.items, "(none this week)")}

## 📝 Content Created
{_bullets(data.content.items, "(none this week)")}

---

*Generated: {stamp}*
"""

    def save_review(self, review: str) -> None:
        """Prepend below the archive's first divider so the newest review is on top."""
        insert(
            self.path_for(templates.REVIEW_FILE),
            templates.DIVIDER_ANCHOR,
            "\n\n" + review + "\n---",
            boilerplate=templates.REVIEW_BOILERPLATE,
        )

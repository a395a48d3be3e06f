"""Anchor-based editing of the markdown tracker files.

Tracker files are never parsed into a tree. An edit locates the first
literal occurrence of an anchor string (a heading such as ``## Inbox`` or a
``---`` divider) and splices text in at the start of the following line.
The whole document is held in memory and written back in one shot; there
is no locking, so concurrent writers race and the last write wins.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def default_boilerplate(path: Path) -> str:
    """Minimal header for a file created on first write."""
    return f"# {path.stem}\n\n"


class MarkdownDocument:
    """In-memory copy of one tracker file."""

    def __init__(self, path: Path, text: str, existed: bool = True):
        self.path = Path(path)
        self.text = text
        self.existed = existed

    @classmethod
    def load(cls, path: Path | str, boilerplate: Optional[str] = None) -> "MarkdownDocument":
        """Read ``path``; a missing or unreadable file starts from boilerplate."""
        path = Path(path)
        try:
            return cls(path, path.read_text(encoding="utf-8"))
        except OSError:
            text = boilerplate if boilerplate is not None else default_boilerplate(path)
            return cls(path, text, existed=False)

    def insert_after(self, anchor: str, fragment: str) -> bool:
        """
        Insert ``fragment`` on its own line directly below ``anchor``.

        Returns True when the anchor was found. Otherwise a new section
        labelled with the anchor is appended at end of file and False is
        returned.
        """
        index = self.text.find(anchor)
        if index == -1:
            logger.warning(
                f"Anchor {anchor!r} not found in {self.path.name}; appending new section"
            )
            self.text += f"\n{anchor}\n\n{fragment}\n"
            return False

        line_end = self.text.find("\n", index + len(anchor))
        if line_end == -1:
            self.text += "\n"
            insert_at = len(self.text)
        else:
            insert_at = line_end + 1

        self.text = self.text[:insert_at] + fragment + "\n" + self.text[insert_at:]
        return True

    def lines(self) -> list[str]:
        return self.text.split("\n")

    def set_lines(self, lines: list[str]) -> None:
        self.text = "\n".join(lines)

    def save(self) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.text, encoding="utf-8")
        if not self.existed:
            logger.info(f"Created {self.path}")
            self.existed = True
        return self.path


def insert(
    file_path: Path | str,
    anchor: str,
    fragment: str,
    boilerplate: Optional[str] = None,
) -> bool:
    """Load, insert ``fragment`` below ``anchor`` and write the file back.

    Returns True when the anchor was already present.
    """
    document = MarkdownDocument.load(file_path, boilerplate=boilerplate)
    found = document.insert_after(anchor, fragment)
    document.save()
    logger.debug(f"Inserted {len(fragment)} chars into {document.path} at {anchor!r}")
    return found

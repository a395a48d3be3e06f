"""Tracker file names, section anchors and first-write boilerplate.

Anchors must match the headings in the tracker files verbatim. Renaming a
heading in a file makes the editor append a fresh section at end of file.
"""

CAPTURE_FILE = "CAPTURE.md"
PROJECTS_FILE = "PROJECTS.md"
CLIENTS_FILE = "CLIENTS.md"
RESEARCH_FILE = "RESEARCH.md"
CONTENT_FILE = "CONTENT.md"
REVIEW_FILE = "WEEKLY-REVIEW.md"

INBOX_ANCHOR = "## Inbox"
IDEAS_ANCHOR = "## Ideas"
REFERENCE_ANCHOR = "## Reference"
NOTES_ANCHOR = "## Notes"
TO_RESEARCH_ANCHOR = "## To Research"
DRAFTS_ANCHOR = "## Drafts"
DIVIDER_ANCHOR = "---"

CAPTURE_BOILERPLATE = """# Capture Inbox

Quick capture for ideas, tasks, and notes. Process regularly.

## Inbox

"""

RESEARCH_BOILERPLATE = """# Research Notes

Collection of research findings and insights.

---

"""

CONTENT_BOILERPLATE = """# Content Drafts

Drafts and content pieces ready for review or publishing.

## Drafts

"""

REVIEW_BOILERPLATE = """# Weekly Reviews

Archive of weekly reviews and reflections.

---

"""

BOILERPLATES = {
    CAPTURE_FILE: CAPTURE_BOILERPLATE,
    RESEARCH_FILE: RESEARCH_BOILERPLATE,
    CONTENT_FILE: CONTENT_BOILERPLATE,
    REVIEW_FILE: REVIEW_BOILERPLATE,
}

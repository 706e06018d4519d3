#!/usr/bin/env python3
"""Find the custom title a user gave a Claude Code session.

Renaming a session appends a record like

    {"type": "custom-title", "customTitle": "shop-dev sprint", "sessionId": "..."}

to the JSONL transcript. Transcripts get large, so instead of parsing every
line we search for the marker and only parse the lines that contain it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CUSTOM_TITLE_TYPE = "custom-title"
CUSTOM_TITLE_MARKER = f'"{CUSTOM_TITLE_TYPE}"'


def _line_at(content: str, index: int) -> str:
    """Return the line of ``content`` containing position ``index``."""
    line_start = content.rfind("\n", 0, index) + 1
    line_end = content.find("\n", index)
    if line_end == -1:
        line_end = len(content)
    return content[line_start:line_end]


def get_session_name(transcript_path: str | Path) -> str | None:
    """Return the most recent custom session title, if any.

    Args:
        transcript_path: Path to the session's JSONL transcript

    Returns:
        The last non-empty customTitle in the transcript, or None when the
        file is missing/unreadable or the session was never renamed.
    """
    path = Path(transcript_path)
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Cannot read transcript %s: %s", path, e)
        return None

    last_title: str | None = None
    search_start = 0
    while True:
        index = content.find(CUSTOM_TITLE_MARKER, search_start)
        if index == -1:
            break
        search_start = index + 1

        line = _line_at(content, index)
        try:
            entry = json.loads(line)
        except json.JSONDecodeError:
            continue  # malformed line

        if not isinstance(entry, dict) or entry.get("type") != CUSTOM_TITLE_TYPE:
            continue
        title = entry.get("customTitle")
        if isinstance(title, str) and title:
            last_title = title

    return last_title

"""
Declared profile parser.

Reads the user's USER.md (role, focus, tech stack, interests, working style)
into a DeclaredProfile. A missing or empty file is not an error: the parser
returns None and fusion proceeds without a static profile.
"""

import asyncio
import re
from pathlib import Path

from loguru import logger

from bloom_identity.models.signals import DeclaredProfile
from bloom_identity.services.signals.sources import DeclaredProfileSource

ROLE_HEADERS = ["role", "title", "position", "job"]
FOCUS_HEADERS = ["focus", "current focus", "working on", "projects"]
TECH_HEADERS = ["tech stack", "stack", "tools", "technologies"]
INTEREST_HEADERS = ["interests", "hobbies", "passions", "likes"]
STYLE_HEADERS = ["working style", "style", "work style", "approach"]

DEEP_FOCUS_KEYWORDS = [
    "deep focus", "deep-focus", "focused", "single task", "deep dive", "concentrated", "immersive", "flow state",
    "specialist",
]
EXPLORER_KEYWORDS = [
    "explorer", "exploring", "curious", "breadth", "diverse", "variety", "experiment", "try new", "discover",
]
MULTITASKER_KEYWORDS = [
    "multitask", "multi-task", "juggle", "parallel", "many projects", "context switch", "wear many hats", "generalist",
]

_HEADER_RE = re.compile(r"^#{1,3}\s+(.+)")
_BULLET_RE = re.compile(r"^[-*]\s+(.+)", re.MULTILINE)
_KEY_VALUE_RE = re.compile(r"^[^:\n]+:\s*(.+)", re.MULTILINE)


def parse_sections(content: str) -> dict[str, str]:
    """Split markdown into sections keyed by header text; preamble goes under ""."""
    sections: dict[str, str] = {}
    header = ""
    body: list[str] = []

    for line in content.split("\n"):
        match = _HEADER_RE.match(line)
        if match:
            if header or body:
                sections[header] = "\n".join(body).strip()
            header = match.group(1).strip()
            body = []
        else:
            body.append(line)

    if header or body:
        sections[header] = "\n".join(body).strip()
    return sections


def _matches_header(normalized: str, candidates: list[str]) -> bool:
    return any(candidate in normalized for candidate in candidates)


def extract_single_value(body: str) -> str:
    """Handles "BD Lead", "- BD Lead" and "Role: BD Lead"."""
    trimmed = body.strip()

    bullet = _BULLET_RE.search(trimmed)
    if bullet:
        return bullet.group(1).strip()

    key_value = _KEY_VALUE_RE.search(trimmed)
    if key_value:
        return key_value.group(1).strip()

    for line in trimmed.split("\n"):
        if line.strip():
            return line.strip()
    return trimmed


def _split_commas(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def extract_list_values(body: str) -> list[str]:
    """Bullet lists (comma-split inside bullets), else comma-separated lines."""
    values: list[str] = []
    for match in _BULLET_RE.finditer(body):
        values.extend(_split_commas(match.group(1)))

    if not values:
        for line in body.strip().split("\n"):
            values.extend(_split_commas(line))

    return values


def infer_working_style(body: str) -> str:
    """Map free text to deep-focus, explorer or multitasker."""
    lowered = body.lower()
    deep = sum(1 for k in DEEP_FOCUS_KEYWORDS if k in lowered)
    explorer = sum(1 for k in EXPLORER_KEYWORDS if k in lowered)
    multi = sum(1 for k in MULTITASKER_KEYWORDS if k in lowered)

    if deep > 0 and deep >= explorer and deep >= multi:
        return "deep-focus"
    if explorer > 0 and explorer >= multi:
        return "explorer"
    if multi > 0:
        return "multitasker"
    return "deep-focus"


def parse_declared_profile(content: str) -> DeclaredProfile | None:
    """
    Parse USER.md content.

    Args:
        content: Markdown text

    Returns:
        DeclaredProfile, or None when no meaningful field could be extracted
    """
    if not content or not content.strip():
        return None

    sections = parse_sections(content)
    profile = DeclaredProfile(raw=sections)

    for header, body in sections.items():
        normalized = header.lower().strip()
        if not normalized:
            continue
        if _matches_header(normalized, ROLE_HEADERS):
            profile.role = extract_single_value(body)
        elif _matches_header(normalized, FOCUS_HEADERS):
            profile.current_focus = extract_list_values(body)
        elif _matches_header(normalized, TECH_HEADERS):
            profile.tech_stack = extract_list_values(body)
        elif _matches_header(normalized, INTEREST_HEADERS):
            profile.interests = extract_list_values(body)
        elif _matches_header(normalized, STYLE_HEADERS):
            profile.working_style = infer_working_style(body)

    return profile if profile.has_signals else None


class MarkdownProfileSource(DeclaredProfileSource):
    """Declared profile source backed by a USER.md file."""

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    async def read_declared_profile(self) -> DeclaredProfile | None:
        if not self.path.exists():
            logger.debug(f"No declared profile at {self.path}")
            return None
        content = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        return parse_declared_profile(content)

"""Template storage and injection of generated and rule-extracted content."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

from .defaults import AI_PLACEHOLDER, DEFAULT_TEMPLATES, NOT_APPLICABLE
from .rules import ExtractedInfo, ExtractionRule

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*\n(?P<body>.*?)\n?```$", re.DOTALL)

# Bare bullets and N/A are placeholders when filling a section; only bare
# bullets are placeholders when marking a section as not applicable.
_FILL_MARKERS = frozenset({"-", NOT_APPLICABLE})
_EMPTY_MARKERS = frozenset({"-"})


class TemplateStore:
    """Resolves template identifiers to markdown text."""

    def __init__(self, template_dir: Path | str) -> None:
        self.template_dir = Path(template_dir)

    def read_template(self, identifier: str) -> str:
        """Return ``<template_dir>/<identifier>.md`` or built-in text.

        Never raises; the result is always a non-empty string.
        """
        template_path = self.template_dir / f"{identifier}.md"
        if template_path.is_file():
            try:
                content = template_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("Failed to read template %s: %s", template_path, exc)
            else:
                if content.strip():
                    return content
                logger.warning("Template %s is empty", template_path)
        else:
            logger.info(
                "Template file not found, using built-in template: %s",
                template_path,
            )
        return self.default_template(identifier)

    @staticmethod
    def default_template(identifier: str) -> str:
        return DEFAULT_TEMPLATES.get(identifier, DEFAULT_TEMPLATES["default"])


class MarkdownDocument:
    """A markdown text held as lines, with heading-aware edits.

    Headings are lines starting with ``#``. A target section is located by a
    case-insensitive substring match, preferring heading lines over any
    other line of the document.
    """

    def __init__(self, text: str) -> None:
        self.lines: List[str] = text.split("\n")

    def __str__(self) -> str:
        return "\n".join(self.lines)

    @staticmethod
    def _is_heading(line: str) -> bool:
        return line.lstrip().startswith("#")

    def find_heading(self, target: str) -> Optional[int]:
        needle = target.strip().lower()
        if not needle:
            return None
        for idx, line in enumerate(self.lines):
            if self._is_heading(line) and needle in line.lower():
                return idx
        for idx, line in enumerate(self.lines):
            if needle in line.lower():
                return idx
        return None

    def find_placeholder(self, heading_idx: int, markers: frozenset) -> Optional[int]:
        """Index of the placeholder right after ``heading_idx``, if any.

        Only the first non-blank line of the section is considered.
        """
        for idx in range(heading_idx + 1, len(self.lines)):
            stripped = self.lines[idx].strip()
            if not stripped:
                continue
            if self._is_heading(stripped):
                return None
            return idx if stripped.upper() in markers else None
        return None

    def replace_line(self, idx: int, new_lines: List[str]) -> None:
        self.lines[idx:idx + 1] = new_lines

    def insert_after(self, idx: int, new_lines: List[str]) -> None:
        self.lines[idx + 1:idx + 1] = new_lines

    def append_section(self, heading: str, body: List[str]) -> None:
        self.lines.extend(["", heading, *body])


def apply_rules_to_template(
    template: str, extracted_info: ExtractedInfo, rules: List[ExtractionRule]
) -> str:
    """Inject extracted matches into their target sections.

    Re-applying the same rules to already injected output is not a no-op:
    placeholders are consumed by the first pass, so a second pass inserts
    the bullets again under the heading.
    """
    document = MarkdownDocument(template)

    for rule in rules:
        if not rule.target_section.strip():
            logger.warning("Extraction rule %r has no targetSection", rule.pattern)
            continue
        items = extracted_info.get(rule.pattern) or []
        heading_idx = document.find_heading(rule.target_section)

        if items:
            bullets = [f"- {item}" for item in items]
            if heading_idx is None:
                document.append_section(rule.target_section, bullets)
                continue
            placeholder_idx = document.find_placeholder(heading_idx, _FILL_MARKERS)
            if placeholder_idx is not None:
                document.replace_line(placeholder_idx, bullets)
            else:
                document.insert_after(heading_idx, bullets)
        elif heading_idx is not None:
            placeholder_idx = document.find_placeholder(heading_idx, _EMPTY_MARKERS)
            if placeholder_idx is not None:
                document.replace_line(placeholder_idx, [NOT_APPLICABLE])

    return str(document)


def merge_ai_content(template: str, generated: Optional[str]) -> str:
    """Return the generated text cleaned for rule injection.

    Falls back to ``template`` when nothing was generated.
    """
    if generated is None or not generated.strip():
        return template
    content = generated.strip()
    fenced = _FENCE_RE.match(content)
    if fenced:
        content = fenced.group("body").strip()
    return content.replace(AI_PLACEHOLDER, NOT_APPLICABLE)

"""Rule models, template selection and rule-based information extraction."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .defaults import (
    DEFAULT_BRANCH_PATTERNS,
    DEFAULT_COMMIT_PATTERNS,
    DEFAULT_PRIORITY,
    DEFAULT_TEMPLATE,
)

logger = logging.getLogger(__name__)

CONDITIONS = ("pr_title", "branch", "commit")

ExtractedInfo = Dict[str, List[str]]


def _parse_priority(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class SelectionRule:
    """Maps a matched title, branch or commit to a template identifier."""

    condition: str
    pattern: str
    template: str
    priority: Optional[int] = None

    @property
    def sort_key(self) -> int:
        return DEFAULT_PRIORITY if self.priority is None else self.priority

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SelectionRule":
        priority = _parse_priority(data.get("priority"))
        return cls(
            condition=str(data.get("condition", "")),
            pattern=str(data.get("pattern", "")),
            template=str(data.get("template", "")),
            priority=priority,
        )


@dataclass(frozen=True)
class ExtractionRule:
    """Maps a regular expression to the template section it fills."""

    pattern: str
    target_section: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtractionRule":
        return cls(
            pattern=str(data["pattern"]),
            target_section=str(data.get("targetSection", "")),
        )


@dataclass
class TemplateSelection:
    rules: List[SelectionRule] = field(default_factory=list)
    default_template: str = DEFAULT_TEMPLATE


@dataclass
class RulesFile:
    """Parsed contents of the rules JSON document."""

    rules: List[ExtractionRule] = field(default_factory=list)
    template_selection: TemplateSelection = field(default_factory=TemplateSelection)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RulesFile":
        """Build from the JSON shape ``{rules, templateSelection}``.

        Raises ``TypeError``/``KeyError``/``AttributeError`` for documents
        that do not have that shape.
        """
        if not isinstance(data, Mapping):
            raise TypeError("rules document must be a JSON object")
        extraction = [ExtractionRule.from_dict(r) for r in data.get("rules") or []]
        selection_raw = data.get("templateSelection") or {}
        selection = TemplateSelection(
            rules=[SelectionRule.from_dict(r) for r in selection_raw.get("rules") or []],
            default_template=selection_raw.get("defaultTemplate") or DEFAULT_TEMPLATE,
        )
        return cls(rules=extraction, template_selection=selection)


class TemplateSelector:
    """Chooses a template identifier for a pull request."""

    def __init__(self, selection: Optional[TemplateSelection] = None) -> None:
        self.selection = selection or TemplateSelection()

    @property
    def default_template(self) -> str:
        return self.selection.default_template or DEFAULT_TEMPLATE

    def select_template(
        self, pr_title: str, branch_name: str, last_commit: str
    ) -> str:
        """Return the template for the given title, branch and last commit.

        Never raises: any evaluation error (e.g. an invalid pattern) falls
        back to the configured default template.
        """
        try:
            if self.selection.rules:
                return self._select_by_rules(pr_title, branch_name, last_commit)
            return self._select_by_default(branch_name, last_commit)
        except Exception as exc:  # noqa: BLE001
            logger.error("Template selection failed: %s", exc)
            return self.default_template

    def _select_by_rules(
        self, pr_title: str, branch_name: str, last_commit: str
    ) -> str:
        values = {
            "pr_title": pr_title,
            "branch": branch_name,
            "commit": last_commit,
        }
        # sorted() is stable, so equal priorities keep file order
        for rule in sorted(self.selection.rules, key=lambda r: r.sort_key):
            if rule.condition not in values:
                continue
            test_value = values[rule.condition]
            if test_value and re.search(rule.pattern, test_value, re.IGNORECASE):
                logger.info(
                    "Template selection rule matched: %s=%r -> %s",
                    rule.condition,
                    test_value,
                    rule.template,
                )
                return rule.template
        return self.default_template

    def _select_by_default(self, branch_name: str, last_commit: str) -> str:
        branch_name = branch_name or ""
        for template, keywords in DEFAULT_BRANCH_PATTERNS.items():
            if any(keyword in branch_name for keyword in keywords):
                return template

        lower_commit = (last_commit or "").lower()
        for template, prefixes in DEFAULT_COMMIT_PATTERNS.items():
            if any(lower_commit.startswith(prefix) for prefix in prefixes):
                return template

        return self.default_template


def extract_info_by_rules(
    commit_messages: str, branch_name: str, rules: List[ExtractionRule]
) -> ExtractedInfo:
    """Collect every match of each rule pattern in commits and branch name.

    Matches are de-duplicated per rule in order of first occurrence and
    appended to the bucket keyed by the pattern string. Rules matching
    nothing leave no bucket.
    """
    extracted: ExtractedInfo = {}
    if not rules:
        return extracted

    corpus = "\n".join([commit_messages or "", branch_name or ""])

    for rule in rules:
        try:
            matches = [m.group(0) for m in re.finditer(rule.pattern, corpus)]
        except (re.error, OverflowError, RecursionError) as exc:
            logger.error("Skipping extraction rule %r: %s", rule.pattern, exc)
            continue
        unique = list(dict.fromkeys(m for m in matches if m))
        if unique:
            extracted.setdefault(rule.pattern, []).extend(unique)

    return extracted

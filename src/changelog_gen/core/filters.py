"""Commit inclusion rules."""

import re
from typing import List, Mapping, Sequence, Union

from pydantic import BaseModel

from changelog_gen.logging import get_logger
from changelog_gen.models.commit import CommitRecord
from changelog_gen.models.config import GitSettings, PatternRule, RuleKind

logger = get_logger("filters")

# Characters that only mean something to a regex engine.
_REGEX_SYNTAX = re.compile(r"[|()\[\]*+?$\\]")


class FilterRule(BaseModel):
    """A case-insensitive literal pattern."""

    kind: RuleKind = RuleKind.SUBSTRING
    value: str

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, spec: Union[str, PatternRule, Mapping[str, str]]) -> "FilterRule":
        """Build a rule from a config entry.

        ``"^Merge"`` is a prefix rule, ``"\\bwip\\b"`` a whole-word rule and
        anything else a substring rule. A mapping names the kind explicitly.
        """
        if isinstance(spec, Mapping):
            spec = PatternRule.model_validate(spec)
        if isinstance(spec, PatternRule):
            return cls(kind=spec.kind, value=spec.value)

        if spec.startswith("^"):
            rule = cls(kind=RuleKind.PREFIX, value=spec[1:])
        elif spec.startswith("\\b") and spec.endswith("\\b") and len(spec) > 4:
            rule = cls(kind=RuleKind.WORD, value=spec[2:-2])
        else:
            rule = cls(kind=RuleKind.SUBSTRING, value=spec)

        if _REGEX_SYNTAX.search(rule.value):
            logger.warning(
                "Filter %r is matched literally, not as a regular expression", spec
            )
        return rule

    def matches(self, message: str) -> bool:
        """Check the rule against a commit message."""
        escaped = re.escape(self.value)
        if self.kind == RuleKind.PREFIX:
            pattern = rf"^{escaped}"
        elif self.kind == RuleKind.WORD:
            pattern = rf"\b{escaped}\b"
        else:
            pattern = escaped
        return re.search(pattern, message, re.IGNORECASE) is not None


class FilterRuleSet(BaseModel):
    """Ordered exclude and include rules plus the merge-commit switch."""

    exclude: List[FilterRule] = []
    include: List[FilterRule] = []
    include_merge_commits: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: GitSettings) -> "FilterRuleSet":
        filters = settings.commit_message_filters
        return cls(
            exclude=[FilterRule.parse(spec) for spec in filters.exclude],
            include=[FilterRule.parse(spec) for spec in filters.include],
            include_merge_commits=settings.include_merge_commits,
        )


def include(commit: CommitRecord, rules: FilterRuleSet) -> bool:
    """Decide whether a commit belongs in the changelog."""
    message = commit.message

    if not rules.include_merge_commits and "merge" in message.lower():
        return False

    # Exclusions always win over inclusions
    if any(rule.matches(message) for rule in rules.exclude):
        return False

    if rules.include:
        return any(rule.matches(message) for rule in rules.include)

    return True


def filter_commits(
    commits: Sequence[CommitRecord], rules: FilterRuleSet
) -> List[CommitRecord]:
    """Keep the commits that pass ``rules``, in their original order."""
    return [commit for commit in commits if include(commit, rules)]

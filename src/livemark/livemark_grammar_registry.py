"""
Ordered, immutable registry of grammar rules.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, FrozenSet, Iterable, List, Mapping, Sequence, Tuple, Union

from livemark.livemark_default_grammar import default_inline_grammar, default_line_grammar
from livemark.livemark_exceptions import GrammarError
from livemark.livemark_grammar import (
    BlockRule, DelimiterRule, InlineGrammarRule, LineGrammarRule, MatchRule, NeverBlockRule, NeverLineRule,
    NeverMatchRule, RuleKind
)


# Overrides may be given as a mapping or as a sequence of (name, rule) pairs.  A rule of None disables
# the named default.
RuleOverrides = Union[Mapping[str, object], Sequence[Tuple[str, object]]]


@dataclass(frozen=True)
class RuleEntry:
    """A named rule, classified by category at registration time."""
    name: str
    kind: RuleKind
    rule: LineGrammarRule | InlineGrammarRule


def _override_pairs(overrides: RuleOverrides | None) -> List[Tuple[str, object]]:
    """
    Normalise overrides to a list of pairs, rejecting repeated names.

    Args:
        overrides: Mapping or sequence of (name, rule) pairs

    Returns:
        List of (name, rule) pairs

    Raises:
        GrammarError: If a name appears more than once
    """
    if overrides is None:
        return []

    pairs = list(overrides.items()) if isinstance(overrides, Mapping) else [tuple(pair) for pair in overrides]

    seen = set()
    for name, _rule in pairs:
        if name in seen:
            raise GrammarError(f"Duplicate rule name in overrides: '{name}'", {'rule': name})

        seen.add(name)

    return pairs


def _disabled_rule(rule: object) -> LineGrammarRule | InlineGrammarRule:
    """
    Get a rule of the same category as `rule` that never applies.

    A disabled delimiter rule keeps its name and length but has no characters, so no run selects it.
    """
    if isinstance(rule, BlockRule):
        return NeverBlockRule()

    if isinstance(rule, LineGrammarRule):
        return NeverLineRule()

    if isinstance(rule, DelimiterRule):
        return replace(rule, characters="")

    return NeverMatchRule()


def merge_rules(
    overrides: RuleOverrides | None,
    defaults: Sequence[Tuple[str, object]]
) -> List[Tuple[str, object]]:
    """
    Merge rule overrides into a list of default rules.

    Overridden names keep their default position; names that are not defaults are appended in the order
    given.  Mapping a default name to None replaces it with a rule of the same category that never
    matches.

    Args:
        overrides: Caller supplied rules
        defaults: Default (name, rule) pairs in priority order

    Returns:
        The merged (name, rule) pairs in priority order

    Raises:
        GrammarError: If an override repeats a name or disables a name with no default
    """
    logger = logging.getLogger("GrammarRegistry")
    override_map: Dict[str, object] = dict(_override_pairs(overrides))

    merged: List[Tuple[str, object]] = []
    for name, rule in defaults:
        if name not in override_map:
            merged.append((name, rule))
            continue

        replacement = override_map.pop(name)
        if replacement is None:
            replacement = _disabled_rule(rule)
            logger.debug("disabled rule '%s'", name)

        else:
            logger.debug("overrode rule '%s'", name)

        merged.append((name, replacement))

    for name, rule in override_map.items():
        if rule is None:
            raise GrammarError(f"Cannot disable unknown rule '{name}'", {'rule': name})

        logger.debug("added rule '%s'", name)
        merged.append((name, rule))

    return merged


class GrammarRegistry:
    """
    The line and inline grammars used for rendering.

    Rules are held in priority order: when several rules could apply, the first one wins.  A registry is
    immutable once constructed and may be shared between parsers.
    """

    def __init__(
        self,
        line_rules: Iterable[Tuple[str, object]],
        inline_rules: Iterable[Tuple[str, object]]
    ) -> None:
        """
        Build a registry from complete rule lists.

        Args:
            line_rules: (name, rule) pairs for the line grammar, in priority order
            inline_rules: (name, rule) pairs for the inline grammar, in priority order

        Raises:
            GrammarError: If a name is used twice or a rule is of the wrong category
        """
        self._line_entries = self._classify(line_rules, LineGrammarRule, "line")
        self._inline_entries = self._classify(inline_rules, InlineGrammarRule, "inline")

        self._match_rules: Tuple[Tuple[str, MatchRule], ...] = tuple(
            (entry.name, entry.rule) for entry in self._inline_entries if entry.kind == RuleKind.MATCH
        )

        delimiters: Dict[str, List[DelimiterRule]] = {}
        for entry in self._inline_entries:
            if entry.kind != RuleKind.DELIMITER:
                continue

            rule = entry.rule
            assert isinstance(rule, DelimiterRule)
            for ch in dict.fromkeys(rule.characters):
                delimiters.setdefault(ch, []).append(rule)

        # Longest first; sort is stable so priority order breaks ties
        self._delimiter_rules: Dict[str, Tuple[DelimiterRule, ...]] = {
            ch: tuple(sorted(rules, key=lambda r: r.length, reverse=True)) for ch, rules in delimiters.items()
        }
        self._delimiter_characters = frozenset(self._delimiter_rules)

    @classmethod
    def create(
        cls,
        line_grammar: RuleOverrides | None = None,
        inline_grammar: RuleOverrides | None = None
    ) -> "GrammarRegistry":
        """
        Build a registry from the default grammar plus overrides.

        Args:
            line_grammar: Overrides for the default line grammar
            inline_grammar: Overrides for the default inline grammar

        Returns:
            The new registry

        Raises:
            GrammarError: If the merged grammar is invalid
        """
        return cls(
            merge_rules(line_grammar, default_line_grammar()),
            merge_rules(inline_grammar, default_inline_grammar())
        )

    @staticmethod
    def _classify(rules: Iterable[Tuple[str, object]], base: type, table: str) -> Tuple[RuleEntry, ...]:
        """
        Classify each rule into its category.

        Args:
            rules: (name, rule) pairs
            base: Rule base class required for this table
            table: Table name for error messages

        Returns:
            A tuple of rule entries

        Raises:
            GrammarError: On duplicate names or rules of the wrong category
        """
        entries: List[RuleEntry] = []
        seen = set()
        for name, rule in rules:
            if not isinstance(name, str) or not name:
                raise GrammarError(f"Rule names must be non-empty strings, got {name!r}", {'table': table})

            if name in seen:
                raise GrammarError(
                    f"Duplicate rule name '{name}' in {table} grammar",
                    {'table': table, 'rule': name}
                )

            if not isinstance(rule, base):
                raise GrammarError(
                    f"Rule '{name}' is a {type(rule).__name__}, which cannot be used in the {table} grammar",
                    {'table': table, 'rule': name, 'type': type(rule).__name__}
                )

            if isinstance(rule, DelimiterRule) and rule.length < 1:
                raise GrammarError(
                    f"Delimiter rule '{name}' needs a positive length",
                    {'table': table, 'rule': name, 'characters': rule.characters, 'length': rule.length}
                )

            seen.add(name)
            entries.append(RuleEntry(name, rule.kind, rule))

        return tuple(entries)

    def line_entries(self) -> Tuple[RuleEntry, ...]:
        """Get the line grammar entries in priority order."""
        return self._line_entries

    def inline_entries(self) -> Tuple[RuleEntry, ...]:
        """Get the inline grammar entries in priority order."""
        return self._inline_entries

    def match_rules(self) -> Tuple[Tuple[str, MatchRule], ...]:
        """Get the inline match rules in priority order."""
        return self._match_rules

    def delimiter_characters(self) -> FrozenSet[str]:
        """Get every character that can form a delimiter run."""
        return self._delimiter_characters

    def delimiter_rules(self, ch: str) -> Tuple[DelimiterRule, ...]:
        """
        Get the delimiter rules for a character.

        Args:
            ch: Delimiter character

        Returns:
            The rules for `ch`, longest first
        """
        return self._delimiter_rules.get(ch, ())

    def rule(self, name: str) -> LineGrammarRule | InlineGrammarRule:
        """
        Look up a rule by name.

        Args:
            name: Rule name

        Returns:
            The rule

        Raises:
            KeyError: If no rule has this name
        """
        for entry in self._line_entries + self._inline_entries:
            if entry.name == name:
                return entry.rule

        raise KeyError(name)

    def line_rule_names(self) -> List[str]:
        """Get the line grammar rule names in priority order."""
        return [entry.name for entry in self._line_entries]

    def inline_rule_names(self) -> List[str]:
        """Get the inline grammar rule names in priority order."""
        return [entry.name for entry in self._inline_entries]

#!/usr/bin/env python3
"""
Line classification and item extraction.
Drops report boilerplate and runs the remaining lines through an ordered
cascade of record grammars.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import ParsedInventoryItem
from .patterns import ENHANCED_GRAMMARS, ENHANCED_NOISE_RULES, ItemGrammar, NoiseRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemMatch:
    """An item recovered from one report line, before deduplication."""
    line_number: int
    grammar: str
    item: ParsedInventoryItem


class LineClassifier:
    """Classifies report lines as noise, item lines or unrecognized lines."""

    def __init__(self,
                 noise_rules: Sequence[NoiseRule] = ENHANCED_NOISE_RULES,
                 grammars: Sequence[ItemGrammar] = ENHANCED_GRAMMARS):
        self.noise_rules = tuple(noise_rules)
        self.grammars = tuple(grammars)

    def with_extra_rules(self, *rules: NoiseRule) -> 'LineClassifier':
        """Return a classifier that also treats lines matching ``rules`` as noise."""
        return LineClassifier(noise_rules=self.noise_rules + rules, grammars=self.grammars)

    def noise_rule_for(self, line: str) -> Optional[NoiseRule]:
        """Return the first denylist rule that matches ``line``."""
        for rule in self.noise_rules:
            if rule.matches(line):
                return rule
        return None

    def is_noise(self, line: str) -> bool:
        return self.noise_rule_for(line) is not None

    def match_item(self, line: str) -> Optional[Tuple[str, ParsedInventoryItem]]:
        """Try each grammar in priority order; the first match wins."""
        for grammar in self.grammars:
            item = grammar.match(line)
            if item is not None:
                return grammar.name, item
        return None

    def extract_items(self, lines: Iterable[str]) -> Tuple[List[ItemMatch], int]:
        """
        Extract raw item matches from report lines.

        Args:
            lines: Report text lines in reading order

        Returns:
            Tuple of (matches in document order, count of unrecognized non-noise lines)
        """
        matches: List[ItemMatch] = []
        unmatched = 0

        for line_number, line in enumerate(lines, start=1):
            if self.is_noise(line):
                continue

            result = self.match_item(line)
            if result is None:
                # Wrapped descriptions and sub-lot continuation rows land here
                unmatched += 1
                logger.debug(f"No grammar matched line {line_number}: {line.strip()[:80]!r}")
                continue

            grammar_name, item = result
            matches.append(ItemMatch(line_number=line_number, grammar=grammar_name, item=item))

        return matches, unmatched

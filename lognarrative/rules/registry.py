"""
Registry of rules, kept in priority order.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from lognarrative.core.exceptions import RuleRegistrationError

from .base import Rule
from .schema import Finding, RuleContext

logger = logging.getLogger(__name__)


class RuleRegistry:
    """
    Ordered rule collection with id lookup.

    Rules are sorted by priority, highest first. The sort is stable, so rules
    of equal priority run in registration order.
    """

    def __init__(self) -> None:
        self._rules: List[Rule] = []
        self._by_id: Dict[str, Rule] = {}

    def register(self, rule: Rule) -> None:
        """
        Add a rule.

        Raises:
            RuleRegistrationError: If a rule with the same id is already registered
        """
        rule_id = rule.id()
        if rule_id in self._by_id:
            raise RuleRegistrationError(f"Rule already registered: {rule_id}")

        self._rules.append(rule)
        self._by_id[rule_id] = rule
        self._rules.sort(key=lambda r: r.priority(), reverse=True)

    def evaluate_all(self, context: RuleContext) -> List[Finding]:
        """
        Run every rule and concatenate the findings in priority order.

        No ranking or deduplication happens across rules.
        """
        findings: List[Finding] = []
        for rule in self._rules:
            produced = rule.evaluate(context)
            logger.debug("Rule %s produced %d findings", rule.id(), len(produced))
            findings.extend(produced)
        return findings

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        return self._by_id.get(rule_id)

    def rules(self) -> List[Rule]:
        """Registered rules in evaluation order."""
        return list(self._rules)

    def clear(self) -> None:
        self._rules.clear()
        self._by_id.clear()

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id

"""
Rule interface.

A rule is a named, prioritized policy that turns a RuleContext into
findings. Rules keep no state between evaluate() calls.
"""

from abc import ABC, abstractmethod
from typing import List

from .schema import Finding, RuleContext


class Rule(ABC):
    """
    Abstract base for rules.

    Subclasses must tolerate absent context fields by returning an empty
    list instead of raising.
    """

    @abstractmethod
    def id(self) -> str:
        """Stable, unique identifier (e.g. "crash-loop")."""
        pass

    @abstractmethod
    def name(self) -> str:
        """Human-readable name."""
        pass

    def priority(self) -> int:
        """Higher priority rules run first."""
        return 0

    @abstractmethod
    def evaluate(self, context: RuleContext) -> List[Finding]:
        """
        Evaluate the rule.

        Args:
            context: Available analysis outputs

        Returns:
            Findings, possibly empty
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id()!r}, priority={self.priority()})"

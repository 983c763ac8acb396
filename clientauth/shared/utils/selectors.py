# clientauth/shared/utils/selectors.py

"""
Equality-based selectors over string maps.

Syntax is a comma separated list of requirements::

    key=value   key==value   key!=value   key   !key

The empty selector matches everything.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

EQUALS = "="
NOT_EQUALS = "!="
EXISTS = "exists"
DOES_NOT_EXIST = "!"


@dataclass(frozen=True)
class Requirement:
    key: str
    operator: str
    value: Optional[str] = None

    def matches(self, labels: Mapping[str, str]) -> bool:
        if self.operator == EXISTS:
            return self.key in labels
        if self.operator == DOES_NOT_EXIST:
            return self.key not in labels
        if self.operator == EQUALS:
            return self.key in labels and labels[self.key] == self.value
        # A missing key satisfies "!="
        return labels.get(self.key) != self.value

    def __str__(self) -> str:
        if self.operator == EXISTS:
            return self.key
        if self.operator == DOES_NOT_EXIST:
            return f"!{self.key}"
        return f"{self.key}{self.operator}{self.value}"


@dataclass(frozen=True)
class Selector:
    requirements: Tuple[Requirement, ...] = ()

    @classmethod
    def everything(cls) -> "Selector":
        return cls()

    @classmethod
    def parse(cls, text: Optional[str]) -> "Selector":
        """
        Parse a selector string.

        Args:
            text: Selector expression; None or blank selects everything

        Returns:
            The parsed Selector

        Raises:
            ValueError: If a requirement is malformed
        """
        if text is None or not text.strip():
            return cls.everything()

        requirements = []
        for term in text.split(","):
            term = term.strip()
            if not term:
                raise ValueError(f"Empty requirement in selector {text!r}")
            requirements.append(cls._parse_requirement(term))
        return cls(tuple(requirements))

    @staticmethod
    def _parse_requirement(term: str) -> Requirement:
        if "!=" in term:
            key, _, value = term.partition("!=")
            operator = NOT_EQUALS
        elif "==" in term:
            key, _, value = term.partition("==")
            operator = EQUALS
        elif "=" in term:
            key, _, value = term.partition("=")
            operator = EQUALS
        elif term.startswith("!"):
            key, value, operator = term[1:], None, DOES_NOT_EXIST
        else:
            key, value, operator = term, None, EXISTS

        key = key.strip()
        if not key or any(char in key for char in "!=, "):
            raise ValueError(f"Invalid selector requirement {term!r}")
        if value is not None:
            value = value.strip()
            if "=" in value:
                raise ValueError(f"Invalid selector requirement {term!r}")
        return Requirement(key=key, operator=operator, value=value)

    def empty(self) -> bool:
        return not self.requirements

    def matches(self, labels: Optional[Mapping[str, str]]) -> bool:
        labels = labels or {}
        return all(requirement.matches(labels) for requirement in self.requirements)

    def __str__(self) -> str:
        return ",".join(str(requirement) for requirement in self.requirements)

from dataclasses import dataclass
from enum import Enum
from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    short_description: str
    display_name: str
    symbol: str
    message_template: str
    manual_instructions: str
    url: str


class AssociationKind(Enum):
    """Declared association macro. OTHER covers anything the rules do not know."""

    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: str) -> "AssociationKind":
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class AssociationRecord:
    """One declared association, keyed elsewhere by (owning class, association name)."""

    kind: AssociationKind
    class_name: str
    """Target class name."""

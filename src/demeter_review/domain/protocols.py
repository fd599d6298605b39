from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    import astroid

    from demeter_review.domain.nodes import ReviewNode
    from demeter_review.domain.registry_types import AssociationRecord, RuleRegistryEntry
    from demeter_review.domain.rules import Violation


class AssociationRegistryProtocol(Protocol):
    """Read-only association lookups keyed by (class name, association name)."""

    def get_association(
        self, class_name: str, association_name: str
    ) -> Optional["AssociationRecord"]:
        ...

    def is_association(self, class_name: str, name: str) -> bool:
        ...


class AttributeRegistryProtocol(Protocol):
    def is_attribute(self, class_name: str, attribute_name: str) -> bool:
        ...


class ModelCatalogProtocol(Protocol):
    def class_names(self) -> Sequence[str]:
        """Every known model class name, in declaration order."""
        ...


class ModelRegistryProtocol(
    AssociationRegistryProtocol,
    AttributeRegistryProtocol,
    ModelCatalogProtocol,
    Protocol,
):
    """All three model lookups behind one object."""


class NameClassifierProtocol(Protocol):
    def normalize_to_class_name(self, identifier: str) -> str:
        ...


class FindingSinkProtocol(Protocol):
    def add_error(self, violation: "Violation") -> None:
        ...


class AstroidProtocol(Protocol):
    def to_review_node(self, node: "astroid.nodes.NodeNG") -> "ReviewNode":
        """Map an astroid expression onto the review node model."""
        ...

    def is_chain_link(self, node: "astroid.nodes.NodeNG") -> bool:
        """True when an enclosing chain expression already covers node."""
        ...


class GuidanceServiceProtocol(Protocol):
    def get_registry(self) -> dict[str, "RuleRegistryEntry"]:
        ...

    def get_entry(self, rule_code: str) -> Optional["RuleRegistryEntry"]:
        ...

    def get_url(self, rule_code: str) -> str:
        ...

    def get_display_name(self, rule_code: str) -> str:
        ...

    def get_manual_instructions(self, rule_code: str) -> str:
        ...

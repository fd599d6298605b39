"""Domain models for rules and violations."""

from collections.abc import Callable
from dataclasses import dataclass

__all__ = [
    "FilePredicate",
    "Review",
    "Violation",
]

from typing import Optional, Protocol, Union

from demeter_review.domain.nodes import CallNode, NodeKind, TerminalReference

FilePredicate = Callable[[str], bool]


@dataclass(frozen=True)
class Violation:
    """A finding: rule code, rule id message, location and the node it was raised on."""

    code: str
    message: str
    location: str
    node: Union[CallNode, TerminalReference]
    message_args: tuple[str, ...] | None = None
    """Optional args for Pylint add_message (e.g. the offending chain)."""

    @classmethod
    def from_node(
        cls,
        *,
        code: str,
        message: str,
        node: Union[CallNode, TerminalReference],
        message_args: tuple[str, ...] | None = None,
    ) -> "Violation":
        """Build a Violation with location derived from node. Prefer over manual location=."""
        return cls(
            code=code,
            message=message,
            location=str(node.location),
            node=node,
            message_args=message_args,
        )


# -----------------------------------------------------------------------------
# Review protocol: the traversal engine asks for interesting node kinds (and
# optionally files), then calls on_<kind>(node) for every matching node. The
# callback returns the findings; the engine owns the run's finding list.
# -----------------------------------------------------------------------------


class Review(Protocol):
    """One review rule as seen by a traversal engine."""

    code: str
    rule_id: str
    url: str
    description: str

    def interesting_nodes(self) -> frozenset[NodeKind]:
        """Node kinds this rule wants on_<kind> callbacks for."""
        ...

    def interesting_files(self) -> Optional[FilePredicate]:
        """Predicate over file paths, or None for every file."""
        ...

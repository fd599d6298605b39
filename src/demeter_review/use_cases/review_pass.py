"""ReviewPass: walk review node trees and dispatch on_<kind> callbacks to rules."""

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from demeter_review.domain.nodes import CallNode, ReviewNode, SourceUnit, TerminalReference
from demeter_review.domain.rules import Review, Violation

if TYPE_CHECKING:
    from demeter_review.domain.protocols import FindingSinkProtocol


class FindingSink:
    """Append-only list of findings for one pass."""

    def __init__(self) -> None:
        self.violations: list[Violation] = []

    def add_error(self, violation: Violation) -> None:
        self.violations.append(violation)


class ReviewPass:
    """
    Depth-first, document-order traversal over SourceUnits.

    A node is visited before its subject, so ``a.b.c`` visits the ``c`` call,
    then the ``b`` call, then ``a``. Each rule sees only the node kinds it asks
    for, and only in files its interesting_files() predicate accepts.
    """

    def __init__(self, reviews: Sequence[Review]) -> None:
        self._reviews = tuple(reviews)

    def run(self, unit: SourceUnit) -> list[Violation]:
        """Review one unit with a fresh finding list."""
        sink = FindingSink()
        self.review(unit, sink)
        return sink.violations

    def run_many(self, units: Iterable[SourceUnit]) -> list[Violation]:
        """Review each unit independently and concatenate the findings."""
        violations: list[Violation] = []
        for unit in units:
            violations.extend(self.run(unit))
        return violations

    def review(self, unit: SourceUnit, sink: "FindingSinkProtocol") -> None:
        """Review one unit, handing each finding to sink.add_error as it is found."""
        active = [r for r in self._reviews if self._accepts_file(r, unit.path)]
        for node in unit.nodes:
            self._walk(node, active, sink)
        logging.debug("%s: reviewed %d expression(s)", unit.path, len(unit.nodes))

    def _walk(
        self, node: ReviewNode, reviews: Sequence[Review], sink: "FindingSinkProtocol"
    ) -> None:
        callback_name = f"on_{node.kind.value}"
        for review in reviews:
            if node.kind not in review.interesting_nodes():
                continue
            callback = getattr(review, callback_name, None)
            if callback is None:
                continue
            for violation in callback(node):
                sink.add_error(violation)
        if isinstance(node, CallNode):
            self._walk(node.subject, reviews, sink)
            for argument in node.arguments:
                if isinstance(argument, (CallNode, TerminalReference)):
                    self._walk(argument, reviews, sink)

    @staticmethod
    def _accepts_file(review: Review, path: str) -> bool:
        predicate = review.interesting_files()
        return predicate is None or predicate(path)

"""Replace instance variable with local variable (W9502) in partial view files."""

import re
from collections.abc import Sequence
from typing import Optional

from demeter_review.domain.nodes import NodeKind, TerminalReference
from demeter_review.domain.rules import FilePredicate, Violation


class ReplaceInstanceVariableRule:
    """
    Partial views should take their data as locals, not read instance state.

    Every instance-variable read in a file matching one of the partial view
    patterns is reported. No registry lookups.
    """

    code: str = "W9502"
    rule_id: str = "replace instance variable with local variable"
    url: str = "http://rails-bestpractices.com/posts/27-replace-instance-variable-with-local-variable"
    description: str = "Partial views should receive locals instead of reading instance variables."

    def __init__(self, partial_view_patterns: Sequence[str]) -> None:
        self._patterns = tuple(re.compile(p) for p in partial_view_patterns)

    def interesting_nodes(self) -> frozenset[NodeKind]:
        return frozenset({NodeKind.INSTANCE_VARIABLE})

    def interesting_files(self) -> Optional[FilePredicate]:
        return self.is_partial_view

    def is_partial_view(self, path: str) -> bool:
        normalized = path.replace("\\", "/")
        return any(p.search(normalized) for p in self._patterns)

    def on_ivar(self, node: TerminalReference) -> list[Violation]:
        return [
            Violation.from_node(
                code=self.code,
                message=self.rule_id,
                node=node,
                message_args=(node.name,),
            )
        ]

"""Review node model: call nodes and terminal references. No astroid imports."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class NodeKind(Enum):
    """Node kinds a review can subscribe to. Value is the callback suffix (on_<value>)."""

    CALL = "call"
    LOCAL_VARIABLE = "lvar"
    INSTANCE_VARIABLE = "ivar"
    OTHER = "other"


@dataclass(frozen=True)
class SourceLocation:
    """Where a node starts: path:line:column."""

    path: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class TerminalReference:
    """Leaf of a call chain: a local variable, an instance variable or anything else."""

    kind: NodeKind
    name: str
    location: SourceLocation = field(default_factory=SourceLocation)
    origin: object = field(default=None, compare=False, repr=False)
    """Front-end node this reference was built from (e.g. an astroid node)."""

    @property
    def is_variable(self) -> bool:
        return self.kind in (NodeKind.LOCAL_VARIABLE, NodeKind.INSTANCE_VARIABLE)


@dataclass(frozen=True)
class CallNode:
    """
    subject.message(arguments).

    Attribute reads count as calls with no arguments, so ``invoice.user.name``
    is two nested call nodes rooted at the ``invoice`` reference.
    """

    subject: "ReviewNode"
    message: str
    arguments: tuple[object, ...] = ()
    location: SourceLocation = field(default_factory=SourceLocation)
    origin: object = field(default=None, compare=False, repr=False)

    kind: NodeKind = field(default=NodeKind.CALL, init=False)

    def chain(self) -> str:
        """Dotted text of the chain, e.g. 'invoice.user.name'."""
        if isinstance(self.subject, CallNode):
            return f"{self.subject.chain()}.{self.message}"
        return f"{self.subject.name}.{self.message}"


ReviewNode = Union[CallNode, TerminalReference]


@dataclass(frozen=True)
class SourceUnit:
    """One file's worth of top-level expressions, in document order."""

    path: str
    nodes: tuple[ReviewNode, ...] = ()

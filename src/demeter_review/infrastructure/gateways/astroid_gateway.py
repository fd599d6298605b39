"""AstroidGateway: maps astroid expressions onto the review node model."""

import astroid

from demeter_review.domain.config import DEFAULT_INSTANCE_RECEIVER
from demeter_review.domain.nodes import (
    CallNode,
    NodeKind,
    ReviewNode,
    SourceLocation,
    TerminalReference,
)
from demeter_review.domain.protocols import AstroidProtocol

_NON_VARIABLE_BINDINGS = (
    astroid.nodes.Import,
    astroid.nodes.ImportFrom,
    astroid.nodes.ClassDef,
    astroid.nodes.FunctionDef,
)


class AstroidGateway(AstroidProtocol):
    """
    Python reads the way the rules expect:

        invoice.user.name      -> call(name, call(user, lvar invoice))
        self.invoice.user()    -> call(user, ivar invoice)
        Invoice.objects.get()  -> call(get, call(objects, other Invoice))
    """

    def __init__(self, instance_receiver: str = DEFAULT_INSTANCE_RECEIVER) -> None:
        self._instance_receiver = instance_receiver

    def to_review_node(self, node: astroid.nodes.NodeNG) -> ReviewNode:
        location = self.location_of(node)
        if isinstance(node, astroid.nodes.Call) and isinstance(
            node.func, astroid.nodes.Attribute
        ):
            return CallNode(
                subject=self.to_review_node(node.func.expr),
                message=node.func.attrname,
                arguments=tuple(node.args) + tuple(node.keywords or ()),
                location=location,
                origin=node,
            )
        if isinstance(node, astroid.nodes.Attribute):
            if self.is_instance_receiver(node.expr) and not self.is_call_target(node):
                return TerminalReference(
                    kind=NodeKind.INSTANCE_VARIABLE,
                    name=node.attrname,
                    location=location,
                    origin=node,
                )
            return CallNode(
                subject=self.to_review_node(node.expr),
                message=node.attrname,
                location=location,
                origin=node,
            )
        if isinstance(node, astroid.nodes.Name):
            kind = (
                NodeKind.LOCAL_VARIABLE
                if self.is_variable_name(node)
                else NodeKind.OTHER
            )
            return TerminalReference(kind=kind, name=node.name, location=location, origin=node)
        return TerminalReference(
            kind=NodeKind.OTHER,
            name=node.as_string(),
            location=location,
            origin=node,
        )

    def is_call_target(self, node: astroid.nodes.Attribute) -> bool:
        parent = node.parent
        return isinstance(parent, astroid.nodes.Call) and parent.func is node

    def is_chain_link(self, node: astroid.nodes.NodeNG) -> bool:
        """True when node is the receiver of an attribute or a called attribute."""
        parent = node.parent
        if isinstance(parent, astroid.nodes.Attribute) and parent.expr is node:
            return True
        return isinstance(node, astroid.nodes.Attribute) and self.is_call_target(node)

    def is_instance_receiver(self, node: astroid.nodes.NodeNG) -> bool:
        return isinstance(node, astroid.nodes.Name) and node.name == self._instance_receiver

    def is_variable_name(self, node: astroid.nodes.Name) -> bool:
        """Bound by assignment, argument or loop target; not an import, class or def."""
        if node.name == self._instance_receiver:
            return False
        try:
            _scope, stmts = node.lookup(node.name)
        except (astroid.InferenceError, AttributeError):
            return False
        if not stmts:
            return False
        return not any(isinstance(s, _NON_VARIABLE_BINDINGS) for s in stmts)

    def location_of(self, node: astroid.nodes.NodeNG) -> SourceLocation:
        root = node.root()
        path = getattr(root, "file", "") or ""
        return SourceLocation(
            path=str(path),
            line=getattr(node, "lineno", 0) or 0,
            column=getattr(node, "col_offset", 0) or 0,
        )

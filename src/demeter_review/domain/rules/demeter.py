"""Law of Demeter rule (W9501): reaching through an association for its attributes."""

from typing import TYPE_CHECKING, ClassVar, Optional

from demeter_review.domain.naming import AssociationNaming
from demeter_review.domain.nodes import CallNode, NodeKind, TerminalReference
from demeter_review.domain.registry_types import AssociationKind
from demeter_review.domain.rules import FilePredicate, Violation

if TYPE_CHECKING:
    from demeter_review.domain.protocols import (
        ModelRegistryProtocol,
        NameClassifierProtocol,
    )


class LawOfDemeterRule:
    """
    Flags ``receiver.association.attribute`` when the association is singular.

    Review process:
        for a call node whose subject is also a call node, and whose subject's
        subject is a local or instance variable, classify the variable name to
        a model class. If the inner message is a belongs_to/has_one association
        of that class, and the outer message is an attribute of the associated
        class, the receiver should delegate instead:

            invoice.user.name  ->  invoice.user_name

    Stateless: registries are injected and only read.
    """

    code: str = "W9501"
    rule_id: str = "law of demeter"
    url: str = "http://rails-bestpractices.com/posts/15-the-law-of-demeter"
    description: str = "Law of Demeter: delegate to the association instead of chaining through it."

    SINGULAR_ASSOCIATIONS: ClassVar[frozenset[AssociationKind]] = frozenset(
        {AssociationKind.BELONGS_TO, AssociationKind.HAS_ONE}
    )

    def __init__(
        self,
        models: "ModelRegistryProtocol",
        name_classifier: "NameClassifierProtocol",
    ) -> None:
        self._models = models
        self._name_classifier = name_classifier

    def interesting_nodes(self) -> frozenset[NodeKind]:
        return frozenset({NodeKind.CALL})

    def interesting_files(self) -> Optional[FilePredicate]:
        return None

    def on_call(self, node: CallNode) -> list[Violation]:
        """Check one call node. Returns at most one violation."""
        inner = node.subject
        if not isinstance(inner, CallNode):
            return []
        receiver = inner.subject
        if not (isinstance(receiver, TerminalReference) and receiver.is_variable):
            return []
        if not self._needs_delegate(receiver, inner.message, node.message):
            return []
        return [
            Violation.from_node(
                code=self.code,
                message=self.rule_id,
                node=node,
                message_args=(node.chain(),),
            )
        ]

    def _needs_delegate(
        self,
        receiver: TerminalReference,
        association_name: str,
        attribute_name: str,
    ) -> bool:
        class_name = self._name_classifier.normalize_to_class_name(receiver.name)
        if not class_name:
            return False
        association = self._models.get_association(class_name, association_name)
        if association is None:
            return False
        if association.kind not in self.SINGULAR_ASSOCIATIONS:
            return False
        if AssociationNaming.is_polymorphic(association_name):
            return self._is_polymorphic_attribute(
                class_name, association_name, attribute_name
            )
        return self._models.is_attribute(association.class_name, attribute_name)

    def _is_polymorphic_attribute(
        self, class_name: str, association_name: str, attribute_name: str
    ) -> bool:
        """
        '-able' associations point at whichever model declares 'name'/'names'.

        Scan every model; wherever one of the candidates is an association, the
        attribute is looked up on class_name (the chain's receiver class), not
        on the matched model.
        """
        candidates = AssociationNaming.polymorphic_candidates(association_name)
        if candidates is None:
            return False
        for model in self._models.class_names():
            if not any(self._models.is_association(model, c) for c in candidates):
                continue
            if self._models.is_attribute(class_name, attribute_name):
                return True
        return False

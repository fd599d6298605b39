"""Review checks (W9501, W9502). Thin pylint adapter over the domain rules."""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

import astroid
from pylint.checkers import BaseChecker

if TYPE_CHECKING:
    from pylint.lint import PyLinter

from demeter_review.domain.config import ConfigurationLoader
from demeter_review.domain.constants import ALL_CODES
from demeter_review.domain.nodes import NodeKind, ReviewNode, SourceUnit
from demeter_review.domain.protocols import (
    AstroidProtocol,
    ModelRegistryProtocol,
    NameClassifierProtocol,
)
from demeter_review.domain.registry_types import RuleRegistryEntry
from demeter_review.domain.rule_msgs import RuleMsgBuilder
from demeter_review.domain.rules import Review, Violation
from demeter_review.domain.rules.demeter import LawOfDemeterRule
from demeter_review.domain.rules.partial_views import ReplaceInstanceVariableRule
from demeter_review.use_cases.review_pass import ReviewPass

ModelRegistryFactory = Callable[[str | None], ModelRegistryProtocol]


class DemeterReviewChecker(BaseChecker):
    """
    pylint walks the tree; each outermost expression chain is mapped onto a
    review node, and the module's chains go through one ReviewPass on leave.
    """

    name: str = "demeter-review"
    CODES = list(ALL_CODES)
    options = (
        (
            "demeter-models-manifest",
            {
                "default": "",
                "type": "string",
                "metavar": "<path>",
                "help": "YAML model manifest; overrides models_manifest from [tool.demeter-review].",
            },
        ),
    )

    def __init__(
        self,
        linter: "PyLinter",
        ast_gateway: AstroidProtocol,
        config_loader: ConfigurationLoader,
        registry: Mapping[str, RuleRegistryEntry],
        name_classifier: NameClassifierProtocol,
        model_registry_factory: ModelRegistryFactory,
    ) -> None:
        self.msgs = RuleMsgBuilder.build_msgs_for_codes(
            registry, self.CODES)  # type: ignore[assignment]
        super().__init__(linter)
        self.config_loader = config_loader
        self._ast_gateway = ast_gateway
        self._name_classifier = name_classifier
        self._model_registry_factory = model_registry_factory
        self._review_pass: ReviewPass | None = None
        self._path: str = ""
        self._roots: list[ReviewNode] = []

    def open(self) -> None:
        """Build rules once options are parsed."""
        self._review_pass = ReviewPass(self._build_reviews())

    def _build_reviews(self) -> tuple[Review, ...]:
        manifest = getattr(self.linter.config, "demeter_models_manifest", "") or None
        models = self._model_registry_factory(manifest)
        return (
            LawOfDemeterRule(models=models, name_classifier=self._name_classifier),
            ReplaceInstanceVariableRule(self.config_loader.partial_view_patterns),
        )

    @property
    def review_pass(self) -> ReviewPass:
        if self._review_pass is None:
            self._review_pass = ReviewPass(self._build_reviews())
        return self._review_pass

    def visit_module(self, node: astroid.nodes.Module) -> None:
        self._path = str(getattr(node, "file", "") or "")
        self._roots = []

    def visit_call(self, node: astroid.nodes.Call) -> None:
        if isinstance(node.func, astroid.nodes.Attribute):
            self._collect(node)

    def visit_attribute(self, node: astroid.nodes.Attribute) -> None:
        self._collect(node)

    def leave_module(self, node: astroid.nodes.Module) -> None:
        unit = SourceUnit(path=self._path, nodes=tuple(self._roots))
        self._roots = []
        self.review_pass.review(unit, self)

    def _collect(self, node: astroid.nodes.NodeNG) -> None:
        # Only outermost chains; ReviewPass walks their subjects.
        if self._ast_gateway.is_chain_link(node):
            return
        review_node = self._ast_gateway.to_review_node(node)
        if review_node.kind is NodeKind.OTHER:
            return
        self._roots.append(review_node)

    def add_error(self, violation: Violation) -> None:
        """Finding sink for ReviewPass: each finding becomes a pylint message."""
        self.add_message(
            violation.code,
            node=violation.node.origin,
            args=violation.message_args or (),
        )

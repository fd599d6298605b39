"""Unit tests for ReviewPass traversal and dispatch."""

import random
import unittest
from unittest.mock import MagicMock

from demeter_review.domain.config import DEFAULT_PARTIAL_VIEW_PATTERNS
from demeter_review.domain.naming import NameClassifier
from demeter_review.domain.nodes import CallNode, NodeKind, SourceUnit
from demeter_review.domain.registry_types import AssociationKind
from demeter_review.domain.rules.demeter import LawOfDemeterRule
from demeter_review.domain.rules.partial_views import ReplaceInstanceVariableRule
from demeter_review.use_cases.review_pass import FindingSink, ReviewPass
from tests.unit.review_test_utils import build_models, chain, ivar, lvar


class TestReviewPass(unittest.TestCase):
    def setUp(self) -> None:
        models = build_models(
            associations={
                "Invoice": {
                    "user": (AssociationKind.BELONGS_TO, "User"),
                    "lines": (AssociationKind.HAS_MANY, "Line"),
                },
            },
            attributes={"User": ["name", "email"], "Line": ["amount"]},
        )
        self.demeter = LawOfDemeterRule(models=models, name_classifier=NameClassifier())
        self.partials = ReplaceInstanceVariableRule(DEFAULT_PARTIAL_VIEW_PATTERNS)
        self.review_pass = ReviewPass([self.demeter, self.partials])

    def test_findings_in_document_order(self) -> None:
        first = chain(ivar("@invoice", line=1), "user", "name", line=1)
        second = chain(lvar("invoice", line=2), "user", "email", line=2)
        unit = SourceUnit("app/views/invoices/show.py", (first, second))

        violations = self.review_pass.run(unit)

        self.assertEqual([v.node for v in violations], [first, second])

    def test_three_level_chain_reported_at_inner_window(self) -> None:
        outer = chain(ivar("@invoice"), "user", "name", "strip")
        violations = self.review_pass.run(SourceUnit("app/views/invoices/show.py", (outer,)))

        self.assertEqual(len(violations), 1)
        self.assertIs(violations[0].node, outer.subject)

    def test_calls_inside_arguments_are_visited(self) -> None:
        argument = chain(ivar("@invoice"), "user", "name")
        call = CallNode(subject=lvar("formatter"), message="render", arguments=(argument,))
        violations = self.review_pass.run(SourceUnit("app/helpers.py", (call,)))

        self.assertEqual([v.node for v in violations], [argument])

    def test_partial_rule_only_runs_in_partial_views(self) -> None:
        node = chain(ivar("@invoice"), "lines", "amount")
        regular = self.review_pass.run(SourceUnit("app/views/invoices/show.py", (node,)))
        partial = self.review_pass.run(SourceUnit("app/views/invoices/_row.py", (node,)))

        self.assertEqual(regular, [])
        self.assertEqual([v.code for v in partial], ["W9502"])

    def test_order_independence(self) -> None:
        nodes = [
            chain(ivar("@invoice", line=i), msg, attr, line=i)
            for i, (msg, attr) in enumerate(
                [("user", "name"), ("user", "nickname"), ("lines", "amount"), ("user", "email")]
            )
        ]
        expected = {v.location for v in self.review_pass.run(SourceUnit("a.py", tuple(nodes)))}
        shuffled = list(nodes)
        random.Random(7).shuffle(shuffled)
        actual = {v.location for v in self.review_pass.run(SourceUnit("a.py", tuple(shuffled)))}

        self.assertEqual(expected, actual)
        self.assertEqual(len(expected), 2)

    def test_idempotent(self) -> None:
        unit = SourceUnit("a.py", (chain(ivar("@invoice"), "user", "name"),))
        self.assertEqual(self.review_pass.run(unit), self.review_pass.run(unit))

    def test_run_many_keeps_units_separate(self) -> None:
        units = [
            SourceUnit("a.py", (chain(ivar("@invoice"), "user", "name"),)),
            SourceUnit("b.py", (chain(lvar("invoice"), "lines", "amount"),)),
            SourceUnit("c.py", (chain(lvar("invoice"), "user", "email"),)),
        ]
        violations = self.review_pass.run_many(units)
        self.assertEqual(len(violations), 2)

    def test_review_hands_findings_to_sink(self) -> None:
        sink = MagicMock()
        node = chain(ivar("@invoice"), "user", "name")

        self.review_pass.review(SourceUnit("a.py", (node,)), sink)

        sink.add_error.assert_called_once()
        self.assertIs(sink.add_error.call_args.args[0].node, node)

    def test_rule_without_callback_is_skipped(self) -> None:
        class NoCallback:
            code = "W0000"
            rule_id = "nothing"
            url = ""
            description = ""

            def interesting_nodes(self):
                return frozenset({NodeKind.INSTANCE_VARIABLE})

            def interesting_files(self):
                return None

        review_pass = ReviewPass([NoCallback()])
        self.assertEqual(review_pass.run(SourceUnit("a.py", (ivar("x"),))), [])


class TestFindingSink(unittest.TestCase):
    def test_add_error_appends(self) -> None:
        sink = FindingSink()
        sink.add_error("first")  # type: ignore[arg-type]
        sink.add_error("first")  # type: ignore[arg-type]
        self.assertEqual(sink.violations, ["first", "first"])

"""Unit tests for LawOfDemeterRule (W9501)."""

import unittest
from unittest.mock import MagicMock

from demeter_review.domain.naming import NameClassifier
from demeter_review.domain.nodes import CallNode, NodeKind, TerminalReference
from demeter_review.domain.registry_types import AssociationKind
from demeter_review.domain.rules.demeter import LawOfDemeterRule
from tests.unit.review_test_utils import build_models, chain, ivar, lvar

BELONGS_TO = AssociationKind.BELONGS_TO
HAS_ONE = AssociationKind.HAS_ONE
HAS_MANY = AssociationKind.HAS_MANY


class TestLawOfDemeterRule(unittest.TestCase):
    """Invoice belongs_to User; User has a name."""

    def setUp(self) -> None:
        self.models = build_models(
            associations={"Invoice": {"user": (BELONGS_TO, "User")}},
            attributes={"User": ["name", "email"], "Invoice": ["number"]},
        )
        self.rule = LawOfDemeterRule(models=self.models, name_classifier=NameClassifier())

    def test_interesting_nodes_is_call_only(self) -> None:
        self.assertEqual(self.rule.interesting_nodes(), frozenset({NodeKind.CALL}))
        self.assertIsNone(self.rule.interesting_files())

    def test_ivar_association_attribute_is_violation(self) -> None:
        node = chain(ivar("@invoice"), "user", "name")
        violations = self.rule.on_call(node)

        self.assertEqual(len(violations), 1)
        self.assertEqual(violations[0].code, "W9501")
        self.assertEqual(violations[0].message, "law of demeter")
        self.assertIs(violations[0].node, node)
        self.assertEqual(violations[0].message_args, ("@invoice.user.name",))

    def test_location_is_outer_call(self) -> None:
        node = chain(ivar("@invoice", line=7), "user", "name", line=7)
        violations = self.rule.on_call(node)
        self.assertEqual(violations[0].location, "app/views/invoices/show.py:7:1")

    def test_lvar_receiver_is_violation(self) -> None:
        self.assertEqual(len(self.rule.on_call(chain(lvar("invoice"), "user", "email"))), 1)

    def test_plural_variable_name_classifies_to_singular_model(self) -> None:
        self.assertEqual(len(self.rule.on_call(chain(lvar("invoices"), "user", "name"))), 1)

    def test_has_one_is_violation(self) -> None:
        models = build_models(
            associations={"User": {"profile": (HAS_ONE, "Profile")}},
            attributes={"Profile": ["bio"]},
        )
        rule = LawOfDemeterRule(models=models, name_classifier=NameClassifier())
        self.assertEqual(len(rule.on_call(chain(ivar("@user"), "profile", "bio"))), 1)

    def test_has_many_is_not_violation(self) -> None:
        models = build_models(
            associations={"Invoice": {"users": (HAS_MANY, "User")}},
            attributes={"User": ["name"]},
        )
        rule = LawOfDemeterRule(models=models, name_classifier=NameClassifier())
        self.assertEqual(rule.on_call(chain(ivar("@invoice"), "users", "name")), [])

    def test_other_association_kind_is_not_violation(self) -> None:
        models = build_models(
            associations={"Invoice": {"user": (AssociationKind.OTHER, "User")}},
            attributes={"User": ["name"]},
        )
        rule = LawOfDemeterRule(models=models, name_classifier=NameClassifier())
        self.assertEqual(rule.on_call(chain(ivar("@invoice"), "user", "name")), [])

    def test_missing_attribute_is_not_violation(self) -> None:
        self.assertEqual(self.rule.on_call(chain(ivar("@invoice"), "user", "nickname")), [])

    def test_unknown_association_is_not_violation(self) -> None:
        self.assertEqual(self.rule.on_call(chain(ivar("@invoice"), "customer", "name")), [])

    def test_unknown_class_is_not_violation(self) -> None:
        self.assertEqual(self.rule.on_call(chain(ivar("@receipt"), "user", "name")), [])

    def test_dangling_target_class_is_not_violation(self) -> None:
        models = build_models(associations={"Invoice": {"user": (BELONGS_TO, "Ghost")}})
        rule = LawOfDemeterRule(models=models, name_classifier=NameClassifier())
        self.assertEqual(rule.on_call(chain(ivar("@invoice"), "user", "name")), [])

    def test_single_level_call_is_ignored(self) -> None:
        self.assertEqual(self.rule.on_call(chain(ivar("@invoice"), "user")), [])

    def test_three_level_outer_node_is_ignored(self) -> None:
        """@invoice.user.name.upcase: the outer call's subject's subject is a call."""
        node = chain(ivar("@invoice"), "user", "name", "upcase")
        self.assertEqual(self.rule.on_call(node), [])
        # The inner two-level window is still a violation when visited on its own.
        self.assertIsInstance(node.subject, CallNode)
        self.assertEqual(len(self.rule.on_call(node.subject)), 1)

    def test_sigil_only_identifier_is_ignored(self) -> None:
        models = MagicMock()
        rule = LawOfDemeterRule(models=models, name_classifier=NameClassifier())

        self.assertEqual(rule.on_call(chain(ivar("@"), "user", "name")), [])
        models.get_association.assert_not_called()

    def test_non_variable_receiver_is_ignored(self) -> None:
        receiver = TerminalReference(kind=NodeKind.OTHER, name="Invoice")
        self.assertEqual(self.rule.on_call(chain(receiver, "user", "name")), [])

    def test_repeated_runs_give_identical_findings(self) -> None:
        node = chain(ivar("@invoice"), "user", "name")
        self.assertEqual(self.rule.on_call(node), self.rule.on_call(node))

    def test_uses_injected_name_classifier(self) -> None:
        classifier = MagicMock()
        classifier.normalize_to_class_name.return_value = "Invoice"
        rule = LawOfDemeterRule(models=self.models, name_classifier=classifier)

        self.assertEqual(len(rule.on_call(chain(lvar("bill"), "user", "name"))), 1)
        classifier.normalize_to_class_name.assert_called_once_with("bill")


class TestPolymorphicAssociations(unittest.TestCase):
    """Survey belongs_to :nameable; Person declares 'name'. Attribute checked on Survey."""

    def build_rule(self, survey_attributes: list[str], person_associations: dict) -> LawOfDemeterRule:
        models = build_models(
            associations={
                "Survey": {"nameable": (BELONGS_TO, "Nameable")},
                "Person": person_associations,
            },
            attributes={"Survey": survey_attributes, "Nameable": [], "Person": []},
        )
        return LawOfDemeterRule(models=models, name_classifier=NameClassifier())

    def test_root_candidate_match_checks_origin_class(self) -> None:
        rule = self.build_rule(["title"], {"name": (HAS_ONE, "Name")})
        self.assertEqual(len(rule.on_call(chain(ivar("@survey"), "nameable", "title"))), 1)

    def test_plural_candidate_match(self) -> None:
        rule = self.build_rule(["title"], {"names": (HAS_MANY, "Name")})
        self.assertEqual(len(rule.on_call(chain(ivar("@survey"), "nameable", "title"))), 1)

    def test_origin_class_lacks_attribute(self) -> None:
        rule = self.build_rule([], {"name": (HAS_ONE, "Name")})
        self.assertEqual(rule.on_call(chain(ivar("@survey"), "nameable", "title")), [])

    def test_target_class_attribute_is_not_consulted(self) -> None:
        models = build_models(
            associations={
                "Survey": {"nameable": (BELONGS_TO, "Person")},
                "Person": {"name": (HAS_ONE, "Name")},
            },
            attributes={"Person": ["title"]},
        )
        rule = LawOfDemeterRule(models=models, name_classifier=NameClassifier())
        self.assertEqual(rule.on_call(chain(ivar("@survey"), "nameable", "title")), [])

    def test_no_model_declares_candidate(self) -> None:
        rule = self.build_rule(["title"], {"label": (HAS_ONE, "Label")})
        self.assertEqual(rule.on_call(chain(ivar("@survey"), "nameable", "title")), [])

    def test_scan_continues_past_first_match(self) -> None:
        """Every class declaring a candidate is checked; same origin class each time."""
        models = build_models(
            associations={
                "Survey": {"nameable": (BELONGS_TO, "Nameable")},
                "Person": {"name": (HAS_ONE, "Name")},
                "Company": {"names": (HAS_MANY, "Name")},
            },
            attributes={"Survey": ["title"]},
        )
        calls: list[tuple[str, str]] = []
        original = models.is_attribute

        def spy(class_name: str, attribute_name: str) -> bool:
            calls.append((class_name, attribute_name))
            return original(class_name, attribute_name)

        models.is_attribute = spy  # type: ignore[method-assign]
        rule = LawOfDemeterRule(models=models, name_classifier=NameClassifier())

        self.assertEqual(rule.on_call(chain(ivar("@survey"), "nameable", "subtitle")), [])
        self.assertEqual(calls, [("Survey", "subtitle"), ("Survey", "subtitle")])

    def test_has_many_able_association_is_not_violation(self) -> None:
        models = build_models(
            associations={
                "Survey": {"nameable": (HAS_MANY, "Nameable")},
                "Person": {"name": (HAS_ONE, "Name")},
            },
            attributes={"Survey": ["title"]},
        )
        rule = LawOfDemeterRule(models=models, name_classifier=NameClassifier())
        self.assertEqual(rule.on_call(chain(ivar("@survey"), "nameable", "title")), [])

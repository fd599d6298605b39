"""Name heuristics shared by the rules: variable -> class name, polymorphic association names."""

import inflection

_SIGILS: str = "@$"
_POLYMORPHIC_SUFFIX: str = "able"


class NameClassifier:
    """
    Turns a variable-style identifier into a singular class name.

    '@invoices' -> 'Invoice', 'line_item' -> 'LineItem'. Same convention as
    ActiveSupport's classify, via the inflection package.
    """

    def normalize_to_class_name(self, identifier: str) -> str:
        name = identifier.lstrip(_SIGILS)
        # 'schema.invoices' classifies the last segment only
        name = name.rsplit(".", 1)[-1]
        if not name:
            return ""
        return inflection.camelize(inflection.singularize(name))


class AssociationNaming:
    """Suffix helpers for polymorphic association names. No top-level functions."""

    @staticmethod
    def is_polymorphic(association_name: str) -> bool:
        return association_name.endswith(_POLYMORPHIC_SUFFIX)

    @staticmethod
    def polymorphic_candidates(association_name: str) -> tuple[str, str] | None:
        """
        Association names an '-able' name may stand for elsewhere in the model set.

        'nameable' -> ('name', 'names'): the bare root and its naive plural.
        Returns None when the name does not end in 'able'.
        """
        if not AssociationNaming.is_polymorphic(association_name):
            return None
        root = association_name[: -len(_POLYMORPHIC_SUFFIX)]
        return (root, root + "s")

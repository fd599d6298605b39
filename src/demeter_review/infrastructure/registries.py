"""In-memory model registries: associations, attributes and the ordered class catalog."""

from collections.abc import Iterable, Iterator, Sequence

from demeter_review.domain.registry_types import AssociationRecord


class ModelAssociations:
    """(class name, association name) -> AssociationRecord."""

    def __init__(self) -> None:
        self._associations: dict[str, dict[str, AssociationRecord]] = {}

    def add_association(
        self, class_name: str, association_name: str, record: AssociationRecord
    ) -> None:
        self._associations.setdefault(class_name, {})[association_name] = record

    def get_association(
        self, class_name: str, association_name: str
    ) -> AssociationRecord | None:
        return self._associations.get(class_name, {}).get(association_name)

    def is_association(self, class_name: str, name: str) -> bool:
        return name in self._associations.get(class_name, {})

    def items(self) -> Iterator[tuple[str, str, AssociationRecord]]:
        for class_name, associations in self._associations.items():
            for name, record in associations.items():
                yield class_name, name, record


class ModelAttributes:
    """(class name, attribute name) -> exists."""

    def __init__(self) -> None:
        self._attributes: dict[str, set[str]] = {}

    def add_attributes(self, class_name: str, names: Iterable[str]) -> None:
        self._attributes.setdefault(class_name, set()).update(names)

    def is_attribute(self, class_name: str, attribute_name: str) -> bool:
        return attribute_name in self._attributes.get(class_name, set())

    def get_attributes(self, class_name: str) -> list[str]:
        return sorted(self._attributes.get(class_name, set()))


class ModelRegistry:
    """
    The three lookups the rules need, behind one object.

    Built once (by ModelManifestGateway or by tests), then only read. Class
    order is the order models were added.
    """

    def __init__(
        self,
        associations: ModelAssociations | None = None,
        attributes: ModelAttributes | None = None,
    ) -> None:
        self.associations = associations or ModelAssociations()
        self.attributes = attributes or ModelAttributes()
        self._class_names: list[str] = []

    def add_model(self, class_name: str) -> None:
        if class_name not in self._class_names:
            self._class_names.append(class_name)

    def class_names(self) -> Sequence[str]:
        return tuple(self._class_names)

    def get_association(
        self, class_name: str, association_name: str
    ) -> AssociationRecord | None:
        return self.associations.get_association(class_name, association_name)

    def is_association(self, class_name: str, name: str) -> bool:
        return self.associations.is_association(class_name, name)

    def is_attribute(self, class_name: str, attribute_name: str) -> bool:
        return self.attributes.is_attribute(class_name, attribute_name)

"""ModelManifestGateway: builds a ModelRegistry from a YAML manifest and/or inline config."""

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from demeter_review.domain.naming import NameClassifier
from demeter_review.domain.registry_types import AssociationKind, AssociationRecord
from demeter_review.infrastructure.registries import ModelRegistry


class ModelManifestError(ValueError):
    """The manifest exists but does not have the models/associations/attributes shape."""


class ModelManifestGateway:
    """
    Loads declared models.

    Manifest shape (YAML file, or the same table inline in pyproject.toml):

        models:
          Invoice:
            attributes: [number, total]
            associations:
              user: belongs_to
              lines: {kind: has_many, class_name: InvoiceLine}

    A missing class_name is classified from the association name.
    """

    def __init__(self, name_classifier: NameClassifier | None = None) -> None:
        self._name_classifier = name_classifier or NameClassifier()

    def load(
        self,
        manifest_path: str | None = None,
        inline_models: Mapping[str, object] | None = None,
        base_dir: str | None = None,
    ) -> ModelRegistry:
        """Load the manifest file (if any) then inline models. Missing file -> warning."""
        registry = ModelRegistry()
        if manifest_path:
            path = Path(manifest_path)
            if not path.is_absolute() and base_dir:
                path = Path(base_dir) / path
            if path.exists():
                self.load_file(path, registry)
            else:
                logging.warning("Model manifest %s not found; no models loaded from it.", path)
        if inline_models:
            self.load_mapping({"models": dict(inline_models)}, registry, source="inline config")
        logging.debug("Loaded %d model(s).", len(registry.class_names()))
        return registry

    def load_file(self, path: Path, registry: ModelRegistry | None = None) -> ModelRegistry:
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ModelManifestError(f"{path}: invalid YAML ({exc})") from exc
        if data is None:
            return registry if registry is not None else ModelRegistry()
        return self.load_mapping(data, registry, source=str(path))

    def load_mapping(
        self,
        data: object,
        registry: ModelRegistry | None = None,
        source: str = "<mapping>",
    ) -> ModelRegistry:
        registry = registry if registry is not None else ModelRegistry()
        if not isinstance(data, dict):
            raise ModelManifestError(f"{source}: expected a mapping with a 'models' key")
        models = data.get("models") or {}
        if not isinstance(models, dict):
            raise ModelManifestError(f"{source}: 'models' must map class names to definitions")
        for class_name, definition in models.items():
            self._load_model(str(class_name), definition or {}, registry, source)
        return registry

    def _load_model(
        self,
        class_name: str,
        definition: object,
        registry: ModelRegistry,
        source: str,
    ) -> None:
        if not isinstance(definition, dict):
            raise ModelManifestError(f"{source}: model {class_name} must be a mapping")
        registry.add_model(class_name)

        attributes = definition.get("attributes") or []
        if not isinstance(attributes, list):
            raise ModelManifestError(f"{source}: {class_name}.attributes must be a list")
        registry.attributes.add_attributes(class_name, (str(a) for a in attributes))

        associations = definition.get("associations") or {}
        if not isinstance(associations, dict):
            raise ModelManifestError(f"{source}: {class_name}.associations must be a mapping")
        for name, declaration in associations.items():
            record = self._parse_association(class_name, str(name), declaration, source)
            registry.associations.add_association(class_name, str(name), record)

    def _parse_association(
        self, class_name: str, name: str, declaration: object, source: str
    ) -> AssociationRecord:
        if isinstance(declaration, str):
            raw_kind, target = declaration, None
        elif isinstance(declaration, dict):
            raw_kind, target = str(declaration.get("kind", "")), declaration.get("class_name")
        else:
            raise ModelManifestError(
                f"{source}: {class_name}.associations.{name} must be a kind or a mapping"
            )
        kind = AssociationKind.parse(raw_kind)
        if kind is AssociationKind.OTHER and raw_kind != AssociationKind.OTHER.value:
            logging.warning(
                "%s: unknown association kind %r for %s.%s; treating it as 'other'.",
                source,
                raw_kind,
                class_name,
                name,
            )
        target_name = str(target) if target else self._name_classifier.normalize_to_class_name(name)
        return AssociationRecord(kind=kind, class_name=target_name)

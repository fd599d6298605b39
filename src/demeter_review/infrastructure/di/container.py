from typing import TYPE_CHECKING, Any, Optional, cast

from demeter_review.domain.config import ConfigurationLoader
from demeter_review.domain.naming import NameClassifier
from demeter_review.infrastructure.config_file_loader import ConfigFileLoader
from demeter_review.infrastructure.gateways.astroid_gateway import AstroidGateway
from demeter_review.infrastructure.gateways.model_manifest_gateway import (
    ModelManifestGateway,
)
from demeter_review.infrastructure.services.guidance_service import GuidanceService

if TYPE_CHECKING:
    from demeter_review.infrastructure.registries import ModelRegistry


class DemeterContainer:
    """Dependency Injection Container for the review rules."""

    _instance: Optional["DemeterContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_dict, config_root = ConfigFileLoader.load_config_from_fs()
        config_loader = ConfigurationLoader(config_dict, config_root)
        self.register_singleton("ConfigurationLoader", config_loader)
        name_classifier = NameClassifier()
        self.register_singleton("NameClassifier", name_classifier)
        self.register_singleton(
            "ModelManifestGateway", ModelManifestGateway(name_classifier)
        )
        self.register_singleton(
            "AstroidGateway", AstroidGateway(config_loader.instance_receiver)
        )
        self.register_singleton("GuidanceService", GuidanceService())

    @classmethod
    def get_instance(cls) -> "DemeterContainer":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the shared container (tests, or after the working directory changes)."""
        cls._instance = None

    def register_singleton(self, name: str, instance: object) -> None:
        self._singletons[name] = instance

    def get(self, name: str) -> Any:
        return self._singletons.get(name)

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_name_classifier(self) -> NameClassifier:
        return cast(NameClassifier, self.get("NameClassifier"))

    def get_astroid_gateway(self) -> AstroidGateway:
        return cast(AstroidGateway, self.get("AstroidGateway"))

    def get_guidance_service(self) -> GuidanceService:
        return cast(GuidanceService, self.get("GuidanceService"))

    def get_model_registry(self, manifest_path: str | None = None) -> "ModelRegistry":
        """
        Registry from the configured manifest, or from manifest_path when given.

        Cached per manifest path; registries are read-only once built.
        """
        config_loader = self.get_config_loader()
        path = manifest_path or config_loader.models_manifest
        key = f"ModelRegistry:{path or ''}"
        registry = self.get(key)
        if registry is None:
            gateway = cast(ModelManifestGateway, self.get("ModelManifestGateway"))
            registry = gateway.load(
                manifest_path=path,
                inline_models=config_loader.inline_models,
                base_dir=None if manifest_path else config_loader.config_root,
            )
            self.register_singleton(key, registry)
        return cast("ModelRegistry", registry)

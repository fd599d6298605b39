"""Unit tests for DemeterContainer wiring."""

import unittest
from unittest.mock import MagicMock, patch

from demeter_review.infrastructure.di.container import DemeterContainer

LOADER = "demeter_review.infrastructure.di.container.ConfigFileLoader.load_config_from_fs"


class TestDemeterContainer(unittest.TestCase):
    def tearDown(self) -> None:
        DemeterContainer.reset_instance()

    def test_singleton_instance(self) -> None:
        with patch(LOADER, return_value=({}, None)):
            first = DemeterContainer.get_instance()
            self.assertIs(first, DemeterContainer.get_instance())
            DemeterContainer.reset_instance()
            self.assertIsNot(first, DemeterContainer.get_instance())

    def test_instance_receiver_from_config(self) -> None:
        with patch(LOADER, return_value=({"instance_receiver": "this"}, None)):
            container = DemeterContainer()
        self.assertEqual(container.get_astroid_gateway()._instance_receiver, "this")

    def test_model_registry_uses_config_and_is_cached(self) -> None:
        config = {"models_manifest": "models.yml", "models": {"User": {"attributes": ["name"]}}}
        with patch(LOADER, return_value=(config, "/project")):
            container = DemeterContainer()
        gateway = MagicMock()
        container.register_singleton("ModelManifestGateway", gateway)

        first = container.get_model_registry()
        second = container.get_model_registry()

        self.assertIs(first, second)
        gateway.load.assert_called_once_with(
            manifest_path="models.yml",
            inline_models={"User": {"attributes": ["name"]}},
            base_dir="/project",
        )

    def test_model_registry_override_path(self) -> None:
        with patch(LOADER, return_value=({}, "/project")):
            container = DemeterContainer()
        gateway = MagicMock()
        container.register_singleton("ModelManifestGateway", gateway)

        container.get_model_registry("other.yml")

        gateway.load.assert_called_once_with(
            manifest_path="other.yml", inline_models={}, base_dir=None)

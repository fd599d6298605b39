"""Configuration for the review rules. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging
import re

DEFAULT_PARTIAL_VIEW_PATTERNS: tuple[str, ...] = (r"(^|/)views/(.*/)?_[^/]*\.py$",)
DEFAULT_INSTANCE_RECEIVER: str = "self"


class ConfigurationLoader:
    """
    Immutable configuration for [tool.demeter-review].

    Created by Infrastructure from (config_dict, config_root).
    Domain does not read the filesystem; Infrastructure calls
    ConfigFileLoader.load_config_from_fs() and constructs the loader at the
    composition root.
    """

    def __init__(
        self,
        config_dict: dict[str, object],
        config_root: str | None = None,
    ) -> None:
        """Set config once at construction. No mutable state after init."""
        self._config = config_dict
        self._config_root = config_root
        if config_dict:
            self.validate_config(config_dict)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about values that will be ignored."""
        manifest = config.get("models_manifest")
        if manifest is not None and not isinstance(manifest, str):
            logging.warning(
                "Configuration Warning: 'models_manifest' must be a path string; ignoring %r.",
                manifest,
            )
        models = config.get("models")
        if models is not None and not isinstance(models, dict):
            logging.warning(
                "Configuration Warning: 'models' must be a table of model names; ignoring it."
            )
        patterns = config.get("partial_view_patterns")
        if patterns is not None:
            if not isinstance(patterns, list):
                logging.warning(
                    "Configuration Warning: 'partial_view_patterns' must be a list of regexes."
                )
            else:
                for pattern in patterns:
                    try:
                        re.compile(str(pattern))
                    except re.error as exc:
                        logging.warning(
                            "Configuration Warning: invalid partial view pattern %r (%s); ignoring it.",
                            pattern,
                            exc,
                        )

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def config_root(self) -> str | None:
        """Directory of the pyproject.toml the config came from, if any."""
        return self._config_root

    @property
    def models_manifest(self) -> str | None:
        """Path of the YAML model manifest, relative to config_root unless absolute."""
        raw = self._config.get("models_manifest")
        return raw if isinstance(raw, str) and raw else None

    @property
    def inline_models(self) -> dict[str, object]:
        """Models declared directly under [tool.demeter-review.models]."""
        raw = self._config.get("models", {})
        return raw if isinstance(raw, dict) else {}

    @property
    def partial_view_patterns(self) -> list[str]:
        """Regexes searched in file paths to classify partial views."""
        raw = self._config.get("partial_view_patterns")
        if not isinstance(raw, list):
            return list(DEFAULT_PARTIAL_VIEW_PATTERNS)
        valid: list[str] = []
        for pattern in raw:
            try:
                re.compile(str(pattern))
            except re.error:
                continue
            valid.append(str(pattern))
        return valid

    @property
    def instance_receiver(self) -> str:
        """Name whose attribute reads count as instance variables."""
        raw = self._config.get("instance_receiver", DEFAULT_INSTANCE_RECEIVER)
        return raw if isinstance(raw, str) and raw else DEFAULT_INSTANCE_RECEIVER

"""Load [tool.demeter-review] from pyproject.toml. Infrastructure I/O only."""

import tomllib
from pathlib import Path

TOOL_NAME: str = "demeter-review"


class ConfigFileLoader:
    """Loads config from the nearest pyproject.toml. No top-level functions."""

    @staticmethod
    def load_config_from_fs(
        start: Path | None = None,
    ) -> tuple[dict[str, object], str | None]:
        """Walk up from start (default: cwd). Returns (config_dict, config_root)."""
        current_path = (start or Path.cwd()).resolve()
        empty: dict[str, object] = {}
        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.exists():
                try:
                    with config_file.open("rb") as f:
                        data = tomllib.load(f)
                except (OSError, tomllib.TOMLDecodeError):
                    data = None
                if data is not None:
                    tool = data.get("tool", {}) or {}
                    config_dict = tool.get(TOOL_NAME, {}) or {}
                    return (config_dict, str(current_path))
            parent = current_path.parent
            if parent == current_path:
                break
            current_path = parent
        return (empty, None)

"""Runs pylint with the demeter-review plugin loaded and only its messages enabled."""

import logging
import subprocess
import sys

from demeter_review.domain.constants import ALL_CODES

PLUGIN_MODULE: str = "demeter_review.infrastructure.checker"


class PylintAdapter:
    """Subprocess wrapper so each run gets fresh registries and astroid caches."""

    def build_command(
        self,
        target_path: str,
        models_manifest: str | None = None,
        summary: bool = False,
    ) -> list[str]:
        cmd = [
            sys.executable,
            "-m",
            "pylint",
            target_path,
            f"--load-plugins={PLUGIN_MODULE}",
            "--disable=all",
            f"--enable={','.join(ALL_CODES)}",
            "--score=n",
        ]
        if models_manifest:
            cmd.append(f"--demeter-models-manifest={models_manifest}")
        if summary:
            cmd.append("--output-format=demeter-summary")
        else:
            cmd.append("--msg-template={path}:{line}:{column}: {msg_id}: {msg} ({symbol})")
        return cmd

    def run(
        self,
        target_path: str,
        models_manifest: str | None = None,
        summary: bool = False,
    ) -> int:
        """Run pylint, streaming its output. Returns pylint's exit status."""
        cmd = self.build_command(target_path, models_manifest, summary)
        logging.debug("Running %s", " ".join(cmd))
        result = subprocess.run(cmd, check=False)
        return result.returncode

"""CLI entry points for demeter-review - Thin Controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path

import typer

from demeter_review.domain.config import ConfigurationLoader
from demeter_review.domain.constants import ALL_CODES
from demeter_review.domain.protocols import GuidanceServiceProtocol
from demeter_review.infrastructure.adapters.pylint_adapter import PylintAdapter
from demeter_review.infrastructure.gateways.model_manifest_gateway import (
    ModelManifestError,
    ModelManifestGateway,
)
from demeter_review.infrastructure.registries import ModelRegistry


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    guidance_service: GuidanceServiceProtocol
    manifest_gateway: ModelManifestGateway
    pylint_adapter: PylintAdapter


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_target_path(path: Path | None) -> str:
        """Resolve target path: explicit path, else src/ if exists, else '.'."""
        if path and str(path) != ".":
            return str(path)
        src_dir = Path.cwd() / "src"
        if src_dir.exists() and src_dir.is_dir():
            return "src"
        return "."

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="demeter-review",
            help="Find code that reaches through model associations instead of delegating.",
            add_completion=False,
        )

        @app.callback()
        def main(
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        ) -> None:
            logging.basicConfig(
                level=logging.DEBUG if verbose else logging.WARNING,
                format="%(levelname)s %(name)s: %(message)s",
            )

        def load_models(models: Path | None) -> ModelRegistry:
            """Load the manifest the same way the plugin will; exit 2 if it is invalid."""
            config = deps.config_loader
            try:
                return deps.manifest_gateway.load(
                    manifest_path=str(models) if models else config.models_manifest,
                    inline_models=config.inline_models,
                    base_dir=None if models else config.config_root,
                )
            except ModelManifestError as exc:
                typer.echo(f"Invalid model manifest: {exc}", err=True)
                raise typer.Exit(code=2) from exc

        @app.command()
        def check(
            path: Path | None = typer.Argument(None, help="Path to review (default: src/ if present, else .)"),  # noqa: B008
            models: Path | None = typer.Option(None, "--models", "-m", help="YAML model manifest"),  # noqa: B008
            summary: bool = typer.Option(False, "--summary", help="Print a table grouped by rule"),
        ) -> None:
            """Run pylint with the review rules and exit with its status."""
            load_models(models)
            target_path = CLIAppFactory.resolve_target_path(path)
            status = deps.pylint_adapter.run(
                target_path,
                models_manifest=str(models) if models else None,
                summary=summary,
            )
            raise typer.Exit(code=status)

        @app.command()
        def rules() -> None:
            """List rule codes, symbols and documentation URLs."""
            for code in ALL_CODES:
                entry = deps.guidance_service.get_entry(code) or {}
                symbol = entry.get("symbol", code)
                typer.echo(f"{code}  {symbol:<48} {deps.guidance_service.get_url(code)}")

        @app.command()
        def explain(code: str = typer.Argument(..., help="Rule code or symbol, e.g. W9501")) -> None:
            """Print how to fix a rule's violations."""
            entry = deps.guidance_service.get_entry(code)
            if entry is None:
                typer.echo(f"Unknown rule: {code}", err=True)
                raise typer.Exit(code=2)
            typer.echo(deps.guidance_service.get_display_name(code))
            typer.echo(deps.guidance_service.get_url(code))
            typer.echo("")
            typer.echo(deps.guidance_service.get_manual_instructions(code))

        @app.command(name="models")
        def list_models(
            models: Path | None = typer.Option(None, "--models", "-m", help="YAML model manifest"),  # noqa: B008
        ) -> None:
            """Print the loaded model catalog: associations and attributes per class."""
            registry = load_models(models)
            if not registry.class_names():
                typer.echo("No models loaded.")
                return
            for class_name in registry.class_names():
                attributes = ", ".join(registry.attributes.get_attributes(class_name))
                typer.echo(f"{class_name}: {attributes}")
                for owner, name, record in registry.associations.items():
                    if owner != class_name:
                        continue
                    typer.echo(f"  {record.kind.value} {name} -> {record.class_name}")

        return app

"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from demeter_review.infrastructure.adapters.pylint_adapter import PylintAdapter
from demeter_review.infrastructure.di.container import DemeterContainer
from demeter_review.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = DemeterContainer.get_instance()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        guidance_service=container.get_guidance_service(),
        manifest_gateway=container.get("ModelManifestGateway"),
        pylint_adapter=PylintAdapter(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()

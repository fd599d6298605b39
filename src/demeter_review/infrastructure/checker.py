"""
Pylint plugin entry point - composition root for the checker plugin.
Lives in infrastructure as it creates the container and wires dependencies.

    pylint --load-plugins=demeter_review.infrastructure.checker src/
"""

from pylint.lint import PyLinter

from demeter_review.infrastructure.di.container import DemeterContainer
from demeter_review.interface.reporter import DemeterSummaryReporter
from demeter_review.use_cases.checks.demeter import DemeterReviewChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = DemeterContainer.get_instance()
    registry = container.get_guidance_service().get_registry()

    linter.register_checker(
        DemeterReviewChecker(
            linter,
            ast_gateway=container.get_astroid_gateway(),
            config_loader=container.get_config_loader(),
            registry=registry,
            name_classifier=container.get_name_classifier(),
            model_registry_factory=container.get_model_registry,
        )
    )

    # Register reporter
    linter.register_reporter(DemeterSummaryReporter)

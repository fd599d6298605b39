"""Custom Pylint reporter: findings grouped by rule, counted per top-level directory."""

from collections import defaultdict
from typing import Any, Optional, Union

from pylint.message import Message
from pylint.reporters import BaseReporter

from demeter_review.domain.constants import ALL_CODES


class DemeterSummaryReporter(BaseReporter):
    """
    Collects demeter-review messages and prints one table when pylint closes.

    Use with --output-format=demeter-summary.
    """

    name: str = "demeter-summary"

    RED: str = "\033[31m"
    BLUE: str = "\033[34m"
    RESET: str = "\033[0m"
    BOLD: str = "\033[1m"

    # BaseReporter __init__ types output loosely
    def __init__(self, output: Optional[Any] = None) -> None:
        super().__init__(output)
        self.messages: list[Message] = []

    def handle_message(self, msg: Message) -> None:
        """Collect messages for summarization. Other checkers' messages are ignored."""
        if msg.msg_id in ALL_CODES:
            self.messages.append(msg)

    def on_close(self, stats: Any, previous_stats: Any) -> None:
        """Render the summary table."""
        self.display_summary()

    def display_reports(self, layout: Any) -> None:
        """Summary is printed on close; pylint's own report sections are not shown."""

    def _display(self, layout: Any) -> None:
        """Nothing to render per layout."""

    def display_summary(self) -> None:
        if not self.messages:
            print(f"{self.BOLD}No Law of Demeter violations found.{self.RESET}", file=self.out)
            return

        errors, groups = self._collect_stats()
        sorted_groups = sorted(groups)
        headers = ["Code", "Symbol", "Total", *sorted_groups]
        widths = self._calculate_widths(headers, errors, sorted_groups)
        self._print_table(headers, widths, errors, sorted_groups)
        self._print_locations()

    @staticmethod
    def _group_for(path: str) -> str:
        """First directory of the path ('src/app/models.py' -> 'src'), or '.' for top-level files."""
        parts = [p for p in path.replace("\\", "/").split("/") if p]
        return parts[0] if len(parts) > 1 else "."

    def _collect_stats(self) -> tuple[dict[str, dict[str, Union[str, int]]], set[str]]:
        """Aggregate counts: {msg_id: {'name': symbol, 'total': n, <group>: n}}."""
        errors: dict[str, dict[str, Union[str, int]]] = defaultdict(lambda: defaultdict(int))
        groups: set[str] = set()

        for msg in self.messages:
            group = self._group_for(msg.path)
            groups.add(group)
            details = errors[msg.msg_id]
            details["name"] = msg.symbol
            count = details.get(group, 0)
            if isinstance(count, int):
                details[group] = count + 1
            total = details.get("total", 0)
            if isinstance(total, int):
                details["total"] = total + 1

        return dict(errors), groups

    def _calculate_widths(
        self,
        headers: list[str],
        errors: dict[str, dict[str, Union[str, int]]],
        sorted_groups: list[str],
    ) -> list[int]:
        widths = [len(h) for h in headers]
        for msg_id, details in errors.items():
            widths[0] = max(widths[0], len(msg_id))
            widths[1] = max(widths[1], len(str(details.get("name", ""))))
            widths[2] = max(widths[2], len(str(details.get("total", 0))))
            for i, group in enumerate(sorted_groups):
                widths[3 + i] = max(widths[3 + i], len(str(details.get(group, 0))))
        return widths

    def _print_table(
        self,
        headers: list[str],
        widths: list[int],
        errors: dict[str, dict[str, Union[str, int]]],
        sorted_groups: list[str],
    ) -> None:
        fmt: str = " | ".join([f"{{:<{w}}}" for w in widths])
        print(file=self.out)
        print(f"{self.BOLD}{self.BLUE}{fmt.format(*headers)}{self.RESET}", file=self.out)
        print(f"{self.BLUE}{'-|-'.join('-' * w for w in widths)}{self.RESET}", file=self.out)

        total_errors: int = 0
        sorted_errors = sorted(
            errors.items(), key=lambda x: int(x[1].get("total", 0)), reverse=True)
        for msg_id, details in sorted_errors:
            row = [
                f"{self.RED}{msg_id:<{widths[0]}}{self.RESET}",
                f"{str(details.get('name', '')):<{widths[1]}}",
                f"{self.BOLD}{str(details.get('total', 0)):<{widths[2]}}{self.RESET}",
            ]
            for i, group in enumerate(sorted_groups):
                row.append(f"{str(details.get(group, 0)):<{widths[3 + i]}}")
            print(" | ".join(row), file=self.out)
            total = details.get("total", 0)
            if isinstance(total, int):
                total_errors += total

        print(file=self.out)
        print(f"{self.BOLD}{total_errors} violation(s) found.{self.RESET}", file=self.out)

    def _print_locations(self) -> None:
        for msg in sorted(self.messages, key=lambda m: (m.path, m.line, m.column)):
            print(f"{msg.path}:{msg.line}:{msg.column}: {msg.msg_id} {msg.msg}", file=self.out)

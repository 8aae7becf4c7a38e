"""Line-per-request logger for headless deployments."""

from rich.console import Console
from rich.markup import escape

from ui.log_utils import submit_cli_log


class ConsoleLogger:
    """Print one line per request and mirror it to the CLI log file."""

    def __init__(self, console: Console | None = None, *, write_file: bool = True):
        self._console = console or Console()
        self._write_file = write_file

    def log_crawler(self, url: str, user_agent: str, matched_agent: str | None) -> None:
        self._console.print(f"[magenta]\\[BOT][/magenta] Prerendering URL: {escape(url)}")
        if self._write_file:
            submit_cli_log("BOT", url, agent=matched_agent)

    def log_human(self, url: str, user_agent: str) -> None:
        self._console.print(f"[blue]\\[USER][/blue] Serving app for URL: {escape(url)}")
        if self._write_file:
            submit_cli_log("USER", url)

    def log_error(self, route: str, status: int, message: str) -> None:
        self._console.print(f"[red]\\[ERROR][/red] {route} {status}: {escape(message)}")
        if self._write_file:
            submit_cli_log("ERROR", message[:200], route=route, status=status)

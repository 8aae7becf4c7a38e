"""Real-time CLI dashboard for gateway monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import submit_cli_log

console = Console()


class RequestInfo:
    """Info about a single request."""

    def __init__(self, url: str, agent: str, timestamp: datetime):
        self.url = url[:80] + "..." if len(url) > 80 else url
        self.agent = agent
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing crawler hits and human visits."""

    def __init__(self, config: Config, *, write_file: bool = True):
        self.config = config
        self._write_file = write_file
        self._lock = Lock()
        self._last_human: RequestInfo | None = None
        self._crawlers: list[RequestInfo] = []
        self._max_crawlers = 8
        self._request_count = {"crawler": 0, "human": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    @property
    def request_count(self) -> dict[str, int]:
        with self._lock:
            return dict(self._request_count)

    @property
    def recent_crawlers(self) -> list[RequestInfo]:
        with self._lock:
            return list(self._crawlers)

    @property
    def errors(self) -> list[str]:
        with self._lock:
            return list(self._errors)

    def log_crawler(self, url: str, user_agent: str, matched_agent: str | None) -> None:
        """Log a request routed to the prerender service."""
        with self._lock:
            self._request_count["crawler"] += 1
            info = RequestInfo(url, matched_agent or user_agent, datetime.now())
            self._crawlers.insert(0, info)
            self._crawlers = self._crawlers[: self._max_crawlers]
            if self._write_file:
                submit_cli_log("BOT", url, agent=matched_agent)
            self._refresh()

    def log_human(self, url: str, user_agent: str) -> None:
        """Log a request served from index.html."""
        with self._lock:
            self._request_count["human"] += 1
            self._last_human = RequestInfo(url, user_agent, datetime.now())
            if self._write_file:
                submit_cli_log("USER", url)
            self._refresh()

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            if self._write_file:
                submit_cli_log("ERROR", message[:200], route=route, status=status)
            self._refresh()

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=4),
        )

        layout["body"].split_row(
            Layout(name="human", ratio=1),
            Layout(name="crawlers", ratio=2),
        )

        layout["header"].update(self._build_header())
        layout["human"].update(self._build_human_panel())
        layout["crawlers"].update(self._build_crawlers_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Prerender Gateway", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Crawlers: {self._request_count['crawler']}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Visitors: {self._request_count['human']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_human_panel(self) -> Panel:
        """Build last-visitor panel."""
        if self._last_human:
            content = Table.grid(padding=(0, 1))
            content.add_column()
            content.add_column()

            content.add_row("[bold]URL:[/bold]", self._last_human.url)
            content.add_row("[bold]Agent:[/bold]", self._last_human.agent[:60] or "[dim]-[/dim]")
            content.add_row(
                "[bold]Time:[/bold]",
                self._last_human.timestamp.strftime("%H:%M:%S"),
            )
        else:
            content = Text("Waiting for visitors...", style="dim")

        return Panel(content, title="[blue]Last Visitor[/blue]", border_style="blue")

    def _build_crawlers_panel(self) -> Panel:
        """Build recent crawler hits panel."""
        if self._crawlers:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Bot", width=20)
            table.add_column("URL", ratio=2)

            for hit in self._crawlers:
                table.add_row(
                    hit.timestamp.strftime("%H:%M:%S"),
                    hit.agent[:20],
                    hit.url,
                )

            content = table
        else:
            content = Text("No crawler requests yet...", style="dim")

        return Panel(
            content, title="[magenta]Crawlers (prerendered)[/magenta]", border_style="magenta"
        )

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Prerendering via {self.config.prerender.service_url}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")

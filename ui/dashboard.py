"""Real-time CLI dashboard for the local Easy Auth proxy."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log, write_incoming_log

console = Console()


class RequestInfo:
    """Info about a single intercepted request."""

    def __init__(self, mode: str, path: str, detail: str, timestamp: datetime):
        self.mode = mode
        self.path = path
        self.detail = detail[:60] + "..." if len(detail) > 60 else detail
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing redirects, proxied calls and errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 10
        self._request_count = {"redirect": 0, "proxy": 0, "preflight": 0, "error": 0}
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

    def log_request(self, method: str, path: str, headers: dict[str, str]) -> None:
        """Record an intercepted request; cookie values are redacted on disk."""
        write_incoming_log(method, path, headers)

    def log_redirect(self, path: str, target: str) -> None:
        """Log a /.auth/ request redirected to Azure."""
        with self._lock:
            self._request_count["redirect"] += 1
            self._push("redirect", path, target)
            write_cli_log("REDIRECT", path, target=target)

    def log_proxy(self, path: str, status: int) -> None:
        """Log a /auth/ request proxied to Azure."""
        with self._lock:
            self._request_count["proxy"] += 1
            self._push("proxy", path, str(status))
            write_cli_log("PROXY", path, status=status)

    def log_preflight(self, path: str) -> None:
        """Log an OPTIONS preflight."""
        with self._lock:
            self._request_count["preflight"] += 1
            self._push("preflight", path, "204")
            write_cli_log("PREFLIGHT", path)

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._request_count["error"] += 1
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _push(self, mode: str, path: str, detail: str) -> None:
        self._recent.insert(0, RequestInfo(mode, path, detail, datetime.now()))
        self._recent = self._recent[: self._max_recent]
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
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Easy Auth Local", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Redirects: {self._request_count['redirect']}", style="blue")
        stats.append("  |  ")
        stats.append(f"Proxied: {self._request_count['proxy']}", style="green")
        stats.append("  |  ")
        stats.append(f"Preflights: {self._request_count['preflight']}", style="magenta")
        stats.append("  |  ")
        stats.append(f"Errors: {self._request_count['error']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.server.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Mode", width=10)
            table.add_column("Path", ratio=1)
            table.add_column("Detail", ratio=2)

            for info in self._recent:
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.mode,
                    info.path,
                    info.detail,
                )

            content = table
        else:
            content = Text("Waiting for /.auth/ requests...", style="dim")

        return Panel(content, title="[blue]Requests[/blue]", border_style="blue")

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
                f"Azure host: {self.config.easy_auth.azure_host}  |  "
                f"Allowed origin: {self.config.allow_origin}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")

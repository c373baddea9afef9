"""CLI entry point for easy-auth-local."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, Config, load_config, validate
from core.exceptions import ConfigurationError
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--check":
            print_settings(config)
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

    try:
        validate(config)
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        console.print(f"[dim]Edit {CONFIG_FILE} and set easy_auth.azure_host[/dim]")
        sys.exit(1)

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.server.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def print_settings(config: Config) -> None:
    """Print the resolved settings."""
    host = config.easy_auth.azure_host or "[red]not set[/red]"
    console.print(f"[bold]Azure host:[/bold] {host}")
    console.print(f"[bold]Listening on:[/bold] http://{config.server.host}:{config.server.port}")
    console.print(f"[bold]Allowed origin:[/bold] {config.allow_origin}")
    console.print(f"[bold]Upstream timeout:[/bold] {config.easy_auth.timeout}s")
    if config.server.static_dir:
        console.print(f"[bold]Static files:[/bold] {config.server.static_dir}")


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Easy Auth Local[/bold cyan]

Serves fake /.auth/* endpoints on localhost and proxies /auth/* to Azure
App Service Authentication with credentialed CORS headers.

[bold]Usage:[/bold]
    easy-auth-local              Start with live dashboard
    easy-auth-local --check      Show resolved settings
    easy-auth-local --config     Show config location
    easy-auth-local --help       Show this help

[bold]Before you start:[/bold]
    Deploy the app with this middleware to Azure and sign into the
    deployed site so the AppServiceAuthSession cookie is set.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()

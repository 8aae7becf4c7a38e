"""CLI entry point for prerender-gateway."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import Config, config_path, load_config, require_serving_config
from core.exceptions import ConfigurationError
from core.request_types import IncomingRequest
from core.router import RouteDecider
from core.urls import index_url, original_url, prerender_url
from ui.console import ConsoleLogger
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, shutdown_log_executor, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    try:
        config = load_config()
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        sys.exit(1)

    plain = False
    args = sys.argv[1:]
    if args:
        arg = args[0]

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {config_path()}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        if arg == "--classify":
            if len(args) < 2:
                console.print("[red][ERROR][/red] --classify needs a user agent")
                sys.exit(2)
            url = args[2] if len(args) > 2 else "https://example.com/"
            _print_classification(config, args[1], url)
            return

        if arg == "--plain":
            plain = True
        else:
            console.print(f"[red][ERROR][/red] Unknown argument: {arg}")
            _print_help()
            sys.exit(2)

    try:
        require_serving_config(config)
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e}")
        console.print(f"[dim]Edit {config_path()} or export PRERENDER_TOKEN[/dim]")
        sys.exit(1)

    clear_logs()
    if plain:
        logger = ConsoleLogger(console)
        dashboard = None
    else:
        dashboard = Dashboard(config)
        logger = dashboard

    import uvicorn

    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Gateway started", port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Gateway stopped", duration=str(duration))
        shutdown_log_executor()
        if dashboard:
            dashboard.stop()


def _print_classification(config: Config, user_agent: str, url: str) -> None:
    """Show where a request would be routed, without any network I/O."""
    scheme, _, rest = url.partition("://")
    if not rest:
        scheme, rest = config.routing.site_scheme, url
    host, slash, path = rest.partition("/")
    request = IncomingRequest(
        method="GET",
        path=slash + path,
        host=host,
        headers=(("user-agent", user_agent),),
    )

    decision = RouteDecider(config.routing.bot_agents).classify(request.user_agent)
    page_url = original_url(request.host, request.path or "/", scheme)
    if decision.is_crawler:
        target = prerender_url(config.prerender.service_url, page_url)
        console.print(f"[magenta]crawler[/magenta] (matched {decision.matched_agent!r})")
    else:
        target = index_url(request.host, config.routing.index_path, scheme)
        console.print("[blue]human[/blue]")
    console.print(f"[bold]Upstream:[/bold] {target}")


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Prerender Gateway[/bold cyan]

Routes crawlers to the prerender service, humans to the app's index.html.

[bold]Usage:[/bold]
    prerender-gateway                      Start with live dashboard
    prerender-gateway --plain              Start with one log line per request
    prerender-gateway --classify UA [URL]  Show how a user agent is routed
    prerender-gateway --config             Show config location
    prerender-gateway --help               Show this help

[bold]Configuration:[/bold]
    PRERENDER_TOKEN overrides prerender.token from the config file.
    PORT overrides proxy.port.
    PRERENDER_TRUST_FORWARDED_HOST=1 routes by X-Forwarded-Host (behind a front end).
"""
    console.print(help_text)


if __name__ == "__main__":
    main()

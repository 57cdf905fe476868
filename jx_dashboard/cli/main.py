"""
CLI front-end using Typer framework

Commands:
- dashboard (alias: dash): open the Jenkins X Pipelines Dashboard
"""

import asyncio
import os
from typing import Optional

import typer
from typing_extensions import Annotated

from .. import __version__

app = typer.Typer(
    name="jx-dashboard",
    help="View the Jenkins X Pipelines Dashboard",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _debug_enabled() -> bool:
    return bool(os.getenv('JX_DASHBOARD_DEBUG'))


def version_callback(value: bool):
    """Show version and exit"""
    if value:
        typer.echo(f"jx-dashboard v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[Optional[bool], typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit")] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Enable debug logging")] = False,
):
    """
    View the Jenkins X Pipelines Dashboard
    """
    if debug:
        os.environ['JX_DASHBOARD_DEBUG'] = '1'

    from ..config import get_config
    from ..logging_config import configure_logging, setup_logging_from_config

    # Loading the config file logs too, so stderr logging comes first
    configure_logging(level="DEBUG" if _debug_enabled() else "INFO")
    setup_logging_from_config(get_config().config, debug=_debug_enabled())


def dashboard(
    no_open: Annotated[bool, typer.Option("--no-open", help="Disable opening the URL; just show it on the console")] = False,
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="The name of the dashboard service [default: jx-pipelines-visualizer]", show_default=False)] = None,
    secret: Annotated[Optional[str], typer.Option("--secret", "-s", help="The name of the Secret containing the basic auth login/password [default: jx-basic-auth-user-password]", show_default=False)] = None,
    namespace: Annotated[Optional[str], typer.Option("--namespace", help="Namespace of the dashboard (default: current kubeconfig namespace)")] = None,
    context: Annotated[Optional[str], typer.Option("--context", help="kubectl context")] = None,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Do not print the URL when opening a browser")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging")] = False,
):
    """
    View the Jenkins X Pipelines Dashboard

    [bold]Examples:[/bold]
      # open the dashboard
      jx-dashboard dashboard

      # display the URL only without opening a browser
      jx-dashboard dashboard --no-open
    """
    from ..config import get_config
    from ..logging_config import setup_logging_from_config

    config = get_config()
    if verbose:
        setup_logging_from_config(config.config, debug=True)

    service_name = name or config.get("dashboard.service_name")
    secret_name = secret or config.get("dashboard.secret_name")

    try:
        from ..validation import validate_inputs
        validate_inputs(service_name, secret_name, namespace, context)
    except Exception as e:
        typer.echo(f"❌ Input validation error: {e}", err=True)
        raise typer.Exit(2)

    from ..collectors import base as collectors
    from ..errors import DashboardError
    from ..models import LaunchOptions
    from ..renderers.terminal import TerminalRenderer
    from .commands import DashboardLauncher

    options = LaunchOptions(
        service_name=service_name,
        secret_name=secret_name,
        namespace=namespace,
        context=context,
        no_browser=no_open,
        quiet=quiet,
    )
    launcher = DashboardLauncher(
        options,
        renderer=TerminalRenderer(colors_enabled=config.get("output.colors_enabled", True)),
        client_factory=collectors.create_client,
        timeout_seconds=float(config.get("kubectl.timeout_seconds", 10.0)),
    )

    try:
        result = asyncio.run(launcher.run())
    except DashboardError as e:
        if _debug_enabled():
            typer.echo(f"Debug: {type(e).__name__}: {e!r}", err=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except typer.Exit:
        raise
    except Exception as e:
        if _debug_enabled():
            typer.echo(f"Debug: Exception caught: {e!r}", err=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if result.output:
        typer.echo(result.output)


app.command("dashboard")(dashboard)
app.command("dash", hidden=True)(dashboard)


if __name__ == "__main__":
    app()

# promote_tool/cli/main.py
"""Main CLI entry point for promote-tool"""

import os
import sys
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from ..__version__ import __version__
from ..constants import APP_NAME, LOG_FORMAT, ENV_LOG_LEVEL

# Import all commands
from .commands import (
    prepare,
    deploy,
    dispatch,
    doctor,
)

console = Console()


def setup_logging(verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (DEBUG level)
        debug: Enable debug output (DEBUG level with paths and timestamps)
        quiet: Only show warnings and errors
    """
    if debug or verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.getLevelName(os.environ.get(ENV_LOG_LEVEL, "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


class Context:
    """CLI context object"""

    def __init__(self, verbose: bool = False, debug: bool = False, quiet: bool = False):
        self.verbose = verbose
        self.debug = debug
        self.quiet = quiet


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except warnings and errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """Promote Tool - Roll GitHub releases out to App Engine

    A rollout runs as three separate steps against one environment:

    \b
        promote-tool prepare-release  -e stage -t v1.2.3-build.4
        promote-tool deploy-service   -e stage -t v1.2.3-build.4
        promote-tool dispatch-service -e stage -t v1.2.3-build.4

    prepare-release downloads the release and puts the environment into
    maintenance mode, deploy-service deploys each service as a new
    version, and dispatch-service restores normal routing.
    """
    setup_logging(verbose=verbose, debug=debug, quiet=quiet)
    ctx.obj = Context(verbose=verbose, debug=debug, quiet=quiet)


# Register commands
cli.add_command(prepare.prepare_release)
cli.add_command(deploy.deploy_service)
cli.add_command(dispatch.dispatch_service)
cli.add_command(doctor.doctor)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        # Non-standalone so an interrupt reaches us as Abort instead of exit 1
        exit_code = cli.main(prog_name=APP_NAME, standalone_mode=False)

    except (KeyboardInterrupt, click.exceptions.Abort):
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)

    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()

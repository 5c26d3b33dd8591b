"""dispatch-service command implementation"""

import sys

import click
from rich.console import Console

from ..decorators import phase_options
from ..utils.output import format_dispatch_result
from ...api import Promoter
from ...api.exceptions import PromoteToolError
from ...services.config_service import load_config

console = Console()


@click.command(name='dispatch-service')
@phase_options()
@click.pass_context
def dispatch_service(ctx, environment, tag, config_path):
    """Restore normal routing by deploying the full dispatch rules

    Example:

    \b
        promote-tool dispatch-service -e stage -t v1.2.3-build.4
    """
    try:
        config = load_config(config_path)
    except PromoteToolError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    promoter = Promoter(config)
    result = promoter.dispatch_services(environment, tag)

    format_dispatch_result(result)

    if result.is_failed:
        sys.exit(1)

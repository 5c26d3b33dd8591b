"""prepare-release command implementation"""

import sys

import click
from rich.console import Console

from ..decorators import phase_options, split_services
from ..utils.output import format_prepare_result
from ..utils.progress import DownloadProgress
from ...api import Promoter
from ...api.exceptions import PromoteToolError
from ...services.config_service import load_config

console = Console()


@click.command(name='prepare-release')
@phase_options(with_services=True)
@click.pass_context
def prepare_release(ctx, environment, tag, config_path, services):
    """Download a release and put the environment into maintenance mode

    Verifies the active gcloud project matches the environment, downloads
    and extracts one archive per service into
    downloads/<env>/<tag>/, then deploys the maintenance dispatch rules.

    Examples:

    \b
        # All services configured for stage
        promote-tool prepare-release -e stage -t v1.2.3-build.4

    \b
        # Only some services
        promote-tool prepare-release -e prod -t v1.2.3-build.4 -s api,worker
    """
    try:
        config = load_config(config_path)
    except PromoteToolError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    with DownloadProgress(console=console) as progress:
        callback = None if ctx.obj.quiet else progress.update
        promoter = Promoter(config, progress_callback=callback)
        result = promoter.prepare_release(environment, tag, split_services(services) or None)

    format_prepare_result(result)

    if result.is_failed:
        sys.exit(1)

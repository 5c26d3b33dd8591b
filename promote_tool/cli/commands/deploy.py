"""deploy-service command implementation"""

import sys

import click
from rich.console import Console

from ..decorators import phase_options, split_services
from ..utils.output import format_deploy_result
from ...api import Promoter
from ...api.exceptions import PromoteToolError
from ...services.config_service import load_config

console = Console()


@click.command(name='deploy-service')
@phase_options(with_services=True)
@click.pass_context
def deploy_service(ctx, environment, tag, config_path, services):
    """Deploy staged services as a new App Engine version

    Each service is deployed from downloads/<env>/<tag>/ under the version
    id derived from the tag (v1.2.3-build.4 becomes 1-2-3-build-4), one at
    a time in the order given. The first failure stops the rollout. After
    each successful deploy the oldest versions beyond keep_versions are
    deleted.

    Examples:

    \b
        promote-tool deploy-service -e stage -t v1.2.3-build.4
        promote-tool deploy-service -e stage -t v1.2.3-build.4 -s api -s worker
    """
    try:
        config = load_config(config_path)
    except PromoteToolError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    promoter = Promoter(config)
    result = promoter.deploy_services(environment, tag, split_services(services) or None)

    format_deploy_result(result)

    if result.is_failed:
        sys.exit(1)

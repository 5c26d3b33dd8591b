"""Shared options for the rollout phase commands"""

from typing import Callable, List, Sequence

import click

from ...constants import DEFAULT_CONFIG_FILE, VALID_ENVIRONMENTS


def split_services(values: Sequence[str]) -> List[str]:
    """Flatten ``-s a -s b,c`` into ``['a', 'b', 'c']``"""
    services = []
    for value in values or ():
        services.extend(part.strip() for part in value.split(',') if part.strip())
    return services


def phase_options(with_services: bool = False) -> Callable:
    """Add the environment, tag and config options common to every phase

    Args:
        with_services: Also add the repeatable ``-s/--services`` option
    """
    def decorator(func: Callable) -> Callable:
        if with_services:
            func = click.option(
                '-s', '--services', multiple=True,
                help='Service to include (repeatable or comma separated; default: all)'
            )(func)
        func = click.option(
            '-c', '--config', 'config_path', default=DEFAULT_CONFIG_FILE,
            type=click.Path(dir_okay=False),
            show_default=True, help='Deployment configuration file'
        )(func)
        func = click.option(
            '-t', '--tag', required=True,
            help='Release tag (vX.Y.Z-build.N)'
        )(func)
        func = click.option(
            '-e', '--env', 'environment', required=True,
            type=click.Choice(VALID_ENVIRONMENTS),
            help='Target environment'
        )(func)
        return func

    return decorator

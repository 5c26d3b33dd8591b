# promote_tool/cli/commands/doctor.py
"""System diagnostic command"""

import sys
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.table import Table

from ...api.exceptions import PromoteToolError, PlatformError
from ...constants import (
    DEFAULT_CONFIG_FILE,
    VALID_ENVIRONMENTS,
    ENV_GITHUB_TOKEN,
    EMOJI_SUCCESS,
    EMOJI_ERROR,
)
from ...core.environment_guard import EnvironmentGuard
from ...hosting.gcloud import GcloudPlatform
from ...models.config import DeploymentConfig
from ...services.config_service import ConfigService
from ...utils.async_utils import run_async

console = Console()


class DoctorState:
    """Values shared between checks"""

    def __init__(self, config_path: str, environment: Optional[str], platform: GcloudPlatform):
        self.config_path = config_path
        self.environment = environment
        self.platform = platform
        self.config: Optional[DeploymentConfig] = None


class DiagnosticCheck:
    """Base class for diagnostic checks"""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.passed = False
        self.skipped = False
        self.message = ""
        self.hint = ""

    def run(self, state: DoctorState) -> 'DiagnosticCheck':
        """Run the diagnostic check"""
        raise NotImplementedError

    def skip(self, message: str) -> 'DiagnosticCheck':
        self.skipped = True
        self.message = message
        return self


class GcloudInstalledCheck(DiagnosticCheck):
    """Check the gcloud binary is on PATH"""

    def __init__(self):
        super().__init__("gcloud CLI", "Verify gcloud is installed")

    def run(self, state):
        if state.platform.is_installed():
            self.passed = True
            self.message = f"Found '{state.platform.binary}' on PATH"
        else:
            self.message = f"'{state.platform.binary}' not found on PATH"
            self.hint = "Install the Google Cloud SDK: https://cloud.google.com/sdk/docs/install"
        return self


class GcloudAuthCheck(DiagnosticCheck):
    """Check gcloud has an active account"""

    def __init__(self):
        super().__init__("gcloud auth", "Verify an active gcloud account")

    def run(self, state):
        if not state.platform.is_installed():
            return self.skip("gcloud not installed")

        try:
            authenticated = run_async(state.platform.is_authenticated())
        except PlatformError as e:
            self.message = str(e)
            return self

        if authenticated:
            self.passed = True
            self.message = "Active account found"
        else:
            self.message = "No active gcloud account"
            self.hint = "Run 'gcloud auth login'"
        return self


class ConfigCheck(DiagnosticCheck):
    """Check the configuration file loads and validates"""

    def __init__(self):
        super().__init__("Configuration", "Load and validate the deployment configuration")

    def run(self, state):
        try:
            state.config = ConfigService(state.config_path).load_config()
        except PromoteToolError as e:
            self.message = str(e)
            self.hint = f"Check {state.config_path}"
            return self

        self.passed = True
        self.message = f"{state.config.repo_owner}/{state.config.repo_name}"
        return self


class TokenCheck(DiagnosticCheck):
    """Check the repository token is available"""

    def __init__(self):
        super().__init__("GitHub token", "Verify the repository credential is set")

    def run(self, state):
        if state.config is None:
            return self.skip("Configuration not loaded")

        if state.config.github_token:
            self.passed = True
            self.message = "Token configured"
        else:
            self.message = "No github_token configured"
            self.hint = f"Set github_token in the configuration or {ENV_GITHUB_TOKEN}"
        return self


class EnvironmentCheck(DiagnosticCheck):
    """Run the environment guard against the active gcloud project"""

    def __init__(self):
        super().__init__("Environment", "Verify the active gcloud project")

    def run(self, state):
        if not state.environment:
            return self.skip("No --env given")
        if state.config is None:
            return self.skip("Configuration not loaded")
        if not state.platform.is_installed():
            return self.skip("gcloud not installed")

        guard = EnvironmentGuard(state.config, state.platform)
        try:
            project_id = run_async(guard.ensure(state.environment))
        except PromoteToolError as e:
            self.message = str(e)
            project_id = state.config.get_project(state.environment)
            if project_id:
                self.hint = f"Run 'gcloud config set project {project_id}'"
            return self

        self.passed = True
        self.message = f"{state.environment} -> {project_id}"
        return self


@click.command()
@click.option('-c', '--config', 'config_path', default=DEFAULT_CONFIG_FILE,
              show_default=True, help='Deployment configuration file')
@click.option('-e', '--env', 'environment', type=click.Choice(VALID_ENVIRONMENTS),
              help='Also verify the gcloud project for this environment')
@click.pass_context
def doctor(ctx, config_path, environment):
    """Run system diagnostics

    Checks that gcloud is installed and authenticated, that the
    configuration loads and that a GitHub token is available. With --env
    it also verifies the active gcloud project. Nothing is changed.

    Examples:

    \b
        promote-tool doctor
        promote-tool doctor -e prod -c deploy/deployment.yaml
    """
    console.print("[bold]Promote Tool Diagnostics[/bold]\n")

    state = DoctorState(config_path, environment, GcloudPlatform())
    checks = [
        GcloudInstalledCheck(),
        GcloudAuthCheck(),
        ConfigCheck(),
        TokenCheck(),
        EnvironmentCheck(),
    ]

    failed_checks = []
    for diagnostic_check in checks:
        diagnostic_check.run(state)
        if not diagnostic_check.passed and not diagnostic_check.skipped:
            failed_checks.append(diagnostic_check)

    # Display results
    table = Table(title="Diagnostic Results", box=box.ROUNDED)
    table.add_column("Check", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Details")

    for diagnostic_check in checks:
        if diagnostic_check.skipped:
            status = "[dim]- SKIP[/dim]"
        elif diagnostic_check.passed:
            status = f"[green]{EMOJI_SUCCESS} PASS[/green]"
        else:
            status = f"[red]{EMOJI_ERROR} FAIL[/red]"
        details = diagnostic_check.message
        if diagnostic_check.hint:
            details += f"\n[dim]{diagnostic_check.hint}[/dim]"
        table.add_row(diagnostic_check.name, status, details)

    console.print(table)

    if failed_checks:
        console.print(f"\n[red]{len(failed_checks)} check(s) failed[/red]")
        sys.exit(1)

    console.print("\n[green]All checks passed![/green]")

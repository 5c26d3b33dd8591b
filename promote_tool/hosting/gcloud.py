# promote_tool/hosting/gcloud.py
"""Google App Engine platform driven through the gcloud CLI"""

import asyncio
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .base import HostingPlatform
from ..api.exceptions import PlatformError, PlatformQueryFailedError
from ..constants import (
    GCLOUD_BINARY,
    PLATFORM_QUERY_TIMEOUT,
    PLATFORM_DEPLOY_TIMEOUT,
    PLATFORM_DELETE_TIMEOUT,
)

logger = logging.getLogger(__name__)

UNSET_PROJECT = "(unset)"


@dataclass
class CommandResult:
    """Completed gcloud invocation"""
    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def describe(self) -> str:
        detail = self.stderr.strip().splitlines()
        tail = detail[-1] if detail else ""
        message = f"exit code {self.returncode}"
        return f"{message}: {tail}" if tail else message


class GcloudPlatform(HostingPlatform):
    """App Engine operations via the gcloud command line"""

    def __init__(self, binary: str = GCLOUD_BINARY):
        self.binary = binary

    def is_installed(self) -> bool:
        return shutil.which(self.binary) is not None

    async def run(self,
                  *args: str,
                  cwd: Optional[Path] = None,
                  timeout: float = PLATFORM_QUERY_TIMEOUT) -> CommandResult:
        """
        Run a gcloud command

        Args:
            *args: gcloud arguments
            cwd: Working directory
            timeout: Seconds before the command is killed

        Returns:
            CommandResult

        Raises:
            PlatformError: If gcloud cannot be started or times out
        """
        command = [self.binary, *args]
        logger.debug(f"Running: {' '.join(command)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=str(cwd) if cwd else None,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except (FileNotFoundError, PermissionError) as e:
            raise PlatformError(f"{self.binary} is required but could not be run: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise PlatformError(
                f"'{' '.join(command)}' timed out after {timeout}s"
            )

        return CommandResult(
            args=command,
            returncode=process.returncode,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace")
        )

    async def deploy(self, manifest_path: Path, version: Optional[str] = None) -> None:
        args = ["app", "deploy", manifest_path.name, "--quiet"]
        if version:
            args.append(f"--version={version}")

        result = await self.run(*args, cwd=manifest_path.parent, timeout=PLATFORM_DEPLOY_TIMEOUT)
        if not result.ok:
            raise PlatformError(
                f"Failed to deploy {manifest_path} ({result.describe()})",
                returncode=result.returncode,
                stderr=result.stderr
            )

    async def list_versions(self, service: str) -> List[str]:
        result = await self.run(
            "app", "versions", "list",
            f"--service={service}",
            "--sort-by=~version.createTime",
            "--format=value(version.id)"
        )
        if not result.ok:
            raise PlatformError(
                f"Failed to list versions of {service} ({result.describe()})",
                returncode=result.returncode,
                stderr=result.stderr
            )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    async def delete_versions(self, service: str, versions: List[str]) -> None:
        result = await self.run(
            "app", "versions", "delete", *versions,
            f"--service={service}",
            "--quiet",
            timeout=PLATFORM_DELETE_TIMEOUT
        )
        if not result.ok:
            raise PlatformError(
                f"Failed to delete versions of {service} ({result.describe()})",
                returncode=result.returncode,
                stderr=result.stderr
            )

    async def get_active_project(self) -> str:
        try:
            result = await self.run("config", "get-value", "project")
        except PlatformError as e:
            raise PlatformQueryFailedError(str(e)) from e

        if not result.ok:
            raise PlatformQueryFailedError(
                f"Failed to get current GCP project ({result.describe()})",
                stderr=result.stderr
            )
        project = result.stdout.strip()
        return "" if project == UNSET_PROJECT else project

    async def describe_project(self, project_id: str) -> bool:
        result = await self.run("projects", "describe", project_id)
        return result.ok

    async def is_app_enabled(self) -> bool:
        result = await self.run("app", "describe")
        return result.ok

    async def can_list_versions(self) -> bool:
        result = await self.run("app", "versions", "list")
        return result.ok

    async def is_authenticated(self) -> bool:
        """Check for an active gcloud credential"""
        result = await self.run(
            "auth", "list",
            "--filter=status:ACTIVE",
            "--format=value(account)"
        )
        return result.ok and bool(result.stdout.strip())

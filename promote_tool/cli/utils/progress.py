"""Progress display utilities"""

from typing import Optional

from rich.console import Console
from rich.progress import (
    Progress,
    TextColumn,
    BarColumn,
    TimeElapsedColumn,
    TaskID,
)

from ...models.result import FetchProgress
from ...utils.formatting import format_size


class DownloadProgress:
    """Rich progress bar driven by the fetcher's per-asset callbacks

    Usage::

        with DownloadProgress() as progress:
            promoter = Promoter(config, progress_callback=progress.update)
    """

    def __init__(self, console: Console = None):
        self.console = console or Console()
        self._progress: Optional[Progress] = None
        self._assets_task: Optional[TaskID] = None
        self._bytes_task: Optional[TaskID] = None

    def __enter__(self) -> 'DownloadProgress':
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}", justify="right"),
            BarColumn(bar_width=None),
            "[progress.percentage]{task.percentage:>3.0f}%",
            "•",
            TextColumn("{task.fields[detail]}"),
            "•",
            TimeElapsedColumn(),
            console=self.console,
            transient=False,
        )
        self._progress.__enter__()
        return self

    def __exit__(self, *args):
        if self._progress:
            self._progress.__exit__(*args)
            self._progress = None

    def update(self, progress: FetchProgress) -> None:
        """Progress callback: one call per completed asset"""
        if self._progress is None:
            return

        if self._assets_task is None:
            self._assets_task = self._progress.add_task(
                "Assets", total=progress.total, detail=""
            )
            self._bytes_task = self._progress.add_task(
                "Bytes", total=100, detail=""
            )

        self._progress.update(
            self._assets_task,
            completed=progress.current,
            detail=f"{progress.current}/{progress.total} {progress.name}"
        )
        self._progress.update(
            self._bytes_task,
            completed=progress.percent,
            detail=f"{format_size(progress.downloaded_bytes)}/{format_size(progress.total_bytes)}"
        )

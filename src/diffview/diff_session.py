"""Running difftastic for a request and building display files for every changed file."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
import logging
from typing import List

from diffview.difftastic_parser import split_lines
from diffview.diffview_settings import DiffViewSettings
from diffview.diffview_types import DiffFile, DisplayFile, FileStats
from diffview.file_dispatcher import process_file
from diffview.vcs_backend import ContentFetcher, DiffRequest, VCSBackend, create_backend


class DiffSession:
    """
    Builds display files for a diff request.

    Each file is independent, so content fetching and processing fan out over
    a thread pool; results come back in difftastic's file order.
    """

    def __init__(
        self,
        settings: DiffViewSettings | None = None,
        backend: VCSBackend | None = None,
        cwd: str | None = None
    ):
        """
        Initialize the session.

        Args:
            settings: Diff view settings (defaults if None)
            backend: Backend to use instead of the one named in the settings
            cwd: Directory to run commands in
        """
        self._settings = settings or DiffViewSettings.create_default()
        self._backend = backend or create_backend(
            self._settings.vcs,
            self._settings.difft_command,
            self._settings.extra_environment,
            cwd
        )
        self._logger = logging.getLogger("DiffSession")

    @property
    def backend(self) -> VCSBackend:
        """Get the version control backend."""
        return self._backend

    def run(self, request: DiffRequest) -> List[DisplayFile]:
        """
        Run difftastic for a request and process every file it reports.

        Args:
            request: What to diff

        Returns:
            Display files in difftastic's output order

        Raises:
            DiffToolError: If difftastic can't be run
            DifftasticParseError: If difftastic's output can't be parsed
        """
        files = self._backend.run_difftastic(request)
        if not files:
            self._logger.debug("No changed files for %s", request)
            return []

        stats = self._backend.diff_stats(request)
        old_fetcher, new_fetcher = self._backend.content_sources(request)

        def build(file: DiffFile) -> DisplayFile:
            return self._build_display_file(file, stats, old_fetcher, new_fetcher)

        with ThreadPoolExecutor(max_workers=self._settings.max_workers) as executor:
            display_files = list(executor.map(build, files))

        self._logger.debug("Processed %d file(s) with %s", len(display_files), self._backend.name)
        return display_files

    async def run_async(self, request: DiffRequest) -> List[DisplayFile]:
        """
        Run a request without blocking the event loop.

        Args:
            request: What to diff

        Returns:
            Display files in difftastic's output order
        """
        return await asyncio.get_event_loop().run_in_executor(None, self.run, request)

    def _build_display_file(
        self,
        file: DiffFile,
        stats: FileStats,
        old_fetcher: ContentFetcher,
        new_fetcher: ContentFetcher
    ) -> DisplayFile:
        old_lines = split_lines(old_fetcher(file.path))
        new_lines = split_lines(new_fetcher(file.path))
        return process_file(file, old_lines, new_lines, stats.get(file.path))

"""
Version control backends for running difftastic and fetching file content.

Both git and jj can drive difftastic as an external diff tool.  Each backend
knows how to run it for a diff request, collect per-file line statistics,
and fetch the old and new revisions of each file.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
import logging
import os
import re
import subprocess
from typing import Callable, Dict, List, Sequence, Tuple

from diffview.difftastic_parser import DifftasticParser
from diffview.diffview_exceptions import DiffToolError
from diffview.diffview_types import DiffFile, FileStats


# Fetches one revision of a file by repository-relative path; None if unavailable.
ContentFetcher = Callable[[str], str | None]

_GIT_COMMIT_ID = re.compile(r'^[0-9a-fA-F]{40}$')


class DiffMode(Enum):
    """What a diff request compares."""
    RANGE = auto()      # A revision range ("HEAD^..HEAD" for git, a revset for jj)
    UNSTAGED = auto()   # Working tree against the index (git) or against @ (jj)
    STAGED = auto()     # Index against HEAD (git); jj has no index so this shows @


@dataclass
class DiffRequest:
    """A request to diff a revision range or the working copy."""

    mode: DiffMode
    revision_range: str = ""


def parse_git_range(revision_range: str, merge_base: Callable[[str, str], str | None]) -> Tuple[str, str]:
    """
    Split a git revision range into (old, new) references.

    Args:
        revision_range: "A...B", "A..B", or a single revision
        merge_base: Looks up the merge base of two references

    Returns:
        Tuple of (old_ref, new_ref)
    """
    if "..." in revision_range:
        a, b = revision_range.split("...", 1)
        base = merge_base(a, b)
        return (base if base else f"{a}^"), b

    if ".." in revision_range:
        old, new = revision_range.split("..", 1)
        return old, new

    return f"{revision_range}^", revision_range


def parse_numstat(output: str) -> FileStats:
    """
    Parse `git diff --numstat` output.

    Each line is "additions<TAB>deletions<TAB>path"; binary files report "-"
    for both counts and are skipped.
    """
    stats: FileStats = {}

    for line in output.splitlines():
        parts = line.split('\t')
        if len(parts) < 3:
            continue

        try:
            additions = int(parts[0])
            deletions = int(parts[1])

        except ValueError:
            continue

        stats[parts[2]] = (additions, deletions)

    return stats


class VCSBackend(ABC):
    """Abstract base class for version control backends."""

    def __init__(
        self,
        difft_command: str = "difft",
        extra_environment: Dict[str, str] | None = None,
        cwd: str | None = None
    ):
        """
        Initialize the backend.

        Args:
            difft_command: difftastic executable
            extra_environment: Extra environment variables for difftastic
            cwd: Directory to run commands in (None for the current directory)
        """
        self._difft_command = difft_command
        self._extra_environment = extra_environment or {}
        self._cwd = cwd
        self._parser = DifftasticParser()
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the command name of this version control system."""

    @abstractmethod
    def run_difftastic(self, request: DiffRequest) -> List[DiffFile]:
        """
        Run difftastic for a request and parse its output.

        Args:
            request: What to diff

        Returns:
            Parsed file entries

        Raises:
            DiffToolError: If the command can't be run or fails
            DifftasticParseError: If the output can't be parsed
        """

    @abstractmethod
    def diff_stats(self, request: DiffRequest) -> FileStats:
        """
        Get per-file (additions, deletions) for a request.

        Returns an empty map when statistics aren't available.
        """

    @abstractmethod
    def content_sources(self, request: DiffRequest) -> Tuple[ContentFetcher, ContentFetcher]:
        """
        Get fetchers for the old and new revisions of files in a request.

        Returns:
            Tuple of (old_fetcher, new_fetcher)
        """

    @abstractmethod
    def repository_root(self) -> str | None:
        """Get the repository root directory, or None if not in a repository."""

    def working_tree_content(self, path: str) -> str | None:
        """
        Read a file from the working tree, relative to the repository root.

        Args:
            path: Repository-relative path

        Returns:
            File content, or None if it can't be read
        """
        root = self.repository_root()
        if root is None:
            return None

        try:
            with open(os.path.join(root, path), 'r', encoding='utf-8', errors='replace') as f:
                return f.read()

        except OSError as e:
            self._logger.debug("Cannot read working tree file %s: %s", path, e)
            return None

    def _difftastic_environment(self) -> Dict[str, str]:
        env = dict(os.environ)
        env["DFT_DISPLAY"] = "json"
        env["DFT_UNSTABLE"] = "yes"
        env.update(self._extra_environment)
        return env

    def _run(
        self,
        args: Sequence[str],
        env: Dict[str, str] | None = None,
        failure_level: int = logging.WARNING
    ) -> str:
        """
        Run a command and return its stdout.

        Failures are logged at `failure_level` before being raised.

        Raises:
            DiffToolError: If the command can't be started or exits non-zero
        """
        self._logger.debug("Running %s", " ".join(args))

        try:
            result = subprocess.run(list(args), capture_output=True, env=env, cwd=self._cwd, check=False)

        except OSError as e:
            self._logger.log(failure_level, "Failed to run %s: %s", args[0], e)
            raise DiffToolError(
                f"Failed to run {args[0]}: {e}",
                {"command": args[0], "args": list(args)}
            ) from e

        if result.returncode != 0:
            stderr = result.stderr.decode('utf-8', errors='replace')
            self._logger.log(
                failure_level, "%s exited with status %d: %s", args[0], result.returncode, stderr.strip()
            )
            raise DiffToolError(
                f"{args[0]} command failed: {stderr}",
                {"command": args[0], "args": list(args), "returncode": result.returncode, "stderr": stderr}
            )

        return result.stdout.decode('utf-8', errors='replace')

    def _try_output(self, args: Sequence[str]) -> str | None:
        """Run a command whose failure is expected, returning its stdout or None."""
        try:
            return self._run(args, failure_level=logging.DEBUG)

        except DiffToolError:
            return None

    def _run_difftastic_command(self, args: Sequence[str]) -> List[DiffFile]:
        output = self._run(args, env=self._difftastic_environment())
        files = self._parser.parse(output)
        self._logger.debug("difftastic reported %d file(s)", len(files))
        return files


class GitBackend(VCSBackend):
    """git backend, using difftastic as git's external diff tool."""

    @property
    def name(self) -> str:
        return "git"

    def _request_args(self, request: DiffRequest) -> List[str]:
        if request.mode == DiffMode.RANGE:
            return [request.revision_range]

        if request.mode == DiffMode.STAGED:
            return ["--cached"]

        return []

    def run_difftastic(self, request: DiffRequest) -> List[DiffFile]:
        args = ["git", "-c", f"diff.external={self._difft_command}", "diff"]
        args.extend(self._request_args(request))
        return self._run_difftastic_command(args)

    def diff_stats(self, request: DiffRequest) -> FileStats:
        output = self._try_output(["git", "diff", "--numstat", *self._request_args(request)])
        if output is None:
            return {}

        return parse_numstat(output)

    def file_content(self, ref: str, path: str) -> str | None:
        """Get a file at a commit via `git show <ref>:<path>`."""
        return self._try_output(["git", "show", f"{ref}:{path}"])

    def index_content(self, path: str) -> str | None:
        """Get the staged version of a file via `git show :<path>`."""
        return self._try_output(["git", "show", f":{path}"])

    def merge_base(self, a: str, b: str) -> str | None:
        """Get the merge base of two references."""
        output = self._try_output(["git", "merge-base", a, b])
        return output.strip() if output else None

    def repository_root(self) -> str | None:
        output = self._try_output(["git", "rev-parse", "--show-toplevel"])
        return output.strip() if output else None

    def content_sources(self, request: DiffRequest) -> Tuple[ContentFetcher, ContentFetcher]:
        if request.mode == DiffMode.RANGE:
            old_ref, new_ref = parse_git_range(request.revision_range, self.merge_base)
            return (
                lambda path: self.file_content(old_ref, path),
                lambda path: self.file_content(new_ref, path)
            )

        if request.mode == DiffMode.STAGED:
            return (lambda path: self.file_content("HEAD", path), self.index_content)

        return (self.index_content, self.working_tree_content)


class JJBackend(VCSBackend):
    """jj backend, using difftastic as jj's diff tool."""

    @property
    def name(self) -> str:
        return "jj"

    def run_difftastic(self, request: DiffRequest) -> List[DiffFile]:
        if request.mode == DiffMode.UNSTAGED:
            args = ["jj", "diff", "--tool", self._difft_command]

        else:
            args = ["jj", "diff", "-r", self._revset(request), "--tool", self._difft_command]

        return self._run_difftastic_command(args)

    def _revset(self, request: DiffRequest) -> str:
        if request.mode == DiffMode.RANGE:
            return request.revision_range

        return "@"

    def diff_stats(self, request: DiffRequest) -> FileStats:
        # jj's own --stat output isn't machine readable, so stats for the
        # working copy aren't available; revsets go through git commit ids.
        if request.mode == DiffMode.UNSTAGED:
            return {}

        revset = self._revset(request)
        old_commit = self.git_commit(f"roots({revset})-")
        new_commit = self.git_commit(f"heads({revset})")
        if new_commit is None:
            return {}

        range_arg = f"{old_commit}..{new_commit}" if old_commit else f"{new_commit}^..{new_commit}"
        output = self._try_output(["git", "diff", "--numstat", range_arg])
        if output is None:
            return {}

        return parse_numstat(output)

    def git_commit(self, revset: str) -> str | None:
        """
        Translate a revset to a git commit id.

        Returns None unless the revset resolves to a single full commit id.
        """
        output = self._try_output(["jj", "log", "-r", revset, "--no-graph", "-T", "commit_id"])
        if output is None:
            return None

        commit = output.strip()
        return commit if _GIT_COMMIT_ID.match(commit) else None

    def file_content(self, revset: str, path: str) -> str | None:
        """Get a file at a revision via `jj file show`."""
        return self._try_output(["jj", "file", "show", "-r", revset, path])

    def repository_root(self) -> str | None:
        output = self._try_output(["jj", "root"])
        return output.strip() if output else None

    def content_sources(self, request: DiffRequest) -> Tuple[ContentFetcher, ContentFetcher]:
        if request.mode == DiffMode.RANGE:
            old_revset = f"roots({request.revision_range})-"
            new_revset = f"heads({request.revision_range})"
            return (
                lambda path: self.file_content(old_revset, path),
                lambda path: self.file_content(new_revset, path)
            )

        if request.mode == DiffMode.STAGED:
            return (
                lambda path: self.file_content("@-", path),
                lambda path: self.file_content("@", path)
            )

        return (lambda path: self.file_content("@", path), self.working_tree_content)


def create_backend(
    vcs: str,
    difft_command: str = "difft",
    extra_environment: Dict[str, str] | None = None,
    cwd: str | None = None
) -> VCSBackend:
    """
    Create the backend for a version control system.

    Args:
        vcs: "git" or "jj"
        difft_command: difftastic executable
        extra_environment: Extra environment variables for difftastic
        cwd: Directory to run commands in

    Returns:
        The backend

    Raises:
        ValueError: If the version control system isn't supported
    """
    if vcs == "git":
        return GitBackend(difft_command, extra_environment, cwd)

    if vcs == "jj":
        return JJBackend(difft_command, extra_environment, cwd)

    raise ValueError(f"Unsupported version control system: {vcs}")

"""git adapter - subprocess wrapper for committing the todo file."""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Raised when no repository is found or a git command fails."""

    pass


class GitRepository:
    """
    git subprocess adapter.

    Implements Repository protocol. Commits one file at a time, leaving
    anything else staged in the working tree alone.
    """

    def __init__(self, root: Path | str, git: str = "git", timeout: int = 30):
        self.root = Path(root)
        self.git = git
        self.timeout = timeout

    @classmethod
    def discover(cls, path: Path | str, git: str = "git", timeout: int = 30) -> "GitRepository":
        """Find the repository containing ``path``."""
        path = Path(path).resolve()
        start = path if path.is_dir() else path.parent
        probe = cls(start, git=git, timeout=timeout)
        proc = probe._run("rev-parse", "--show-toplevel")
        if proc.returncode != 0:
            raise RepositoryError(f"No git repository found at {start}: {proc.stderr.strip()}")
        return cls(proc.stdout.strip(), git=git, timeout=timeout)

    def relative_path(self, path: Path | str) -> Path:
        path = Path(path).resolve()
        try:
            return path.relative_to(self.root.resolve())
        except ValueError:
            raise RepositoryError(f"{path} is outside the repository at {self.root}")

    def commit(self, path: Path | str, message: str) -> bool:
        """Stage and commit a single file. Returns False if it had no changes."""
        relative = str(self.relative_path(path))

        self._check("add", "--", relative)

        staged = self._run("diff", "--cached", "--quiet", "--", relative)
        if staged.returncode == 0:
            logger.info(f"No changes to commit for {relative}")
            return False

        self._check("commit", "--quiet", "-m", message, "--", relative)
        logger.info(f"Committed {relative}")
        return True

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        cmd = [self.git, *args]
        logger.debug(f"Running {' '.join(cmd)} in {self.root}")
        try:
            return subprocess.run(
                cmd,
                cwd=self.root,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise RepositoryError(f"{self.git} not found - is git installed?")
        except subprocess.TimeoutExpired:
            raise RepositoryError(f"{self.git} {args[0]} timed out after {self.timeout}s")

    def _check(self, *args: str) -> subprocess.CompletedProcess:
        proc = self._run(*args)
        if proc.returncode != 0:
            logger.error(f"git {args[0]} failed: {proc.stderr}")
            raise RepositoryError(f"git {args[0]} failed: {proc.stderr.strip()}")
        return proc

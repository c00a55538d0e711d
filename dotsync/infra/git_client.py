"""
Git client infrastructure for dotsync.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic

Commands that may need the user (commit opens an editor, push/pull may ask
for credentials) run attached to the terminal; queries capture output.
"""

import os
import subprocess
from pathlib import Path
from typing import Optional, List, Tuple
import logging

from ..exit_codes import GitCommandError

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        if client.changed_files("/path/to/repo"):
            client.add_all("/path/to/repo")
    """

    def __init__(self, timeout: Optional[int] = None, git: str = "git"):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: None, block like git does)
            git: Git executable
        """
        self.timeout = timeout
        self.git = git

    def _run(
        self,
        args: List[str],
        cwd: Optional[str] = None,
        capture_stderr: bool = False,
        env: Optional[dict] = None
    ) -> Tuple[Optional[str], int]:
        """
        Run a git command and capture its output.

        Args:
            args: Git arguments (e.g., ['status', '--porcelain'])
            cwd: Working directory
            capture_stderr: Include stderr in output
            env: Extra environment variables

        Returns:
            Tuple of (stdout, returncode)
        """
        cmd = [self.git] + args
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env={**os.environ, **env} if env else None
            )

            output = result.stdout
            if capture_stderr and result.stderr:
                output += result.stderr

            return output.strip() if output else None, result.returncode

        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            return None, -1
        except OSError as e:
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            return None, -1

    def _run_attached(self, args: List[str], cwd: Optional[str] = None) -> int:
        """Run a git command attached to the user's terminal. Returns the exit code."""
        cmd = [self.git] + args
        try:
            return subprocess.run(cmd, cwd=cwd, timeout=self.timeout).returncode
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            return -1
        except OSError as e:
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            return -1

    def is_git_repo(self, path: str) -> bool:
        """Check that path has a .git directory and git accepts it."""
        if not (Path(path) / ".git").is_dir():
            return False
        _, code = self._run(["rev-parse", "--git-dir"], cwd=path)
        return code == 0

    def changed_files(self, path: str) -> List[str]:
        """
        List working-tree changes (``git status --porcelain`` lines).

        Raises:
            GitCommandError: If git status fails
        """
        output, code = self._run(["status", "--porcelain"], cwd=path)
        if code != 0:
            raise GitCommandError(f"git status failed in {path}", command="git status --porcelain", returncode=code)
        if not output:
            return []
        return [line for line in output.split('\n') if line.strip()]

    def fetch(self, path: str, remote: str = "origin") -> bool:
        """
        Fetch quietly from remote without prompting for credentials.

        Returns:
            True if successful
        """
        _, code = self._run(["fetch", remote, "--quiet"], cwd=path, env={"GIT_TERMINAL_PROMPT": "0"})
        return code == 0

    def commits_behind(self, path: str, upstream: str = "origin/main") -> int:
        """Count commits on upstream that HEAD does not have (0 if unknown)."""
        output, code = self._run(["rev-list", f"HEAD..{upstream}", "--count"], cwd=path)
        if code != 0 or not output:
            return 0
        try:
            return int(output.strip())
        except ValueError:
            return 0

    def add_all(self, path: str) -> bool:
        _, code = self._run(["add", "-A"], cwd=path)
        return code == 0

    def commit(self, path: str) -> bool:
        """Commit staged changes, letting git open the user's editor."""
        return self._run_attached(["commit"], cwd=path) == 0

    def push(self, path: str, remote: str = "origin", branch: str = "main") -> bool:
        return self._run_attached(["push", remote, branch], cwd=path) == 0

    def pull(self, path: str, remote: str = "origin", branch: str = "main") -> bool:
        return self._run_attached(["pull", remote, branch], cwd=path) == 0

    def clone(self, url: str, dest: str) -> bool:
        """
        Clone url into dest.

        Returns:
            True if successful
        """
        output, code = self._run(["clone", url, dest], capture_stderr=True)
        if code != 0 and output:
            logger.debug(f"git clone output: {output}")
        return code == 0

    def show_status(self, path: str) -> int:
        return self._run_attached(["status"], cwd=path)

    def show_diff(self, path: str) -> int:
        return self._run_attached(["--no-pager", "diff"], cwd=path)

    def show_incoming(self, path: str, upstream: str = "origin/main") -> int:
        return self._run_attached(
            ["--no-pager", "log", f"HEAD..{upstream}", "--oneline", "--decorate"], cwd=path
        )

"""Tick pusher for loadgen.

Clones a repository, branches from the remote branch (or HEAD when it does
not exist yet), commits a tick.txt holding the current Unix time and pushes
the commit back. Credentials travel through git's environment config so they
never appear in argv or logs.
"""

import base64
import os
import tempfile
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

from loadgen.config import TickSettings
from loadgen.core.errors import CommandError
from loadgen.core.logging import logger
from loadgen.utils.shell import run_command

Runner = Callable[..., Awaitable[tuple[str, str, int]]]

TICK_FILE = "tick.txt"
COMMIT_MESSAGE = "tick tick!"


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick push."""

    commit: str
    branch: str
    url: str
    created_branch: bool


class TickPusher:
    """Runs the clone, branch, commit and push sequence with the git CLI."""

    def __init__(self, settings: TickSettings, runner: Runner = run_command):
        self.settings = settings
        self._runner = runner
        self._env = self._git_env()

    async def push(self) -> TickResult:
        """Push one tick commit.

        Returns:
            TickResult describing the pushed commit

        Raises:
            CommandError: If any git command fails
        """
        with tempfile.TemporaryDirectory(prefix="silver-eureka-") as tmpdir:
            repo_path = os.path.join(tmpdir, "testing")

            logger.info("cloning", url=self.settings.url, path=repo_path)
            await self._git(["clone", self.settings.url, repo_path])

            start, exists = await self._resolve_start(repo_path)

            logger.info("creating_branch", branch=self.settings.branch, start=start)
            await self._git(["checkout", "-b", self.settings.branch, start], cwd=repo_path)

            with open(os.path.join(repo_path, TICK_FILE), "w") as f:
                f.write(f"{int(time.time())}\n")

            await self._git(["add", TICK_FILE], cwd=repo_path)
            await self._git(["commit", "-m", COMMIT_MESSAGE], cwd=repo_path)
            commit = (await self._git(["rev-parse", "HEAD"], cwd=repo_path)).strip()

            details = await self._git(["log", "-1", "--format=fuller", commit], cwd=repo_path)
            logger.info("created_commit", commit=commit, details=details.strip())

            push_cmd = ["push"]
            if self.settings.show_progress:
                push_cmd.append("--progress")
            push_cmd += ["origin", f"{commit}:refs/heads/{self.settings.branch}"]

            logger.info("pushing", branch=self.settings.branch)
            await self._git(push_cmd, cwd=repo_path)

        logger.info("tick_pushed", commit=commit, branch=self.settings.branch)
        return TickResult(
            commit=commit,
            branch=self.settings.branch,
            url=self.settings.url,
            created_branch=not exists,
        )

    async def _resolve_start(self, repo_path: str) -> tuple[str, bool]:
        """Return the start commit and whether the remote branch already exists."""
        ref = f"origin/{self.settings.branch}"
        stdout, _, returncode = await self._runner(
            ["git", "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"],
            cwd=repo_path,
            env=self._env,
        )
        if returncode == 0:
            return stdout.strip(), True

        logger.info("branch_not_found", ref=ref)
        head = await self._git(["rev-parse", "HEAD"], cwd=repo_path)
        return head.strip(), False

    async def _git(self, args: List[str], cwd: Optional[str] = None) -> str:
        cmd = ["git"] + args
        stdout, stderr, returncode = await self._runner(cmd, cwd=cwd, env=self._env)
        if returncode != 0:
            raise CommandError(cmd, returncode, stderr)
        if stderr and self.settings.show_progress:
            logger.info("progress", command=args[0], output=stderr.strip())
        return stdout

    def _git_env(self) -> Dict[str, str]:
        user = self.settings.user
        credentials = base64.b64encode(f"{user}:{self.settings.token}".encode()).decode()
        env = {
            "GIT_TERMINAL_PROMPT": "0",
            "GIT_CONFIG_COUNT": "1",
            "GIT_CONFIG_KEY_0": "http.extraHeader",
            "GIT_CONFIG_VALUE_0": f"Authorization: Basic {credentials}",
        }
        for role in ("AUTHOR", "COMMITTER"):
            env[f"GIT_{role}_NAME"] = os.environ.get(f"GIT_{role}_NAME", user)
            env[f"GIT_{role}_EMAIL"] = os.environ.get(
                f"GIT_{role}_EMAIL", f"{user}@users.noreply.github.com"
            )
        if self.settings.verbose:
            env["GIT_CURL_VERBOSE"] = "1"
            env["GIT_TRACE"] = "1"
        return env

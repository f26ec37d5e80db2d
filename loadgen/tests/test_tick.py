"""Unit tests for TickPusher with a fake git runner."""

import base64
import os

import pytest

from loadgen.config import TickSettings
from loadgen.core.errors import CommandError
from loadgen.core.tick import TickPusher


class FakeGit:
    """Records git invocations and answers with canned output."""

    def __init__(self, branch_exists=True, fail_on=None):
        self.branch_exists = branch_exists
        self.fail_on = fail_on
        self.calls = []
        self.tick_contents = None

    async def __call__(self, cmd, cwd=None, env=None):
        self.calls.append((cmd, cwd, env))
        sub = cmd[1]
        if sub == self.fail_on:
            return "", "fatal: nope\n", 128
        if sub == "clone":
            os.makedirs(cmd[3])
        if sub == "rev-parse" and "--verify" in cmd:
            return ("remote123\n", "", 0) if self.branch_exists else ("", "", 1)
        if sub == "rev-parse":
            return "head456\n", "", 0
        if sub == "add":
            with open(os.path.join(cwd, "tick.txt")) as f:
                self.tick_contents = f.read()
        return "", "", 0

    def commands(self):
        return [cmd[1:] for cmd, _, _ in self.calls]


@pytest.fixture
def tick_settings():
    return TickSettings(token="secret", url="https://example.test/o/r", branch="b1", user="u")


class TestTickPusher:
    """Test the clone/branch/commit/push sequence."""

    @pytest.mark.asyncio
    async def test_existing_branch(self, tick_settings):
        """Test branching from the remote branch and pushing the new commit."""
        git = FakeGit(branch_exists=True)

        result = await TickPusher(tick_settings, runner=git).push()

        commands = git.commands()
        assert commands[0][0] == "clone"
        assert commands[0][1] == "https://example.test/o/r"
        assert ["checkout", "-b", "b1", "remote123"] in commands
        assert ["add", "tick.txt"] in commands
        assert ["commit", "-m", "tick tick!"] in commands
        assert commands[-1] == ["push", "origin", "head456:refs/heads/b1"]
        assert result.commit == "head456"
        assert result.branch == "b1"
        assert not result.created_branch
        assert git.tick_contents.strip().isdigit()

    @pytest.mark.asyncio
    async def test_missing_branch_starts_from_head(self, tick_settings):
        """Test a missing remote branch is created from HEAD."""
        git = FakeGit(branch_exists=False)

        result = await TickPusher(tick_settings, runner=git).push()

        assert ["checkout", "-b", "b1", "head456"] in git.commands()
        assert result.created_branch

    @pytest.mark.asyncio
    async def test_progress_flag(self, tick_settings):
        """Test --progress is passed to push when progress is shown."""
        settings = TickSettings(token="secret", branch="b1", user="u", show_progress=True)
        git = FakeGit()

        await TickPusher(settings, runner=git).push()

        assert git.commands()[-1][:2] == ["push", "--progress"]

    @pytest.mark.asyncio
    async def test_token_stays_out_of_argv(self, tick_settings):
        """Test credentials travel in the environment, never the command line."""
        git = FakeGit()

        await TickPusher(tick_settings, runner=git).push()

        for cmd, _, env in git.calls:
            assert not any("secret" in arg for arg in cmd)
            expected = base64.b64encode(b"u:secret").decode()
            assert env["GIT_CONFIG_VALUE_0"] == f"Authorization: Basic {expected}"

    @pytest.mark.asyncio
    async def test_verbose_enables_tracing(self):
        """Test verbose mode turns on git HTTP tracing."""
        settings = TickSettings(token="t", verbose=True, show_progress=True)
        git = FakeGit()

        await TickPusher(settings, runner=git).push()

        env = git.calls[0][2]
        assert env["GIT_CURL_VERBOSE"] == "1"
        assert env["GIT_TRACE"] == "1"

    @pytest.mark.asyncio
    async def test_failed_push_raises(self, tick_settings):
        """Test a failing git command raises CommandError."""
        git = FakeGit(fail_on="push")

        with pytest.raises(CommandError) as exc_info:
            await TickPusher(tick_settings, runner=git).push()

        assert exc_info.value.returncode == 128
        assert "fatal: nope" in str(exc_info.value)

"""Tests for the loadgen command line."""

import pytest

from conftest import FakeGitDataClient
from loadgen import main as cli
from loadgen.config import GARAGE_URL, REVIEW_LAB_URL


class ContextFakeClient(FakeGitDataClient):
    """FakeGitDataClient usable where main.py opens a GitDataClient."""

    instances = []

    def __init__(self, settings):
        super().__init__(failing_blobs={1, 2})
        self.settings = settings
        ContextFakeClient.instances.append(self)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None


@pytest.fixture
def fake_cli_client(monkeypatch):
    ContextFakeClient.instances = []
    monkeypatch.setattr(cli, "GitDataClient", ContextFakeClient)
    return ContextFakeClient


class TestPostLots:
    """Test the post-lots subcommand."""

    def test_missing_token_exits_before_requests(self, monkeypatch, tmp_path, capsys, fake_cli_client):
        """Test a missing token is reported and nothing is posted."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        code = cli.main(["post-lots"])

        assert code == 1
        assert "GITHUB_TOKEN must be set." in capsys.readouterr().out
        assert fake_cli_client.instances == []

    def test_prints_summary(self, monkeypatch, capsys, fake_cli_client):
        """Test progress and summary lines go to stdout."""
        monkeypatch.setenv("GITHUB_TOKEN", "t")

        code = cli.main(["post-lots", "-n", "20", "-b", "5", "-c", "0"])

        out = capsys.readouterr().out
        assert code == 0
        assert "posting 20 new objects..." in out
        assert "created 18 objects, 4 trees, 4 commits (2 failed)" in out
        settings = fake_cli_client.instances[0].settings
        assert settings.batch_size == 5
        assert settings.concurrency == 0


class TestTickArguments:
    """Test tick argument parsing."""

    @pytest.mark.parametrize(
        "argv,url",
        [
            (["tick"], None),
            (["tick", "-r"], REVIEW_LAB_URL),
            (["tick", "--garage"], GARAGE_URL),
            (["tick", "-u", "https://x.test/o/r"], "https://x.test/o/r"),
        ],
    )
    def test_url_presets(self, argv, url):
        args = cli.build_parser().parse_args(argv)

        assert args.url == url

    def test_presets_are_exclusive(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["tick", "-r", "-g"])

    def test_verbose_implies_progress(self, monkeypatch, capsys):
        """Test --verbose turns on progress output."""
        monkeypatch.setenv("GITHUB_TOKEN", "t")
        seen = []

        async def fake_push_tick(settings):
            seen.append(settings)
            from loadgen.core.tick import TickResult

            return TickResult(commit="c0ffee", branch=settings.branch, url=settings.url, created_branch=False)

        monkeypatch.setattr(cli, "push_tick", fake_push_tick)

        code = cli.main(["tick", "-v"])

        assert code == 0
        assert seen[0].show_progress and seen[0].verbose
        assert "pushed c0ffee to testing-123" in capsys.readouterr().out

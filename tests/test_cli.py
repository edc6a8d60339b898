"""Tests for the aocfetch command line."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from aocfetch import AocClient, cli
from aocfetch.config import ClientConfig
from aocfetch.store import FileStore
from aocfetch.throttle import ThrottleGate

from .conftest import FakeClock, FakeHttp
from .test_examples import PART1


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "_configure_logging", lambda verbosity: None)


@pytest.fixture
def fake_http(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, clock: FakeClock
) -> FakeHttp:
    http = FakeHttp()

    def from_config(config: ClientConfig) -> AocClient:
        return AocClient(
            config.session_token,
            store=FileStore(Path(config.cache_dir)),
            http=http,
            throttle=ThrottleGate(0.0, clock=clock, sleep=clock.sleep),
        )

    monkeypatch.setenv("AOC_SESSION", "token")
    monkeypatch.setenv("AOCFETCH_CACHE_DIR", str(tmp_path))
    monkeypatch.setattr(cli.AocClient, "from_config", staticmethod(from_config))
    return http


class TestCli:
    """Tests for cli.main."""

    def test_input_prints_and_caches(
        self, fake_http: FakeHttp, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The input is printed verbatim and written to the cache dir."""
        fake_http.pages["https://adventofcode.com/2022/day/1/input"] = "1\n2\n"
        assert cli.main(["input", "2022", "1"]) == 0
        assert capsys.readouterr().out == "1\n2\n"
        assert (tmp_path / "2022" / "1.txt").read_text() == "1\n2\n"

    def test_example_prints_answer(
        self, fake_http: FakeHttp, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The example data and answer are printed."""
        fake_http.pages["https://adventofcode.com/2022/day/1"] = PART1
        assert cli.main(["example", "2022", "1"]) == 0
        out = capsys.readouterr().out
        assert "1000\n2000" in out
        assert "part 1 answer: 24000" in out

    def test_example_not_found(self, fake_http: FakeHttp) -> None:
        """No example means exit status 1."""
        fake_http.pages["https://adventofcode.com/2022/day/1"] = "<html></html>"
        assert cli.main(["example", "2022", "1", "--no-cache"]) == cli.EXIT_NO_EXAMPLE

    def test_network_error(self, fake_http: FakeHttp) -> None:
        """Network failures map to exit status 3."""
        fake_http.fail_with = 404
        assert cli.main(["input", "2022", "1"]) == cli.EXIT_NETWORK

    def test_missing_session(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a token the CLI exits with status 2 before any I/O."""
        monkeypatch.delenv("AOC_SESSION", raising=False)
        assert cli.main(["input", "2022", "1"]) == cli.EXIT_CONFIG


class TestCliWiring:
    """Runs the CLI through the real AocClient.from_config."""

    def test_min_interval_and_cache_dir_flags(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Flags reach the client; the response is cached under --cache-dir."""
        resp = MagicMock()
        resp.status_code = 200
        resp.content = b"42\n"
        resp.url = "https://adventofcode.com/2022/day/3/input"
        resp.headers = {}
        session = MagicMock()
        session.get.return_value = resp
        monkeypatch.setattr("requests.Session", MagicMock(return_value=session))
        monkeypatch.setenv("AOC_SESSION", "token")
        monkeypatch.delenv("AOCFETCH_CACHE_DIR", raising=False)

        built: list[AocClient] = []
        real_from_config = AocClient.from_config

        def spy(config: ClientConfig) -> AocClient:
            client = real_from_config(config)
            built.append(client)
            return client

        monkeypatch.setattr(cli.AocClient, "from_config", staticmethod(spy))
        argv = ["input", "2022", "3", "--min-interval", "5", "--cache-dir"]
        assert cli.main([*argv, str(tmp_path)]) == 0

        assert capsys.readouterr().out == "42\n"
        [client] = built
        assert client.throttle.min_interval_s == 5.0
        assert client.closed
        assert (tmp_path / "2022" / "3.txt").read_text() == "42\n"
        session.close.assert_called_once_with()

"""Tests for the log fetcher."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from quake_log_tools.log.log_fetcher import DEFAULT_LOG_URL, LogFetcher

SAMPLE_LOG = " 0:00 InitGame: \\mapname\\q3dm17\n 0:10 Kill: 2 3 7: Zeh killed Mocinha by MOD_ROCKET\n 0:20 ShutdownGame:\n"


def make_response(status_code: int = 200, body: bytes = SAMPLE_LOG.encode("utf-8")) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = body
    return response


class TestFetchLog:
    """Tests for LogFetcher.fetch_log."""

    def test_returns_decoded_body(self) -> None:
        """A 200 response is decoded as UTF-8."""
        fetcher = LogFetcher({"log_source": {"timeout": 5, "ssl_verify": False}})
        with patch("quake_log_tools.log.log_fetcher.requests.get", return_value=make_response()) as get:
            content = fetcher.fetch_log("https://example.com/games.log")

        assert content == SAMPLE_LOG
        get.assert_called_once_with("https://example.com/games.log", timeout=5, verify=False)

    def test_uses_configured_url(self) -> None:
        """Without an explicit URL, log_source.url is used."""
        fetcher = LogFetcher({"log_source": {"url": "https://example.com/configured.log"}})
        with patch("quake_log_tools.log.log_fetcher.requests.get", return_value=make_response()) as get:
            fetcher.fetch_log()

        assert get.call_args[0][0] == "https://example.com/configured.log"

    def test_defaults_to_sample_log(self) -> None:
        """An empty configuration falls back to the public sample log."""
        fetcher = LogFetcher()
        assert fetcher.default_url == DEFAULT_LOG_URL
        assert fetcher.timeout == 30
        assert fetcher.ssl_verify is True

    @pytest.mark.parametrize("status_code", [201, 301, 404, 500])
    def test_non_ok_status_raises(self, status_code: int) -> None:
        """Any status other than 200 is an HTTPError."""
        fetcher = LogFetcher()
        with patch("quake_log_tools.log.log_fetcher.requests.get",
                   return_value=make_response(status_code)):
            with pytest.raises(requests.HTTPError):
                fetcher.fetch_log("https://example.com/games.log")

    def test_transport_error_propagates(self) -> None:
        """Connection failures reach the caller."""
        fetcher = LogFetcher()
        with patch("quake_log_tools.log.log_fetcher.requests.get",
                   side_effect=requests.ConnectionError("unreachable")):
            with pytest.raises(requests.ConnectionError):
                fetcher.fetch_log("https://example.invalid/games.log")

    def test_invalid_utf8_is_replaced(self) -> None:
        """Undecodable bytes do not break fetching."""
        fetcher = LogFetcher()
        with patch("quake_log_tools.log.log_fetcher.requests.get",
                   return_value=make_response(body=b" 0:00 InitGame: \xff\n")):
            content = fetcher.fetch_log("https://example.com/games.log")

        assert content.startswith(" 0:00 InitGame: ")


class TestLoadLines:
    """Tests for LogFetcher.load_lines and local files."""

    def test_local_file(self, tmp_path) -> None:
        """Paths are read from disk and split into lines."""
        log_file = tmp_path / "games.log"
        log_file.write_text(SAMPLE_LOG, encoding="utf-8")

        lines = LogFetcher().load_lines(str(log_file))
        assert lines == SAMPLE_LOG.split("\n")

    def test_url_is_fetched(self) -> None:
        """http(s) sources go through requests."""
        with patch("quake_log_tools.log.log_fetcher.requests.get", return_value=make_response()):
            lines = LogFetcher().load_lines("HTTPS://example.com/games.log")

        assert lines == SAMPLE_LOG.split("\n")

    def test_splits_on_newline_only(self, tmp_path) -> None:
        """Form feeds and CRLF endings do not add or lose lines."""
        log_file = tmp_path / "games.log"
        log_file.write_bytes(b" 0:00 InitGame:\r\n 1:08 Kill: 2 3 7: Ze\x0ch killed Dono by MOD_ROCKET\r\n")

        lines = LogFetcher().load_lines(str(log_file))
        assert lines == [
            " 0:00 InitGame:\r",
            " 1:08 Kill: 2 3 7: Ze\x0ch killed Dono by MOD_ROCKET\r",
            "",
        ]

    def test_missing_file(self, tmp_path) -> None:
        """A missing local log raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            LogFetcher().read_local_log(str(tmp_path / "missing.log"))


class TestRun:
    """Tests for downloading a log to disk."""

    def test_saves_log(self, tmp_path) -> None:
        """run writes the fetched log and reports success."""
        output_file = tmp_path / "logs" / "qgames.log"
        with patch("quake_log_tools.log.log_fetcher.requests.get", return_value=make_response()):
            result = LogFetcher().run("https://example.com/games.log", str(output_file))

        assert result == {"success": True, "output_file": str(output_file)}
        assert output_file.read_text(encoding="utf-8") == SAMPLE_LOG

    def test_failure_is_reported(self, tmp_path) -> None:
        """A failed download returns success False instead of raising."""
        with patch("quake_log_tools.log.log_fetcher.requests.get",
                   return_value=make_response(503)):
            result = LogFetcher().run("https://example.com/games.log", str(tmp_path / "qgames.log"))

        assert result["success"] is False
        assert not (tmp_path / "qgames.log").exists()

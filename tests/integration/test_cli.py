#!/usr/bin/env python3
"""
Command Line Integration Tests
==============================

Runs the click commands end to end with CliRunner, against files on disk and
a mocked HTTP session.
"""

import json
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def feed_file(tmp_path, sample_rss):
    path = tmp_path / "feed.xml"
    path.write_bytes(sample_rss)
    return path


class TestParseCommand:
    """Test `parse` over files and stdin."""

    def test_parse_file_outputs_json(self, runner, feed_file):
        result = runner.invoke(cli, ["parse", str(feed_file)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["title"] == "Engineering Notes"
        assert [post["title"] for post in data["posts"]] == ["First Post", "Second Post"]
        assert data["posts"][0]["published"] == "2006-01-02T15:04:05-07:00"

    def test_parse_stdin(self, runner, sample_rss):
        result = runner.invoke(cli, ["parse", "-", "--indent", "0"], input=sample_rss)

        assert result.exit_code == 0
        assert json.loads(result.output)["posts"][1]["categories"] == ["design"]

    def test_parse_to_output_file(self, runner, feed_file, tmp_path):
        target = tmp_path / "out.json"

        result = runner.invoke(cli, ["parse", str(feed_file), "-o", str(target)])

        assert result.exit_code == 0
        assert json.loads(target.read_text(encoding="utf-8"))["link"] == "https://medium.com/@someone"

    def test_parse_unwritable_output_exits_nonzero(self, runner, feed_file, tmp_path):
        target = tmp_path / "missing" / "out.json"

        result = runner.invoke(cli, ["parse", str(feed_file), "-o", str(target)])

        assert result.exit_code == 1
        assert not target.exists()

    def test_parse_summary(self, runner, feed_file):
        result = runner.invoke(cli, ["parse", str(feed_file), "--summary"])

        assert result.exit_code == 0
        assert "First" in result.output
        assert "Second" in result.output

    def test_parse_malformed_exits_nonzero(self, runner, tmp_path, malformed_rss):
        path = tmp_path / "broken.xml"
        path.write_bytes(malformed_rss)

        result = runner.invoke(cli, ["parse", str(path)])

        assert result.exit_code == 1

    def test_parse_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["parse", str(tmp_path / "missing.xml")])

        assert result.exit_code != 0


class TestFetchCommand:
    """Test `fetch` with the HTTP layer mocked."""

    @patch("requests.Session.get")
    def test_fetch_username(self, mock_get, runner, sample_rss):
        response = Mock(status_code=200, content=sample_rss)
        response.raise_for_status.return_value = None
        mock_get.return_value = response

        result = runner.invoke(cli, ["fetch", "@someone"])

        assert result.exit_code == 0
        assert mock_get.call_args[0][0] == "https://medium.com/feed/@someone"
        assert len(json.loads(result.output)["posts"]) == 2

    @patch("requests.Session.get")
    def test_fetch_full_url(self, mock_get, runner, sample_rss):
        response = Mock(status_code=200, content=sample_rss)
        response.raise_for_status.return_value = None
        mock_get.return_value = response

        result = runner.invoke(cli, ["fetch", "https://example.com/rss.xml"])

        assert result.exit_code == 0
        assert mock_get.call_args[0][0] == "https://example.com/rss.xml"

    @patch("requests.Session.get")
    def test_fetch_network_failure(self, mock_get, runner):
        import requests

        mock_get.side_effect = requests.ConnectionError("refused")

        result = runner.invoke(cli, ["fetch", "@someone"])

        assert result.exit_code == 1


class TestCheckConfigCommand:
    """Test `check-config`."""

    def test_shows_sections(self, runner):
        result = runner.invoke(cli, ["check-config"])

        assert result.exit_code == 0
        assert "parser.date_policy" in result.output
        assert "fetch.base_url" in result.output

# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from stroeer_core.interfaces.cli.main import app

runner = CliRunner()


@pytest.fixture
def bidder_request_file(tmp_path, bidder_request):
    path = tmp_path / "bidder_request.json"
    path.write_text(json.dumps(bidder_request))
    return path


@pytest.fixture
def env_file(tmp_path):
    path = tmp_path / "env.json"
    path.write_text(
        json.dumps(
            {
                "frames": [
                    {"href": "https://www.abc.org/", "referrer": "https://www.google.com/", "innerHeight": 800},
                    {
                        "href": "https://www.xyz.com/",
                        "innerHeight": 600,
                        "frameElement": {"top": 100, "height": 600},
                        "elements": [{"id": "div-1", "top": 10, "height": 600}],
                    },
                ]
            }
        )
    )
    return path


class TestCli:
    """Tests for the CLI commands."""

    def test_validate(self, bidder_request_file):
        result = runner.invoke(app, ["validate", str(bidder_request_file)])

        assert result.exit_code == 0
        assert "bid1" in result.stdout
        assert "bid2" in result.stdout

    def test_build_writes_request(self, tmp_path, bidder_request_file, env_file):
        output = tmp_path / "request.json"
        result = runner.invoke(
            app,
            [
                "build",
                str(bidder_request_file),
                "--env",
                str(env_file),
                "--now",
                "13500",
                "--ab",
                '{"foo": "bar"}',
                "--yield-test",
                "--output",
                str(output),
            ],
        )

        assert result.exit_code == 0
        request = json.loads(output.read_text())
        assert request["url"] == "https://hb.adscale.de/dsh"
        assert request["data"]["timeout"] == 1500
        assert request["data"]["ssl"] is True
        assert request["data"]["ref"] == "https://www.google.com/"
        assert request["data"]["yl2"] is True
        assert request["data"]["ab"] == {"foo": "bar"}
        assert request["data"]["bids"][0]["viz"] is True
        assert "viz" not in request["data"]["bids"][1]

    def test_build_without_valid_bids(self, tmp_path, bidder_request):
        for bid in bidder_request["bids"]:
            bid["params"] = {}
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps(bidder_request))

        result = runner.invoke(app, ["build", str(path)])

        assert result.exit_code == 1

    def test_build_rejects_bad_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = runner.invoke(app, ["build", str(path)])

        assert result.exit_code == 1
        assert "Error parsing" in result.stdout

    def test_interpret(self, tmp_path, bidder_response):
        path = tmp_path / "response.json"
        path.write_text(json.dumps(bidder_response))

        result = runner.invoke(app, ["interpret", str(path), "--no-tracking"])

        assert result.exit_code == 0
        assert "bid1" in result.stdout
        assert "7.30" in result.stdout

    def test_interpret_legacy_redirect(self, tmp_path):
        path = tmp_path / "redirect.json"
        path.write_text(json.dumps({"redirect": "http://somewhere.com/over"}))

        result = runner.invoke(app, ["interpret", str(path), "--no-tracking"])

        assert result.exit_code == 1

    def test_syncs(self):
        result = runner.invoke(app, ["syncs"])

        assert result.exit_code == 0
        assert "https://js.adscale.de/pbsync.html" in result.stdout

    def test_no_syncs(self):
        result = runner.invoke(app, ["syncs", "--no-iframe"])

        assert result.exit_code == 0
        assert "No user syncs" in result.stdout

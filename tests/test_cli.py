# File: tests/test_cli.py
"""Tests for the click CLI using click.testing.CliRunner.
Cover `crawl`, `config`, `--version`, and error handling.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner

from seo_scout.cli import cli

cli_module = importlib.import_module("seo_scout.cli")


@pytest.fixture(autouse=True)
def patch_start_crawl(monkeypatch, sample_report):
    """Replace start_crawl with a stub that records its arguments."""
    calls = []

    async def fake_crawl(url, options=None, *, on_progress=None, log=None):
        calls.append({"url": url, "options": options})
        if on_progress:
            on_progress(1, 0)
        return sample_report

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return calls


@pytest.fixture()
def runner(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def test_version_option(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SEO Scout" in result.output


def test_show_default_config(runner):
    result = runner.invoke(cli, ["config"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["max_depth"] == 3
    assert data["max_pages"] == 100


def test_show_config_from_file(runner, tmp_path):
    cfg_file = tmp_path / "crawl.yaml"
    cfg_file.write_text("max_depth: 1\nrequests_per_second: 2\n", encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["max_depth"] == 1
    assert data["requests_per_second"] == 2.0


def test_bad_config_file_fails(runner, tmp_path):
    cfg_file = tmp_path / "crawl.json"
    cfg_file.write_text('{"unknown": true}', encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_crawl_table(runner, patch_start_crawl):
    result = runner.invoke(cli, ["crawl", "example.com"])
    assert result.exit_code == 0, result.output
    assert "Crawl Summary" in result.stdout
    assert "SEO Health Score" in result.stdout
    assert "Crawl complete! Analyzed 3 pages" in result.output
    assert patch_start_crawl[0]["url"] == "https://example.com/"


def test_crawl_flags_override_options(runner, patch_start_crawl):
    result = runner.invoke(
        cli,
        ["crawl", "https://example.com", "-d", "1", "-l", "5", "-c", "2", "-r", "4", "--timeout", "3"],
    )
    assert result.exit_code == 0, result.output
    options = patch_start_crawl[0]["options"]
    assert (options.max_depth, options.max_pages, options.concurrency) == (1, 5, 2)
    assert options.requests_per_second == 4.0
    assert options.timeout == 3.0


def test_crawl_json_stdout(runner):
    result = runner.invoke(cli, ["crawl", "example.com", "--format", "json", "--pretty"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["summary"]["totalPages"] == 2
    assert data["issues"]["missing_titles"] == ["https://example.com/about"]


def test_crawl_csv_stdout(runner):
    result = runner.invoke(cli, ["crawl", "example.com", "-f", "csv"])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0].startswith("url,status,title")
    assert len(lines) == 4


def test_crawl_writes_report_files(runner, tmp_path):
    json_out = tmp_path / "out" / "crawl.json"
    html_out = tmp_path / "out" / "crawl.html"
    result = runner.invoke(
        cli, ["crawl", "example.com", "--json", str(json_out), "--html", str(html_out)]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(json_out.read_text(encoding="utf-8"))["url"] == "https://example.com/"
    assert "https://example.com/gone" in html_out.read_text(encoding="utf-8")


def test_invalid_url(runner, patch_start_crawl):
    result = runner.invoke(cli, ["crawl", "not-a-domain"])
    assert result.exit_code == 1
    assert "Invalid URL: Invalid domain format" in result.output
    assert patch_start_crawl == []


def test_invalid_option_value(runner, patch_start_crawl):
    result = runner.invoke(cli, ["crawl", "example.com", "--limit", "0"])
    assert result.exit_code == 1
    assert "Invalid option" in result.output
    assert patch_start_crawl == []


def test_crawl_failure_is_reported(runner, monkeypatch):
    async def boom(url, options=None, **kwargs):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(cli_module, "start_crawl", boom)
    result = runner.invoke(cli, ["crawl", "example.com"])
    assert result.exit_code == 1
    assert "Crawl failed: kaboom" in result.output


def test_crawl_timeout(runner, monkeypatch):
    async def slow(url, options=None, **kwargs):
        await asyncio.sleep(2)

    monkeypatch.setattr(cli_module, "start_crawl", slow)
    result = runner.invoke(cli, ["crawl", "example.com", "--crawl-timeout", "0.1"])
    assert result.exit_code == 1
    assert "did not finish within 0.1 seconds" in result.output


def test_progress_printer_throttles(monkeypatch, capsys):
    clock = iter([10.0, 10.5, 11.2])
    monkeypatch.setattr(cli_module.time, "monotonic", lambda: next(clock, 99.0))
    report = cli_module.progress_printer(interval=1.0)
    report(1, 5)
    report(2, 4)
    report(3, 3)
    err = capsys.readouterr().err
    assert "Crawled: 1 | Queued: 5" in err
    assert "Crawled: 2" not in err
    assert "Crawled: 3 | Queued: 3" in err


def test_package_exposes_cli_module():
    import seo_scout

    assert seo_scout.cli is cli_module
    assert cli_module.cli is cli

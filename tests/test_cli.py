import httpx
import respx
from typer.testing import CliRunner

from checklinks.services.crawl import cli as cli_mod
from checklinks.services.crawl.models import CrawlSummary

runner = CliRunner()


def test_missing_url_exits_1():
    result = runner.invoke(cli_mod.app, [])
    assert result.exit_code == 1
    assert "usage" in result.output


def test_unparsable_seed_exits_1():
    result = runner.invoke(cli_mod.app, ["http://[::1"])
    assert result.exit_code == 1
    assert "parse" in result.output


def test_flags_reach_settings(monkeypatch):
    seen = {}

    async def fake_crawl(seed, settings, reporter):
        seen["seed"] = seed
        seen["settings"] = settings
        seen["reporter"] = reporter
        return CrawlSummary()

    monkeypatch.setattr(cli_mod, "crawl_async", fake_crawl)
    result = runner.invoke(
        cli_mod.app,
        ["site.test", "-timeout", "3", "-success", "-nofailed", "--no-verify", "--parallelism", "8"],
    )
    assert result.exit_code == 0, result.output
    assert seen["seed"] == "http://site.test"
    settings = seen["settings"]
    assert settings.timeout == 3.0
    assert settings.verify is False
    assert settings.parallelism == 8
    visible = {k.value: v for k, v in seen["reporter"].visible.items()}
    assert visible == {"ok": True, "ignored": False, "failed": False}


def test_double_dash_flags(monkeypatch):
    seen = {}

    async def fake_crawl(seed, settings, reporter):
        seen["reporter"] = reporter
        return CrawlSummary()

    monkeypatch.setattr(cli_mod, "crawl_async", fake_crawl)
    result = runner.invoke(cli_mod.app, ["https://site.test", "--ignored", "--no-failed"])
    assert result.exit_code == 0, result.output
    visible = {k.value: v for k, v in seen["reporter"].visible.items()}
    assert visible == {"ok": False, "ignored": True, "failed": False}


def test_invalid_parallelism_exits_1():
    result = runner.invoke(cli_mod.app, ["site.test", "--parallelism", "0"])
    assert result.exit_code == 1


@respx.mock
def test_crawl_output(site_page):
    respx.get("http://site.test/").mock(return_value=httpx.Response(200, html=site_page))
    respx.get("http://site.test/ok.html").mock(return_value=httpx.Response(200, html=""))
    respx.get("http://site.test/missing.html").mock(return_value=httpx.Response(404))
    respx.head("https://external.test/page").mock(return_value=httpx.Response(200))

    result = runner.invoke(cli_mod.app, ["site.test", "-success", "--summary"])
    assert result.exit_code == 0, result.output
    out = result.stdout
    assert 'OK "http://site.test/"' in out
    assert 'OK "http://site.test/ok.html"' in out
    assert 'OK "https://external.test/page"' in out
    assert 'FAIL "http://site.test/missing.html": GET 404 Not Found' in out
    assert "Link check summary" in out

    result = runner.invoke(cli_mod.app, ["site.test", "-nofailed"])
    assert result.exit_code == 0
    assert "FAIL" not in result.stdout


def test_extra_argument_exits_1():
    result = runner.invoke(cli_mod.app, ["site.test", "other.test"])
    assert result.exit_code == 1
    assert "usage" in result.output


def test_bad_option_value_exits_1():
    result = runner.invoke(cli_mod.app, ["site.test", "-timeout", "abc"])
    assert result.exit_code == 1
    assert "usage" in result.output


def test_unknown_flag_exits_1():
    result = runner.invoke(cli_mod.app, ["site.test", "--bogus"])
    assert result.exit_code == 1

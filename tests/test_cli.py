"""Tests for the command-line interface."""

import json

import pytest

from shortlinks.scripts.cli import ShortLinkCLI, build_parser


@pytest.fixture
def cli(registry):
    cli = ShortLinkCLI(db_url="postgresql://unused", base_url="https://sho.rt")
    cli.registry = registry
    return cli


async def _run(cli, capsys, *argv):
    code = await cli.run(build_parser().parse_args(list(argv)))
    captured = capsys.readouterr()
    output = captured.out if code == 0 else captured.err
    return code, json.loads(output)


@pytest.mark.asyncio
class TestShortLinkCLI:

    async def test_shorten_and_get(self, cli, capsys):
        code, payload = await _run(cli, capsys, "shorten", "https://example.com/cli", "--expires-in", "30")

        assert code == 0
        link = payload["link"]
        assert link["original_url"] == "https://example.com/cli"
        assert link["short_url"] == f"https://sho.rt/{link['short_code']}"
        assert link["expires_at"] is not None

        code, payload = await _run(cli, capsys, "get", str(link["id"]))
        assert payload["link"]["short_code"] == link["short_code"]

    async def test_resolve_counts_click(self, cli, capsys, registry):
        link = await registry.create("https://example.com/resolve")

        code, payload = await _run(cli, capsys, "resolve", link.short_code)

        assert code == 0
        assert payload == {"success": True, "original_url": "https://example.com/resolve", "clicks": 1}

        code, payload = await _run(cli, capsys, "info", link.short_code)
        assert payload["link"]["clicks"] == 1

    async def test_list(self, cli, capsys, registry, sample_urls):
        for url in sample_urls:
            await registry.create(url)

        code, payload = await _run(cli, capsys, "list")

        assert payload["count"] == len(sample_urls)

    async def test_update(self, cli, capsys, registry):
        link = await registry.create("https://example.com/old", expires_in_minutes=5)

        code, payload = await _run(cli, capsys, "update", str(link.id), "--url", "https://example.com/new", "--no-expiry")

        assert code == 0
        assert payload["link"]["original_url"] == "https://example.com/new"
        assert payload["link"]["expires_at"] is None

    async def test_update_without_changes(self, cli, capsys, registry):
        link = await registry.create("https://example.com")

        code, payload = await _run(cli, capsys, "update", str(link.id))

        assert code == 1
        assert payload["error"] == "Nothing to update"

    async def test_delete_then_missing(self, cli, capsys, registry):
        link = await registry.create("https://example.com")

        code, _ = await _run(cli, capsys, "delete", str(link.id))
        assert code == 0

        code, payload = await _run(cli, capsys, "get", str(link.id))
        assert code == 1
        assert payload["error"].startswith("NotFoundError")

    async def test_invalid_url_reported(self, cli, capsys):
        code, payload = await _run(cli, capsys, "shorten", "not-a-url")

        assert code == 1
        assert payload["error"].startswith("InvalidInputError")

    async def test_init_db_requires_postgres(self, cli, capsys):
        code, payload = await _run(cli, capsys, "init-db")

        assert code == 1
        assert "postgres" in payload["error"]

    async def test_health(self, cli, capsys):
        code, payload = await _run(cli, capsys, "health")

        assert code == 0
        assert payload["health"]["overall"] is True

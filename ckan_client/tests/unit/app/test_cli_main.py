from __future__ import annotations

import io
import json
from typing import Any

import pytest

import ckan_client.app.main as cli
from ckan_client.adapters.http_client import Client
from ckan_client.tests.unit.helpers import BASE_URL, ResponseStub, SessionStub, query_of


def _wire(monkeypatch: pytest.MonkeyPatch, session: SessionStub) -> None:
    def build(args: Any) -> Client:
        assert args.base_url == BASE_URL
        return Client(args.base_url, session)

    monkeypatch.setattr(cli, "_build_client", build)


def test_packages_command_prints_names(monkeypatch: pytest.MonkeyPatch) -> None:
    session = SessionStub([ResponseStub('{"success":true,"result":["a","b"]}')])
    _wire(monkeypatch, session)
    out = io.StringIO()

    code = cli.main(["--base-url", BASE_URL, "packages", "--limit", "10"], out=out)

    assert code == 0
    assert out.getvalue().splitlines() == ["a", "b"]
    assert query_of(session.last_request) == {"limit": ["10"]}


def test_table_metadata_all_pages(monkeypatch: pytest.MonkeyPatch) -> None:
    session = SessionStub(
        [
            ResponseStub({"success": True, "result": {"records": [{"_id": "1", "name": "a", "oid": 1}]}}),
            ResponseStub({"success": True, "result": {"records": []}}),
        ]
    )
    _wire(monkeypatch, session)
    out = io.StringIO()

    code = cli.main(
        ["--base-url", BASE_URL, "table-metadata", "--all", "--page-size", "1"], out=out
    )

    assert code == 0
    rows = [json.loads(line) for line in out.getvalue().splitlines()]
    assert rows == [{"_id": "1", "alias_of": "", "name": "a", "oid": 1}]
    assert len(session.calls) == 2


def test_action_command_prints_result(monkeypatch: pytest.MonkeyPatch) -> None:
    session = SessionStub([ResponseStub('{"success":true,"result":{"site":"x"}}')])
    _wire(monkeypatch, session)
    out = io.StringIO()

    code = cli.main(["--base-url", BASE_URL, "action", "action/status_show"], out=out)

    assert code == 0
    assert json.loads(out.getvalue()) == {"site": "x"}
    assert session.last_request.url == BASE_URL + "action/status_show"


def test_errors_are_mapped_to_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    body = {"success": False, "error": {"message": "Not found", "__type": "Not Found Error"}}
    _wire(monkeypatch, SessionStub([ResponseStub(body)]))
    out, err = io.StringIO(), io.StringIO()

    code = cli.main(["--base-url", BASE_URL, "packages"], out=out, err=err)

    assert code == cli.EXIT_FAILURE
    assert err.getvalue().startswith("SERVICE_ERROR: ")
    assert out.getvalue() == ""

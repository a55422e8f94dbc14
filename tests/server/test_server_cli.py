# tests/server/test_server_cli.py
import json

import pytest
from flask import Flask

import docserver.app as server_app
from docstore.core.managers.config_manager import config_manager
from docstore.core.managers.database_manager import DatabaseManager
from docstore.core.managers.document_manager import DocumentManager


@pytest.fixture
def runs(monkeypatch):
    """Captures app.run calls instead of starting a server."""
    calls = []

    def fake_run(self, host=None, port=None, **kwargs):
        calls.append({"app": self, "host": host, "port": port})

    monkeypatch.setattr(Flask, "run", fake_run)
    monkeypatch.setattr(server_app, "configure_logger", lambda *args, **kwargs: None)
    yield calls
    config_manager.reset()


@pytest.fixture
def xml_dir(tmp_path):
    directory = tmp_path / "xml_files"
    directory.mkdir()
    (directory / "closed.xml").write_text("<document><title>Closed</title></document>", encoding="utf-8")
    (directory / "open.xml").write_text("<document><title>Open</title>", encoding="utf-8")
    return directory


def _stored_titles(db_path):
    db = DatabaseManager(db_path)
    try:
        return list(DocumentManager(db).list_documents()["title"])
    finally:
        db.close_connections()


def test_main_strict_load_dir(runs, tmp_path, xml_dir):
    db_path = tmp_path / "cli.db"
    exit_code = server_app.main([
        "--db-path", str(db_path), "--strict", "--load-dir", str(xml_dir), "--port", "5050",
    ])

    assert exit_code == 0
    assert len(runs) == 1
    assert runs[0]["host"] == "0.0.0.0"
    assert runs[0]["port"] == 5050
    assert runs[0]["app"].config["DOCUMENT_CONTROLLER"].strict is True
    # The unclosed document is rejected in strict mode
    assert _stored_titles(db_path) == ["Closed"]


def test_main_load_on_startup_from_overrides(runs, tmp_path, xml_dir):
    db_path = tmp_path / "cli.db"
    server_app.main([
        "--db-path", str(db_path),
        "--set", "loader.load_on_startup=true",
        "--set", f"loader.xml_files_path={xml_dir}",
        "--set", "server.port=6060",
    ])

    assert runs[0]["port"] == 6060
    assert runs[0]["app"].config["DOCUMENT_CONTROLLER"].strict is False
    assert _stored_titles(db_path) == ["Closed", "Open"]


def test_main_without_load_dir_imports_nothing(runs, tmp_path):
    db_path = tmp_path / "cli.db"
    server_app.main(["--db-path", str(db_path)])
    assert runs[0]["port"] == 3456
    assert _stored_titles(db_path) == []


def test_main_show_config(runs, capsys):
    assert server_app.main(["--show-config", "--set", "server.port=7070"]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["server"]["port"] == 7070
    assert runs == []


def test_main_rejects_malformed_override(runs):
    with pytest.raises(SystemExit) as exc_info:
        server_app.main(["--set", "no-equals-sign"])
    assert exc_info.value.code == 2
    assert runs == []

# tests/core/test_path_utils.py
import pytest

from docstore.core.managers.database_manager import DatabaseManager
from docstore.core.utils.path_utils import PathUtils


def _no_project_root():
    raise FileNotFoundError("Could not find the project root.")


@pytest.fixture
def installed_layout(tmp_path, monkeypatch):
    """Simulates an installed package: no checkout root, a private home dir."""
    user_dir = tmp_path / "home" / ".docstore"
    monkeypatch.setattr(PathUtils, 'get_project_root', _no_project_root)
    monkeypatch.setattr(PathUtils, 'get_user_data_dir', lambda: user_dir)
    return user_dir


def test_store_package_root_holds_shipped_settings():
    root = PathUtils.get_store_package_root()
    assert root.name == "docstore"
    assert (root / "settings.json").is_file()


def test_cache_root_inside_checkout():
    assert PathUtils.get_cache_root() == PathUtils.get_project_root() / ".docstore_cache"


def test_cache_root_falls_back_to_user_dir(installed_layout):
    assert PathUtils.get_cache_root() == installed_layout


def test_default_database_without_project_root(installed_layout):
    db = DatabaseManager()
    try:
        assert db.db_path == installed_layout / "documents.db"
        db.init_schema()
        assert db.db_path.is_file()
    finally:
        db.close_connections()


def test_get_db_path_with_base_dir(tmp_path):
    path = PathUtils.get_db_path("x.db", base_dir=tmp_path / "nested")
    assert path == tmp_path / "nested" / "x.db"
    assert path.parent.is_dir()

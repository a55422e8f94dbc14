# src/docstore/core/utils/path_utils.py
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important project paths.
    """

    @staticmethod
    def get_project_root() -> Path:
        """
        Returns the absolute path of the project root (source checkout only).
        Searches upwards for a directory containing 'src' and 'pyproject.toml'.
        """
        current_path = Path(__file__).resolve().parent
        while current_path != current_path.parent:
            src_dir = current_path / "src"
            pyproject_toml = current_path / "pyproject.toml"
            if src_dir.is_dir() and pyproject_toml.is_file():
                return current_path
            current_path = current_path.parent
        raise FileNotFoundError(
            "Could not find the project root. Search for a directory containing 'src' and 'pyproject.toml'.")

    @staticmethod
    def get_store_package_root() -> Path:
        """The installed 'docstore' package directory, where settings.json ships."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_user_data_dir() -> Path:
        """
        Returns the per-user data directory used outside a source checkout.
        (e.g., ~/.docstore/)
        """
        return Path.home() / ".docstore"

    @staticmethod
    def get_cache_root() -> Path:
        """
        Returns the directory holding the document database.
        Inside a checkout this is <project root>/.docstore_cache, otherwise ~/.docstore.
        """
        try:
            return PathUtils.get_project_root() / ".docstore_cache"
        except FileNotFoundError:
            logger.debug("No project root found; using the user data directory.")
            return PathUtils.get_user_data_dir()

    @staticmethod
    def get_db_path(filename: str = "documents.db", base_dir: Optional[Path] = None) -> Path:
        """Returns the path to the SQLite database file, creating its directory."""
        root = base_dir if base_dir else PathUtils.get_cache_root()
        root.mkdir(parents=True, exist_ok=True)
        return root / filename

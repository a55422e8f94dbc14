# src/docstore/core/services/document_loader_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from tqdm.auto import tqdm

from flattener.errors import ParseError
from docstore.core.managers.config_manager import config_manager
from docstore.core.managers.document_manager import DocumentManager
from docstore.core.services.document_parse_service import parse_document
from docstore.model import XMLDocument

logger = logging.getLogger(__name__)


@dataclass
class LoadReport:
    loaded: int = 0
    # file name -> error message
    failed: Dict[str, str] = field(default_factory=dict)


class DocumentLoaderService:
    """
    Bulk-imports every '*.xml' file of a directory into the document store.
    A file that cannot be read or parsed is reported and skipped.
    """

    def __init__(self, document_manager: DocumentManager, strict: Optional[bool] = None):
        self.document_manager = document_manager
        self.strict = config_manager.get_nested("parser.strict", False) if strict is None else strict

    @staticmethod
    def _find_files(directory: Path) -> List[Path]:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".xml")

    def load_directory(self, directory: Path, show_progress: bool = False) -> LoadReport:
        directory = Path(directory)
        if not directory.is_dir():
            raise FileNotFoundError(f"XML directory not found: {directory}")

        report = LoadReport()
        docs: List[XMLDocument] = []
        files = self._find_files(directory)
        iterator = files if not show_progress else tqdm(files, desc="Loading documents", unit="file", leave=False)

        for path in iterator:
            try:
                content = path.read_text(encoding="utf-8")
                docs.append(parse_document(content, strict=self.strict))
            except (OSError, UnicodeDecodeError) as e:
                logger.error("Error reading file %s: %s", path, e)
                report.failed[path.name] = str(e)
            except ParseError as e:
                logger.error("Error parsing file %s: %s", path, e)
                report.failed[path.name] = str(e)

        report.loaded = self.document_manager.save_documents(docs)
        logger.info(
            "Loaded %d document(s) from %s, %d failed.", report.loaded, directory, len(report.failed)
        )
        return report

# src/docstore/core/managers/document_manager.py
import logging
from typing import Iterable, Optional

import pandas as pd

from docstore.database_schema import DOCUMENT_TABLE, XML_DATA_SEPARATOR
from docstore.core.managers.database_manager import DatabaseManager
from docstore.model import XMLDocument

logger = logging.getLogger(__name__)

_INSERT_SQL = (
    f"INSERT INTO {DOCUMENT_TABLE} (title, description, author, created_at, xml_data) "
    "VALUES (?, ?, ?, ?, ?)"
)


class DocumentManager:
    """
    Stores and retrieves flattened documents.

    Delegates all SQL execution to the DatabaseManager; this class only knows
    how an XMLDocument maps onto a row of the 'doc' table.
    """

    def __init__(self, db_manager: Optional[DatabaseManager] = None):
        self.db_manager = db_manager or DatabaseManager()
        self.db_manager.init_schema()

    @staticmethod
    def _to_row(doc: XMLDocument) -> tuple:
        return (
            doc.title,
            doc.description,
            doc.author,
            doc.created_at,
            XML_DATA_SEPARATOR.join(doc.xml_data),
        )

    def insert_document(self, doc: XMLDocument) -> Optional[int]:
        """Inserts a document and returns its new id, or None if the insert failed."""
        new_id = self.db_manager.execute_insert(_INSERT_SQL, self._to_row(doc))
        if new_id < 0:
            logger.error("Failed to insert document '%s'.", doc.title)
            return None
        logger.info(f"Stored document {new_id} ('{doc.title}', {len(doc.xml_data)} elements).")
        return new_id

    def save_documents(self, docs: Iterable[XMLDocument]) -> int:
        """Batch inserts documents and returns how many were written."""
        rows = [self._to_row(doc) for doc in docs]
        self.db_manager.save_batch(_INSERT_SQL, rows)
        return len(rows)

    def get_document(self, doc_id: int) -> Optional[XMLDocument]:
        row = self.db_manager.fetch_one(
            f"SELECT id, title, description, author, created_at, xml_data FROM {DOCUMENT_TABLE} WHERE id = ?",
            (doc_id,)
        )
        if row is None:
            return None

        _id, title, description, author, created_at, xml_data = row
        return XMLDocument(
            id=_id,
            title=title or "",
            description=description or "",
            author=author or "",
            created_at=created_at or "",
            xml_data=xml_data.split(XML_DATA_SEPARATOR) if xml_data else [],
        )

    def delete_document(self, doc_id: int) -> bool:
        """Deletes a document by id. Returns False when no such row existed."""
        deleted = self.db_manager.execute_query(f"DELETE FROM {DOCUMENT_TABLE} WHERE id = ?", (doc_id,))
        if deleted:
            logger.info(f"Deleted document {doc_id}.")
        return deleted > 0

    def list_documents(self) -> pd.DataFrame:
        """Returns id and extracted fields of every stored document, ordered by id."""
        return self.db_manager.fetch_dataframe(
            f"SELECT id, title, description, author, created_at FROM {DOCUMENT_TABLE} ORDER BY id"
        )

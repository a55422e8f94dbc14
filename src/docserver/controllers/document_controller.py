# src/docserver/controllers/document_controller.py
import json
import logging
from typing import Any, Dict, List, Optional

from docstore.core.managers.document_manager import DocumentManager
from docstore.core.services.document_parse_service import parse_document
from docstore.model import XMLDocument

logger = logging.getLogger(__name__)


class DocumentController:
    """
    Glue between the HTTP routes and the document store.
    Parse errors propagate to the router, which maps them to responses.
    """

    def __init__(self, document_manager: DocumentManager, strict: bool = False):
        self.document_manager = document_manager
        self.strict = strict

    def add_document(self, raw: str) -> Optional[int]:
        doc = parse_document(raw, strict=self.strict)
        return self.document_manager.insert_document(doc)

    def get_document(self, doc_id: int) -> Optional[XMLDocument]:
        return self.document_manager.get_document(doc_id)

    def delete_document(self, doc_id: int) -> bool:
        return self.document_manager.delete_document(doc_id)

    def list_documents(self) -> List[Dict[str, Any]]:
        df = self.document_manager.list_documents()
        # to_json converts numpy scalars to plain JSON types
        return json.loads(df.to_json(orient="records"))

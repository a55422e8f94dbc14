# tests/core/test_document_manager.py
import pytest

from docstore.core.managers.database_manager import DatabaseManager
from docstore.core.managers.document_manager import DocumentManager
from docstore.database_schema import XML_DATA_SEPARATOR
from docstore.model import XMLDocument


@pytest.fixture
def manager(tmp_path) -> DocumentManager:
    db = DatabaseManager(tmp_path / "documents.db")
    yield DocumentManager(db)
    db.close_connections()


@pytest.fixture
def doc() -> XMLDocument:
    return XMLDocument(
        title="Test Title",
        description="Test Description",
        author="Test Author",
        created_at="2024-07-09",
        xml_data=[
            "<title>Test Title</title>",
            "<description>Test Description</description>",
            "<author>Test Author</author>",
            "<creationDate>2024-07-09</creationDate>",
        ],
    )


def test_insert_and_get_document(manager: DocumentManager, doc: XMLDocument):
    new_id = manager.insert_document(doc)
    assert new_id == 1

    stored = manager.get_document(new_id)
    assert stored == doc.model_copy(update={"id": 1})


def test_xml_data_is_joined_with_separator(manager: DocumentManager, doc: XMLDocument):
    new_id = manager.insert_document(doc)
    row = manager.db_manager.fetch_one("SELECT xml_data FROM doc WHERE id = ?", (new_id,))
    assert row[0] == XML_DATA_SEPARATOR.join(doc.xml_data)


def test_empty_xml_data_round_trips(manager: DocumentManager):
    new_id = manager.insert_document(XMLDocument(title="bare"))
    assert manager.get_document(new_id).xml_data == []


def test_get_unknown_document(manager: DocumentManager):
    assert manager.get_document(404) is None


def test_delete_document(manager: DocumentManager, doc: XMLDocument):
    new_id = manager.insert_document(doc)
    assert manager.delete_document(new_id) is True
    assert manager.get_document(new_id) is None
    assert manager.delete_document(new_id) is False


def test_ids_are_assigned_in_order(manager: DocumentManager, doc: XMLDocument):
    first = manager.insert_document(doc)
    second = manager.insert_document(doc)
    assert second == first + 1


def test_save_documents_and_list(manager: DocumentManager, doc: XMLDocument):
    other = XMLDocument(title="Other", author="Someone")
    assert manager.save_documents([doc, other]) == 2

    df = manager.list_documents()
    assert list(df.columns) == ["id", "title", "description", "author", "created_at"]
    assert list(df["title"]) == ["Test Title", "Other"]
    assert list(df["id"]) == [1, 2]


def test_list_documents_empty(manager: DocumentManager):
    assert manager.list_documents().empty

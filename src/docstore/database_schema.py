# src/docstore/database_schema.py

DOCUMENT_TABLE = "doc"

# Joins xml_data entries in a single column; never valid inside markup.
XML_DATA_SEPARATOR = "µ∜⨚Ť¿"

DEFAULT_SCHEMA_SCRIPT = f"""
CREATE TABLE IF NOT EXISTS {DOCUMENT_TABLE} (
    id INTEGER PRIMARY KEY,
    title TEXT,
    description TEXT,
    author TEXT,
    created_at TEXT,
    xml_data TEXT
);
CREATE INDEX IF NOT EXISTS idx_doc_title ON {DOCUMENT_TABLE}(title);
"""

# src/docstore/model.py (Store Layer)
from typing import List, Optional

from pydantic import BaseModel, Field


class XMLDocument(BaseModel):
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    author: str = ""
    # Taken from the <creationDate> element, kept verbatim
    created_at: str = ""
    xml_data: List[str] = Field(default_factory=list)

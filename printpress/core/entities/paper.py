"""Paper reference entity."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from printpress.core.clock import utcnow


class PaperType(str, Enum):
    """How a paper is counted."""

    REAM = "Ream"
    PACKET = "Packet"
    SHEET = "Sheet"
    OTHERS = "Others"


class Paper(BaseModel):
    """A paper kept in stock, with the balance the ledger starts from."""

    id: int | None = None
    admin_id: str
    paper_name: str
    paper_type: PaperType
    paper_type_other: str | None = None  # free-text kind when paper_type is Others
    paper_size: str
    paper_weight: str
    units: str
    original_stock: float = Field(default=0.0, ge=0)
    created_by: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def display_type(self) -> str:
        """Paper kind as shown on screens and reports."""
        if self.paper_type == PaperType.OTHERS and self.paper_type_other:
            return self.paper_type_other
        return self.paper_type.value

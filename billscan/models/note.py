"""
Pydantic models for the note (generative JSON) path.
"""

from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Literal, Optional


class TransactionType(str, Enum):
    """Kind of transaction a note describes."""
    EXPENSE = "expense"
    INCOME = "income"


class NoteItem(BaseModel):
    """One line of a note as returned by the generative service."""
    item: str = ""
    amount: int = 0

    class Config:
        frozen = True


class NoteResult(BaseModel):
    """Note data after category mapping, ready for the caller to store."""
    total_amount: int = Field(default=0, alias="totalAmount")
    items: List[NoteItem] = Field(default_factory=list)
    category: str
    description: str = ""
    confidence: Literal["high", "medium", "low"] = "low"

    class Config:
        frozen = True
        populate_by_name = True


class AIParseItem(BaseModel):
    """Item recovered from a free-text generative summary."""
    name: str
    amount: Optional[int] = None


class AIParseResult(BaseModel):
    """Fields recovered from a free-text generative summary."""
    merchant: Optional[str] = None
    total_amount: Optional[int] = Field(default=None, alias="totalAmount")
    items: List[AIParseItem] = Field(default_factory=list)
    date: Optional[str] = None
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")
    success: bool = False

    class Config:
        populate_by_name = True


class ParseNoteRequest(BaseModel):
    """Request body for mapping a generative note response."""
    response_text: str
    transaction_type: TransactionType = TransactionType.EXPENSE


class MapCategoryRequest(BaseModel):
    """Request body for canonical category lookup."""
    category: Optional[str] = None
    transaction_type: TransactionType = TransactionType.EXPENSE


class SummaryRequest(BaseModel):
    """Request body for parsing a free-text generative summary."""
    text: str = ""


class MapCategoryResponse(BaseModel):
    """Loose category as sent, with its canonical label."""
    category: Optional[str] = None
    canonical: str

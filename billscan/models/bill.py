"""
Pydantic models for parsed bills.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from billscan.utils.money import MAX_AMOUNT


class BillItem(BaseModel):
    """One purchased line on a receipt."""
    name: str
    amount: int = Field(gt=0, lt=MAX_AMOUNT)
    category: Optional[str] = None
    quantity: Optional[int] = None
    unit_price: Optional[int] = Field(default=None, alias="unitPrice")

    class Config:
        frozen = True
        populate_by_name = True


class BillData(BaseModel):
    """Structured result of parsing receipt text."""
    items: List[BillItem] = Field(default_factory=list)
    store_name: Optional[str] = Field(default=None, alias="storeName")
    store_address: Optional[str] = Field(default=None, alias="storeAddress")
    total_amount: int = Field(default=0, ge=0, alias="totalAmount")
    tax: int = Field(default=0, ge=0)
    currency: str = "VND"
    date: Optional[str] = None  # Store as string (YYYY-MM-DD)
    time: Optional[str] = None  # HH:MM or HH:MM:SS
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    raw_text: str = Field(default="", alias="rawText")

    class Config:
        frozen = True
        populate_by_name = True

    @property
    def needs_manual_entry(self) -> bool:
        """Zero-confidence or item-less results go to manual entry."""
        return self.confidence == 0 or not self.items


class ParseReceiptRequest(BaseModel):
    """Request body for receipt parsing."""
    text: str = ""

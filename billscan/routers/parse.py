"""
Parse API router: receipt text, generative note replies and category lookup.
"""

from fastapi import APIRouter, HTTPException
import logging

from billscan.config import settings
from billscan.exceptions import BillscanError, TextTooLargeError
from billscan.models.bill import BillData, ParseReceiptRequest
from billscan.models.note import (
    MapCategoryRequest,
    MapCategoryResponse,
    NoteResult,
    ParseNoteRequest,
    SummaryRequest,
)
from billscan.services.ai_text import create_description, parse_ai_result
from billscan.services.category_mapper import map_category
from billscan.services.note_processor import parse_note_response
from billscan.services.parser import parse_bill_text

router = APIRouter(prefix="/parse", tags=["parse"])
logger = logging.getLogger(__name__)


def _check_length(text: str) -> None:
    if text and len(text) > settings.MAX_TEXT_LENGTH:
        raise TextTooLargeError(len(text), settings.MAX_TEXT_LENGTH)


@router.post("/receipt", response_model=BillData)
def parse_receipt(request: ParseReceiptRequest):
    """
    Parse recognized receipt text into itemized bill data.

    Blank or unreadable text is not an error: the response carries
    confidence 0 and the client should fall back to manual entry.
    """
    try:
        _check_length(request.text)

        bill = parse_bill_text(request.text)

        logger.info("Receipt parsed", extra={
            "item_count": len(bill.items),
            "total_amount": bill.total_amount,
            "confidence": bill.confidence,
        })
        return bill

    except BillscanError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Receipt parse failed")
        raise HTTPException(status_code=500, detail=f"Parse failed: {str(e)}")


@router.post("/note", response_model=NoteResult)
def parse_note(request: ParseNoteRequest):
    """Map a generative note reply to canonical note data."""
    try:
        _check_length(request.response_text)
        return parse_note_response(request.response_text, request.transaction_type)

    except BillscanError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Note parse failed")
        raise HTTPException(status_code=500, detail=f"Parse failed: {str(e)}")


@router.post("/category", response_model=MapCategoryResponse)
def resolve_category(request: MapCategoryRequest):
    """Canonical label for a loose category string."""
    return MapCategoryResponse(
        category=request.category,
        canonical=map_category(request.category, request.transaction_type),
    )


@router.post("/summary")
def parse_summary(request: SummaryRequest):
    """Recover fields from a free-text generative summary."""
    try:
        _check_length(request.text)

        result = parse_ai_result(request.text)
        return {
            "result": result.model_dump(by_alias=True),
            "description": create_description(result),
        }

    except BillscanError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Summary parse failed")
        raise HTTPException(status_code=500, detail=f"Parse failed: {str(e)}")

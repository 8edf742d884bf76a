"""
Confidence scoring for parsed bills.

Each signal is boolean presence; the weights sum to 1.0.
"""

from typing import Any, Dict, List, Optional

__all__ = ['CONFIDENCE_WEIGHTS', 'calculate_confidence']


# Field weights (sum to 1.0)
CONFIDENCE_WEIGHTS = {
    'items': 0.3,
    'store_name': 0.2,
    'date': 0.2,
    'total_amount': 0.3,
}


def calculate_confidence(
    items: Optional[List[Any]] = None,
    store_name: Optional[str] = None,
    date: Optional[str] = None,
    total_amount: int = 0,
) -> float:
    """
    Combine extracted signals into a single 0-1 score.

    Args:
        items: Extracted line items
        store_name: Captured store name
        date: Captured ISO date
        total_amount: Final total after any explicit override

    Returns:
        Confidence score between 0.0 and 1.0
    """
    present: Dict[str, bool] = {
        'items': bool(items),
        'store_name': bool(store_name),
        'date': bool(date),
        'total_amount': (total_amount or 0) > 0,
    }

    score = sum(
        weight for field, weight in CONFIDENCE_WEIGHTS.items() if present[field]
    )

    return round(min(1.0, score), 2)

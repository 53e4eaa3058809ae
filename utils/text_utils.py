"""
Text utilities for shopping-list matching.
"""

from typing import Optional


def normalize_item_text(text: Optional[str]) -> str:
    """
    Normalize an item name for comparison.

    - "  Round Tomatoes 5kg " -> "round tomatoes 5kg"
    - None -> ""

    Args:
        text: Item text as typed or as stored in a catalog

    Returns:
        Trimmed, lower-cased text (empty string for blank input)
    """
    if not text:
        return ""
    return text.strip().lower()

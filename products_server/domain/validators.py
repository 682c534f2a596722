from typing import Any

from bson import ObjectId


def is_valid_product_id(value: Any) -> bool:
    """True only for 24-char hex strings (MongoDB ObjectId)."""
    return isinstance(value, str) and ObjectId.is_valid(value)

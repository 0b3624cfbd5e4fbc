"""
Page/limit arithmetic for PostgREST range queries
"""

import math
from typing import Any, Dict, List, Tuple


def page_range(page: int, limit: int) -> Tuple[int, int]:
    """Inclusive row range for a 1-based page"""
    offset = (page - 1) * limit
    return offset, offset + limit - 1


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


def paginate(items: List[Any], total: int, page: int, limit: int) -> Dict[str, Any]:
    """Response envelope shared by every paginated endpoint"""
    return {
        "items": items,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": total_pages(total, limit),
        "has_more": page * limit < total,
    }

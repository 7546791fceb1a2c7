"""
ListProductsQuery.
"""
from dataclasses import dataclass

from core.domain.access import CallerContext


@dataclass
class ListProductsQuery:
    """
    Query for the products visible to the caller.

    Admins see the whole catalog; customers see the products their own
    license keys were issued for.
    """

    caller: CallerContext

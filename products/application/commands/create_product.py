"""
CreateProductCommand.
"""
from dataclasses import dataclass

from core.domain.access import CallerContext


@dataclass
class CreateProductCommand:
    """Command to add a product to the catalog (admin only)."""

    caller: CallerContext
    name: str
    slug: str
    description: str = ""

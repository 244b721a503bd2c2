# src/models/review.py

"""Customer review model persisted by the catalog store."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Review:
    """A review attached to a stored product."""

    id: int
    product_id: int
    title: str
    rating: int
    comment: str
    reviewer_name: str
    reviewer_email: str
    verified: bool = False
    helpful: int = 0
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

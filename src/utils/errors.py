"""Error handling utilities."""

from typing import Optional


class ListingBuilderError(Exception):
    """Base exception for the listing page builder."""
    pass


class ListingValidationError(ListingBuilderError):
    """Request is missing required fields or carries an unusable slug."""
    pass


class ListingCollisionError(ListingBuilderError):
    """A listing page already exists for this slug."""

    def __init__(self, slug: str, message: Optional[str] = None):
        self.slug = slug
        super().__init__(message or f"Listing with this slug already exists: {slug}")


class ListingPersistenceError(ListingBuilderError):
    """Unexpected storage failure while writing a listing page."""
    pass


class SupabaseError(ListingBuilderError):
    """Supabase operation error."""
    pass

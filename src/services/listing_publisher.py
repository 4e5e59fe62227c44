"""Listing publisher - validate a create request and persist the page exactly once."""

import re
from typing import Optional

from src.models.listing import CreateListingResult
from src.services.listing_store import ListingStore, get_listing_store
from src.utils.errors import (
    ListingBuilderError,
    ListingPersistenceError,
    ListingValidationError,
)
from src.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")


def validate_create_request(slug: Optional[str], code: Optional[str]) -> None:
    """Raise ListingValidationError unless slug and code are usable."""
    if not slug or not code or not str(slug).strip() or not str(code).strip():
        raise ListingValidationError("Missing slug or code")
    if not isinstance(slug, str) or not isinstance(code, str):
        raise ListingValidationError("Slug and code must be strings")
    if not SLUG_PATTERN.fullmatch(slug):
        raise ListingValidationError(f"Invalid slug: {slug!r}")


async def publish_listing(
    slug: Optional[str],
    code: Optional[str],
    store: Optional[ListingStore] = None,
) -> CreateListingResult:
    """
    Persist a generated listing page.

    Raises ListingValidationError for missing or unsafe input,
    ListingCollisionError when the slug is taken (the existing page is left
    alone), and ListingPersistenceError for anything the store did not expect.
    """
    validate_create_request(slug, code)
    store = store or get_listing_store()

    try:
        with log_timing("publish_listing", logger=logger, slug=slug):
            path = await store.put_if_absent(slug, code)
    except ListingBuilderError:
        raise
    except Exception as e:
        raise ListingPersistenceError(f"Unexpected storage failure for {slug}: {e}") from e

    logger.info("Listing page published", slug=slug, storage_path=path)
    return CreateListingResult(success=True, path=path, slug=slug)

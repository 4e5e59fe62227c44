"""Listing builder configuration read from environment variables."""

import os


class ListingConfig:
    """Storage and page-template settings."""

    LISTING_STORAGE_BACKEND = os.environ.get("LISTING_STORAGE_BACKEND", "filesystem").lower()
    LISTINGS_ROOT = os.environ.get("LISTINGS_ROOT", os.path.join("app", "listings"))
    LISTING_PAGES_TABLE = os.environ.get("LISTING_PAGES_TABLE", "listing_pages")

    # Page template values baked into every generated page
    CANONICAL_BASE_URL = os.environ.get(
        "LISTING_CANONICAL_BASE_URL", "https://example.com/listings"
    ).rstrip("/")
    AGENT_JOB_TITLE = os.environ.get("LISTING_AGENT_JOB_TITLE", "Real Estate Agent")
    BROKERAGE_NAME = os.environ.get("LISTING_BROKERAGE_NAME", "Windermere Homes & Estates")
    SCHEDULE_URL = os.environ.get("LISTING_SCHEDULE_URL", "/book")
    REQUEST_REPORT_URL = os.environ.get("LISTING_REQUEST_REPORT_URL", "/report")

    @classmethod
    def listings_root(cls) -> str:
        """Absolute directory under which listing pages are written."""
        return os.path.abspath(cls.LISTINGS_ROOT)

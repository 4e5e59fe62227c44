"""Listing page storage with put-if-absent semantics."""

import os
from abc import ABC, abstractmethod
from typing import Optional

from src.services.supabase_client import (
    get_listing_page,
    insert_listing_page,
    is_duplicate_key_error,
)
from src.utils.errors import ListingCollisionError, ListingPersistenceError, SupabaseError
from src.utils.listing_config import ListingConfig
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

PAGE_FILENAME = "page.tsx"


def listing_page_path(slug: str) -> str:
    """
    Site-relative route path of a listing page.

    Every store reports this path regardless of where it physically keeps
    the page; `FileSystemListingStore.page_file` gives the written file.
    """
    return f"app/listings/{slug}/{PAGE_FILENAME}"


class ListingStore(ABC):
    """Storage port for generated listing pages.

    `put_if_absent` must either write the page or raise
    `ListingCollisionError`; it never overwrites.
    """

    @abstractmethod
    async def exists(self, slug: str) -> bool:
        ...

    @abstractmethod
    async def put_if_absent(self, slug: str, code: str) -> str:
        """Write the page and return its storage path."""
        ...


class FileSystemListingStore(ListingStore):
    """Writes `<root>/<slug>/page.tsx` with exclusive create.

    `put_if_absent` returns the site route path from `listing_page_path`,
    not the file location under `root`.
    """

    def __init__(self, root: Optional[str] = None):
        self.root = os.path.abspath(root) if root else ListingConfig.listings_root()

    def page_file(self, slug: str) -> str:
        return os.path.join(self.root, slug, PAGE_FILENAME)

    async def exists(self, slug: str) -> bool:
        return os.path.exists(self.page_file(slug))

    async def put_if_absent(self, slug: str, code: str) -> str:
        file_path = self.page_file(slug)
        try:
            os.makedirs(os.path.dirname(file_path), exist_ok=True)
            # "x" fails if the file exists, so check and write are one step
            with open(file_path, "x", encoding="utf-8") as f:
                f.write(code)
        except FileExistsError:
            raise ListingCollisionError(slug)
        except OSError as e:
            raise ListingPersistenceError(f"Failed to write {file_path}: {e}") from e

        logger.info("Wrote listing page", slug=slug, file_path=file_path)
        return listing_page_path(slug)


class SupabaseListingStore(ListingStore):
    """Stores pages as rows keyed by slug in the listing pages table."""

    async def exists(self, slug: str) -> bool:
        try:
            return await get_listing_page(slug) is not None
        except SupabaseError as e:
            raise ListingPersistenceError(str(e)) from e

    async def put_if_absent(self, slug: str, code: str) -> str:
        path = listing_page_path(slug)
        try:
            await insert_listing_page(slug, code, path)
        except Exception as e:
            if is_duplicate_key_error(e):
                raise ListingCollisionError(slug) from e
            raise ListingPersistenceError(f"Failed to insert listing page: {e}") from e

        logger.info("Stored listing page", slug=slug, backend="supabase")
        return path


class InMemoryListingStore(ListingStore):
    """Dictionary-backed store for tests and local previews."""

    def __init__(self, pages: Optional[dict[str, str]] = None):
        self.pages: dict[str, str] = dict(pages or {})

    async def exists(self, slug: str) -> bool:
        return slug in self.pages

    async def put_if_absent(self, slug: str, code: str) -> str:
        if slug in self.pages:
            raise ListingCollisionError(slug)
        self.pages[slug] = code
        return listing_page_path(slug)


# Shared across requests in one process so "memory" behaves like a real store
_memory_store: Optional[InMemoryListingStore] = None


def get_listing_store(backend: Optional[str] = None) -> ListingStore:
    """Build the store selected by LISTING_STORAGE_BACKEND."""
    global _memory_store

    backend = (backend or ListingConfig.LISTING_STORAGE_BACKEND).lower()
    if backend == "filesystem":
        return FileSystemListingStore()
    if backend == "supabase":
        return SupabaseListingStore()
    if backend == "memory":
        if _memory_store is None:
            _memory_store = InMemoryListingStore()
        return _memory_store
    raise ValueError(f"Unknown listing storage backend: {backend}")

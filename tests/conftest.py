"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import Mock
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("LISTING_STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client for testing."""
    client = Mock()
    client.table = Mock(return_value=Mock())
    return client


@pytest.fixture
def listing_store():
    """Empty in-memory listing store."""
    from src.services.listing_store import InMemoryListingStore

    return InMemoryListingStore()


@pytest.fixture
def filesystem_store(tmp_path):
    """Filesystem listing store rooted in a temp directory."""
    from src.services.listing_store import FileSystemListingStore

    return FileSystemListingStore(str(tmp_path / "app" / "listings"))


@pytest.fixture
def sample_draft_data():
    """Form data for a fully filled-in listing."""
    return {
        "title": "Stunning Waterfront Estate",
        "streetAddress": "123 Harbor View Dr",
        "city": "Seattle",
        "state": "WA",
        "zip": "98101",
        "price": "1250000",
        "beds": "4",
        "baths": "3.5",
        "livingArea": "3200",
        "lotSize": "8500",
        "yearBuilt": "2005",
        "propertyType": "Single Family",
        "description": "Wake up to sweeping water views.\nEntertain on the deck.",
        "features": ["Private dock", "", "Chef's kitchen", "  ", "Wine cellar", "", "", ""],
        "poi": [
            {"name": "Pike Place Market", "minutes": "12"},
            {"name": "", "minutes": "4"},
            {"name": "Green Lake Park", "minutes": "8"},
        ],
        "agentName": "Brenda Devlin",
        "agentPhone": "206-555-0142",
        "agentEmail": "brenda@example.com",
        "heroPhotoUrl": "https://images.example.com/hero.jpg",
        "galleryPhotos": [
            "https://images.example.com/1.jpg",
            "",
            "https://images.example.com/2.jpg",
            "",
            "",
        ],
        "videoTranscript": "",
    }


@pytest.fixture
def sample_draft(sample_draft_data):
    """ListingDraft built from sample_draft_data."""
    from src.models.listing import ListingDraft

    return ListingDraft.model_validate(sample_draft_data)


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00", real_asyncio=True) as frozen_time:
        yield frozen_time


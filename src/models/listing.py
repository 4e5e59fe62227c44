"""Listing models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


MAX_FEATURES = 8
MAX_POINTS_OF_INTEREST = 3
MAX_GALLERY_PHOTOS = 5


class PointOfInterest(BaseModel):
    """Nearby place entered on the form."""
    name: str = Field(default="", description="Place name")
    minutes: str = Field(default="", description="Minutes away, as entered")


class ListingDraft(BaseModel):
    """Form state for one listing editing session.

    Scalar values are kept as the strings the form produced; blank values
    become zero or are filtered out when the page is generated.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    title: str = Field(default="", description="Property title")

    street_address: str = Field(default="", description="Street address")
    city: str = Field(default="", description="City")
    state: str = Field(default="", description="State")
    zip: str = Field(default="", description="Postal code")

    price: str = Field(default="", description="Asking price")
    beds: str = Field(default="", description="Bedroom count")
    baths: str = Field(default="", description="Bathroom count")
    living_area: str = Field(default="", description="Living area (sq ft)")
    lot_size: str = Field(default="", description="Lot size (sq ft)")
    year_built: str = Field(default="", description="Year built")
    property_type: str = Field(default="Single Family", description="Property category")

    description: str = Field(default="", description="Story intro")
    features: list[str] = Field(
        default_factory=list,
        max_length=MAX_FEATURES,
        description="Key features (5-8 on the form)"
    )
    poi: list[PointOfInterest] = Field(
        default_factory=list,
        max_length=MAX_POINTS_OF_INTEREST,
        description="Points of interest (2-3 on the form)"
    )

    agent_name: str = Field(default="", description="Agent name")
    agent_phone: str = Field(default="", description="Agent phone")
    agent_email: str = Field(default="", description="Agent email")

    hero_photo_url: str = Field(default="", description="Hero image URL")
    gallery_photos: list[str] = Field(
        default_factory=list,
        max_length=MAX_GALLERY_PHOTOS,
        description="Gallery image URLs"
    )

    video_transcript: Optional[str] = Field(None, description="Walkthrough video transcript")


class ListingDocument(BaseModel):
    """Generated page source for a listing."""
    slug: str = Field(..., description="URL-safe identifier derived from the title")
    code: str = Field(..., description="Page module source text")


class CreateListingResult(BaseModel):
    """Outcome of a successful listing page write."""
    success: bool = True
    path: str = Field(..., description="Storage path of the written page")
    slug: str = Field(..., description="Listing slug")

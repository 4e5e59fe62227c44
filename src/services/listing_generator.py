"""Listing page generator - turn a form draft into a slug and page module source."""

import math
import re
from string import Template
from typing import Optional

from src.models.listing import ListingDraft, ListingDocument, PointOfInterest
from src.utils.listing_config import ListingConfig
from src.utils.logging import get_structured_logger, mask_sensitive_data

logger = get_structured_logger(__name__)

DEFAULT_NEIGHBORHOOD = "the Area"

# Generated pages are TSX modules rendered by the shared ListingPage component.
PAGE_TEMPLATE = Template('''import ListingPage from "@/components/ListingPage";

export default function Page() {
  const listing = {
    title: "$title",
    slug: "$slug",
    canonicalUrl: "$canonical_url",
    price: $price,
    address: {
      streetAddress: "$street_address",
      addressLocality: "$city",
      addressRegion: "$state",
      postalCode: "$zip",
      addressCountry: "US",
    },
    propertyType: "$property_type",
    beds: $beds,
    baths: $baths,
    livingAreaSqFt: $living_area,
    lotSizeSqFt: $lot_size,
    yearBuilt: $year_built,
    heroPhoto: {
      url: "$hero_url",
      alt: "$title - Hero Image"
    },
    gallery: $gallery,
    storyIntro: "$story_intro",
    features: $features,
    neighborhoodName: "$neighborhood",
    pointsOfInterest: $points_of_interest,
    agent: {
      name: "$agent_name",
      phone: "$agent_phone",
      email: "$agent_email",
      jobTitle: "$job_title",
      brokerage: { name: "$brokerage" }
    },
    cta: {
      scheduleUrl: "$schedule_url",
      requestReportUrl: "$request_report_url"
    }$transcript
  };

  return <ListingPage listing={listing} />;
}
''')


def generate_slug(title: str) -> str:
    """
    Derive the URL slug for a listing title.

    Lowercases, drops anything that is not an ASCII word character,
    whitespace or hyphen, and joins the remaining words with single hyphens.
    """
    slug = (title or "").lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = slug.replace("_", " ")
    slug = re.sub(r"\s+", "-", slug, flags=re.ASCII)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def escape_string_literal(value: Optional[str], newline: str = " ") -> str:
    """Escape text for a double-quoted JS string literal."""
    text = (value or "").replace("\\", "\\\\").replace('"', '\\"')
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.replace("\n", newline)


def numeric_literal(value: Optional[str]) -> str:
    """Render a form value as a JS number literal; blank or junk becomes 0."""
    text = (value or "").strip().replace(",", "")
    if not text:
        return "0"
    try:
        number = float(text)
    except ValueError:
        return "0"
    if not math.isfinite(number):
        return "0"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def valid_features(draft: ListingDraft) -> list[str]:
    """Non-blank features in form order."""
    return [f for f in draft.features if f.strip()]


def valid_points_of_interest(draft: ListingDraft) -> list[PointOfInterest]:
    """Points of interest with both a name and a travel time."""
    return [p for p in draft.poi if p.name.strip() and p.minutes.strip()]


def valid_gallery(draft: ListingDraft) -> list[str]:
    """Non-blank gallery photo URLs in form order."""
    return [url for url in draft.gallery_photos if url.strip()]


def neighborhood_name(draft: ListingDraft) -> str:
    return draft.city if draft.city.strip() else DEFAULT_NEIGHBORHOOD


def _array_block(items: list[str]) -> str:
    """Lay out array entries one per line inside the listing object."""
    body = ",".join(f"\n      {item}" for item in items)
    return f"[{body}\n    ]"


def generate_listing_code(draft: ListingDraft) -> ListingDocument:
    """
    Build the slug and page module source for a draft.

    Pure and total: blank numbers render as 0, blank list entries are
    dropped, and every string is escaped before it is embedded.
    """
    slug = generate_slug(draft.title)
    title = escape_string_literal(draft.title)

    gallery = [
        f'{{ url: "{escape_string_literal(url)}", alt: "{title} - Photo {idx}" }}'
        for idx, url in enumerate(valid_gallery(draft), start=1)
    ]
    features = [f'"{escape_string_literal(f)}"' for f in valid_features(draft)]
    points_of_interest = [
        f'{{ name: "{escape_string_literal(p.name)}", minutesAway: {numeric_literal(p.minutes)} }}'
        for p in valid_points_of_interest(draft)
    ]

    transcript = ""
    if draft.video_transcript and draft.video_transcript.strip():
        escaped = escape_string_literal(draft.video_transcript, newline="\\n")
        transcript = f',\n    videoTranscript: "{escaped}"'

    code = PAGE_TEMPLATE.substitute(
        title=title,
        slug=slug,
        canonical_url=escape_string_literal(f"{ListingConfig.CANONICAL_BASE_URL}/{slug}"),
        price=numeric_literal(draft.price),
        street_address=escape_string_literal(draft.street_address),
        city=escape_string_literal(draft.city),
        state=escape_string_literal(draft.state),
        zip=escape_string_literal(draft.zip),
        property_type=escape_string_literal(re.sub(r"\s+", "", draft.property_type)),
        beds=numeric_literal(draft.beds),
        baths=numeric_literal(draft.baths),
        living_area=numeric_literal(draft.living_area),
        lot_size=numeric_literal(draft.lot_size),
        year_built=numeric_literal(draft.year_built),
        hero_url=escape_string_literal(draft.hero_photo_url),
        gallery=_array_block(gallery),
        story_intro=escape_string_literal(draft.description),
        features=_array_block(features),
        neighborhood=escape_string_literal(neighborhood_name(draft)),
        points_of_interest=_array_block(points_of_interest),
        agent_name=escape_string_literal(draft.agent_name),
        agent_phone=escape_string_literal(draft.agent_phone),
        agent_email=escape_string_literal(draft.agent_email),
        job_title=escape_string_literal(ListingConfig.AGENT_JOB_TITLE),
        brokerage=escape_string_literal(ListingConfig.BROKERAGE_NAME),
        schedule_url=escape_string_literal(ListingConfig.SCHEDULE_URL),
        request_report_url=escape_string_literal(ListingConfig.REQUEST_REPORT_URL),
        transcript=transcript,
    )

    logger.debug(
        "Generated listing page",
        slug=slug,
        feature_count=len(features),
        poi_count=len(points_of_interest),
        gallery_count=len(gallery),
        has_transcript=bool(transcript),
        agent_email=mask_sensitive_data(draft.agent_email),
    )

    return ListingDocument(slug=slug, code=code)

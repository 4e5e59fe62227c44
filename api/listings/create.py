"""Create-listing endpoint for Vercel: persist a generated listing page."""

from http.server import BaseHTTPRequestHandler
import asyncio
import json
import logging

from src.services.listing_publisher import publish_listing
from src.services.listing_store import get_listing_store
from src.utils.errors import (
    ListingCollisionError,
    ListingPersistenceError,
    ListingValidationError,
)
from src.utils.logging import correlation_context, setup_logging
from src.utils.logging_config import LoggingConfig

setup_logging()
_logger = logging.getLogger(__name__)


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for listing page creation."""

    def _send_json(self, status: int, payload: dict) -> None:
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode('utf-8'))

    def do_POST(self):
        """Handle POST {slug, code}."""
        correlation_id = self.headers.get(LoggingConfig.LOG_CORRELATION_ID_HEADER)
        with correlation_context(correlation_id):
            self._create_listing()

    def _create_listing(self):
        try:
            content_length = int(self.headers.get('Content-Length', 0))
            raw_body = self.rfile.read(content_length) if content_length > 0 else b""

            try:
                body = json.loads(raw_body.decode('utf-8')) if raw_body else {}
            except (UnicodeDecodeError, json.JSONDecodeError):
                self._send_json(400, {"error": "Request body must be JSON"})
                return
            if not isinstance(body, dict):
                self._send_json(400, {"error": "Request body must be a JSON object"})
                return

            slug = body.get("slug")
            code = body.get("code")

            result = asyncio.run(publish_listing(slug, code, store=get_listing_store()))

            _logger.info(f"Listing created: slug={result.slug}, path={result.path}")
            self._send_json(200, result.model_dump())

        except ListingValidationError as e:
            _logger.warning(f"Rejected listing request: {e}")
            self._send_json(400, {"error": str(e)})
        except ListingCollisionError as e:
            _logger.warning(f"Listing slug collision: {e.slug}")
            self._send_json(400, {"error": str(e), "slug": e.slug})
        except ListingPersistenceError as e:
            _logger.error(f"Error creating listing: {e}", exc_info=True)
            self._send_json(500, {"error": "Failed to create listing file"})
        except Exception as e:
            _logger.error(f"Error creating listing: {e}", exc_info=True)
            self._send_json(500, {"error": "Failed to create listing file"})

    def do_GET(self):
        """Handle GET request (health check)."""
        self._send_json(200, {"status": "ok", "endpoint": "listings/create"})

"""Generate-listing endpoint for Vercel: turn form fields into page source."""

from http.server import BaseHTTPRequestHandler
import json
import logging

from pydantic import ValidationError

from src.models.listing import ListingDraft
from src.services.listing_generator import generate_listing_code
from src.utils.logging import correlation_context, setup_logging
from src.utils.logging_config import LoggingConfig

setup_logging()
_logger = logging.getLogger(__name__)


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for listing page previews."""

    def _send_json(self, status: int, payload: dict) -> None:
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode('utf-8'))

    def do_POST(self):
        """Handle POST with the listing form fields; nothing is stored."""
        correlation_id = self.headers.get(LoggingConfig.LOG_CORRELATION_ID_HEADER)
        with correlation_context(correlation_id):
            try:
                content_length = int(self.headers.get('Content-Length', 0))
                raw_body = self.rfile.read(content_length) if content_length > 0 else b"{}"

                try:
                    draft = ListingDraft.model_validate_json(raw_body.decode('utf-8'))
                except UnicodeDecodeError:
                    self._send_json(400, {"error": "Request body must be JSON"})
                    return
                except ValidationError as e:
                    _logger.warning(f"Invalid listing draft: {e.error_count()} errors")
                    self._send_json(400, {
                        "error": "Invalid listing form data",
                        "details": [
                            {"loc": list(err["loc"]), "msg": err["msg"]}
                            for err in e.errors()
                        ],
                    })
                    return

                document = generate_listing_code(draft)
                _logger.info(f"Generated listing page: slug={document.slug}")
                self._send_json(200, document.model_dump())

            except Exception as e:
                _logger.error(f"Error generating listing: {e}", exc_info=True)
                self._send_json(500, {"error": "Failed to generate listing page"})

    def do_GET(self):
        """Handle GET request (health check)."""
        self._send_json(200, {"status": "ok", "endpoint": "listings/generate"})

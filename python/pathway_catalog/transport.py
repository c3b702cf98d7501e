"""
HTTP transport shared by all catalog adapters.

Status handling is the one place where the sources disagree: some report
"no data" as 404. Callers opt into that with `empty_on_404`, everything
else that is not 2xx becomes a TransportError naming the source.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from pathway_catalog.config import CatalogConfig
from pathway_catalog.errors import TransportError

logger = logging.getLogger("PathwayCatalog.HTTP")


class CatalogHttpClient:
    """Thin wrapper around a requests session with catalog error semantics."""

    def __init__(self, config: Optional[CatalogConfig] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or CatalogConfig()
        self.session = session or requests.Session()
        self._headers = {'User-Agent': self.config.user_agent}

    def _send(self, source: str, method: str, url: str,
              empty_on_404: bool = False,
              headers: Optional[Dict[str, str]] = None,
              **kwargs) -> Optional[requests.Response]:
        """Issue one request; None means a documented empty result."""
        logger.debug(f"{source} {method} {url}")
        merged = dict(self._headers)
        if headers:
            merged.update(headers)

        try:
            response = self.session.request(
                method, url, headers=merged, timeout=self.config.timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.error(f"{source} request failed: {e}")
            raise TransportError(source, str(e)) from e

        if response.status_code == 404 and empty_on_404:
            logger.info(f"{source} returned 404 for {url}, treating as empty")
            return None

        if not response.ok:
            logger.error(f"{source} API error: {response.status_code} - {response.reason}")
            raise TransportError(source, response.reason or 'unexpected status',
                                 status=response.status_code)
        return response

    def get_text(self, source: str, url: str, empty_on_404: bool = False, **kwargs) -> str:
        """GET a text body. Empty string for a documented empty result."""
        response = self._send(source, 'GET', url, empty_on_404=empty_on_404, **kwargs)
        if response is None:
            return ''
        return response.text

    def get_json(self, source: str, url: str, empty_on_404: bool = False, **kwargs) -> Any:
        """GET and decode a JSON body. None for a documented empty result."""
        response = self._send(source, 'GET', url, empty_on_404=empty_on_404, **kwargs)
        if response is None:
            return None
        return self._decode(source, response)

    def post_json(self, source: str, url: str, data: str,
                  content_type: str = 'text/plain', empty_on_404: bool = False) -> Any:
        """POST a raw body and decode the JSON answer."""
        response = self._send(
            source, 'POST', url, empty_on_404=empty_on_404, data=data.encode('utf-8'),
            headers={'Content-Type': content_type, 'Accept': 'application/json'},
        )
        if response is None:
            return None
        return self._decode(source, response)

    def _decode(self, source: str, response: requests.Response) -> Any:
        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except (ValueError, json.JSONDecodeError) as e:
            raise TransportError(source, f"invalid JSON body: {e}",
                                 status=response.status_code) from e

    def close(self):
        self.session.close()

"""
Shared fixtures: a fake requests session so no test touches the network.
"""

import json
import threading

import pytest
import requests

from pathway_catalog.cache import TransientCache
from pathway_catalog.config import CatalogConfig
from pathway_catalog.service import PathwayCatalogService
from pathway_catalog.transport import CatalogHttpClient

REASONS = {200: 'OK', 404: 'Not Found', 500: 'Internal Server Error', 503: 'Service Unavailable'}


def make_response(status: int = 200, body=b'', url: str = '') -> requests.Response:
    """Build a real requests.Response without a socket."""
    if isinstance(body, (list, dict)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode('utf-8')
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.reason = REASONS.get(status, 'Error')
    response.encoding = 'utf-8'
    response.url = url
    return response


class FakeSession:
    """
    Stand-in for requests.Session.

    Routes map (METHOD, url) to a status/body pair, an exception instance
    to raise, or a callable returning either.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []
        self._lock = threading.Lock()
        self.closed = False

    def add(self, method: str, url: str, status: int = 200, body=b''):
        self.routes[(method, url)] = (status, body)

    def add_error(self, method: str, url: str, error: Exception):
        self.routes[(method, url)] = error

    def request(self, method, url, headers=None, timeout=None, **kwargs):
        with self._lock:
            self.calls.append({'method': method, 'url': url, 'headers': headers,
                               'timeout': timeout, **kwargs})
        route = self.routes.get((method, url))
        if callable(route) and not isinstance(route, Exception):
            route = route(url, kwargs)
        if route is None:
            return make_response(404, b'', url)
        if isinstance(route, Exception):
            raise route
        status, body = route
        return make_response(status, body, url)

    def count(self, method: str = None, url: str = None) -> int:
        return sum(
            1 for c in self.calls
            if (method is None or c['method'] == method) and (url is None or c['url'] == url)
        )

    def close(self):
        self.closed = True


@pytest.fixture
def config():
    return CatalogConfig(max_lookup_workers=4, debounce_seconds=0.05)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(config, session):
    return CatalogHttpClient(config, session=session)


@pytest.fixture
def service(config, client):
    return PathwayCatalogService(config=config, client=client, cache=TransientCache())


@pytest.fixture
def ctx(service):
    return service.context

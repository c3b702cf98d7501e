"""
Configuration for pathway-catalog.

Settings come from `PATHWAY_CATALOG_*` environment variables. A `.env`
file at the project root is loaded first, so local overrides do not need
to be exported by hand:

    PATHWAY_CATALOG_TIMEOUT=20
    PATHWAY_CATALOG_MAX_LOOKUP_WORKERS=4
    PATHWAY_CATALOG_PROXY_URL=https://corsproxy.io/?
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger("PathwayCatalog.Config")

ENV_PREFIX = "PATHWAY_CATALOG_"
DEFAULT_ENV_PATH = Path(__file__).resolve().parent.parent.parent / '.env'


@dataclass(frozen=True)
class CatalogConfig:
    """Endpoints, timeouts and concurrency limits for every source."""

    # Source endpoints
    reactome_url: str = "https://reactome.org/ContentService"
    kegg_url: str = "https://rest.kegg.jp"
    panther_url: str = "http://pantherdb.org/services/rest"
    smpdb_url: str = "https://smpdb.ca"
    biocyc_url: str = "https://websvc.biocyc.org"

    # Prefix prepended to sources without CORS headers (browser deployments)
    proxy_url: str = ""

    # Transport
    timeout: float = 30.0
    user_agent: str = "PathwayCatalog/1.0"

    # Upper bound on simultaneous KEGG gene lookups
    max_lookup_workers: int = 8

    # Quiet period before a changed identifier set triggers mapping
    debounce_seconds: float = 0.25

    def __post_init__(self):
        if self.max_lookup_workers < 1:
            raise ValueError("max_lookup_workers must be at least 1")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.debounce_seconds < 0:
            raise ValueError("debounce_seconds cannot be negative")

    def proxied(self, url: str) -> str:
        """Prefix a URL with the configured proxy, if any."""
        return f"{self.proxy_url}{url}" if self.proxy_url else url

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> 'CatalogConfig':
        """
        Build a config from the environment.

        Args:
            env_path: Optional .env file, defaults to the project root

        Returns:
            CatalogConfig with overrides applied
        """
        path = env_path or DEFAULT_ENV_PATH
        if path.exists():
            load_dotenv(path, override=False)
            logger.debug(f"Loaded environment from: {path}")

        overrides = {}
        for f in fields(cls):
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None or raw == '':
                continue
            if f.type in (int, 'int'):
                overrides[f.name] = int(raw)
            elif f.type in (float, 'float'):
                overrides[f.name] = float(raw)
            else:
                overrides[f.name] = raw

        return replace(cls(), **overrides)

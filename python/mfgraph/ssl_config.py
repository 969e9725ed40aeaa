"""HTTP session setup for fetching configuration snapshots over HTTPS.

Snapshots are often published by CI behind corporate SSL inspection
proxies whose certificates lack the key usage extensions OpenSSL 3.x
insists on. When such a CA bundle is present (or named explicitly with
MFGRAPH_CA_BUNDLE) the session trusts it with relaxed verify flags.
"""

import os
import ssl
import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.ssl_ import create_urllib3_context

logger = logging.getLogger(__name__)

CA_BUNDLE_ENV = "MFGRAPH_CA_BUNDLE"

CORPORATE_CERT_PATHS = [
    "/Library/Application Support/Netskope/STAgent/data/netskope-cert-bundle.pem",  # Netskope macOS
    "/etc/netskope/cert-bundle.pem",  # Netskope Linux
]


def get_ca_bundle_path() -> Optional[str]:
    """Return the CA bundle to trust, if any: MFGRAPH_CA_BUNDLE first, then known proxy locations."""
    configured = os.environ.get(CA_BUNDLE_ENV)
    if configured:
        if os.path.exists(configured):
            return configured
        logger.warning(f"{CA_BUNDLE_ENV} points to a missing file: {configured}")

    for path in CORPORATE_CERT_PATHS:
        if os.path.exists(path):
            return path
    return None


class CABundleAdapter(HTTPAdapter):
    """HTTPS adapter that loads an extra CA bundle and relaxes strict key usage checks."""

    def __init__(self, cert_path: str, **kwargs):
        self.cert_path = cert_path
        super().__init__(**kwargs)

    def init_poolmanager(self, *args, **kwargs):
        ctx = create_urllib3_context()
        ctx.load_default_certs()
        ctx.load_verify_locations(self.cert_path)
        ctx.verify_flags = ssl.VERIFY_DEFAULT
        logger.debug(f"Loaded CA bundle from {self.cert_path}")

        kwargs['ssl_context'] = ctx
        return super().init_poolmanager(*args, **kwargs)


def create_session() -> requests.Session:
    """Create a requests session for snapshot downloads."""
    from . import __version__

    session = requests.Session()
    session.headers.update({
        "Accept": "application/json",
        "User-Agent": f"mfgraph/{__version__}",
    })

    cert_path = get_ca_bundle_path()
    if cert_path:
        logger.info(f"Using CA bundle {cert_path} for HTTPS requests")
        session.mount('https://', CABundleAdapter(cert_path=cert_path))

    return session

"""
sparql_client.settings
======================

Protocol constants and environment variable names shared across the
package.
"""

from typing import Final

# ──────────────────────────────────────────────────────────────────────────
# Result media types
# ──────────────────────────────────────────────────────────────────────────

# Sesame-specific plain-text ASK answer ("true" / anything else).
RESULT_BOOL: Final[str] = "text/boolean"
RESULT_JSON: Final[str] = "application/sparql-results+json"
RESULT_XML: Final[str] = "application/sparql-results+xml"

# ──────────────────────────────────────────────────────────────────────────
# Request defaults
# ──────────────────────────────────────────────────────────────────────────

DEFAULT_METHOD: Final[str] = "POST"
DEFAULT_QUERY_PARAMETER: Final[str] = "query"

# Attempts per request when the transport reports a connection reset:
# the first try plus two immediate retries.
MAX_ATTEMPTS: Final[int] = 3

DEFAULT_POOL_CONNECTIONS: Final[int] = 1
DEFAULT_POOL_MAXSIZE: Final[int] = 10

# ──────────────────────────────────────────────────────────────────────────
# Environment
# ──────────────────────────────────────────────────────────────────────────

ENV_SPARQL_ENDPOINT_URL: Final[str] = "SPARQL_ENDPOINT_URL"
ENV_SPARQL_UPDATE_ENDPOINT_URL: Final[str] = "SPARQL_UPDATE_ENDPOINT_URL"

# Proxy variables are looked up by URL scheme, e.g. ``https_proxy``.
ENV_PROXY_SUFFIX: Final[str] = "_proxy"

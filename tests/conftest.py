import pytest

try:
    from dotenv import load_dotenv
    from pathlib import Path

    # Load test-time environment variables (e.g. a live SPARQL endpoint)
    load_dotenv(Path(__file__).with_name(".env"), override=True)
except ImportError:
    # Tests run without a .env; live-endpoint tests skip themselves
    # when SPARQL_ENDPOINT_URL is missing.
    pass

# Register shared fixtures from the `tests/fixtures` package.
# - result_documents: SPARQL JSON / XML / RDF response bodies.
# - endpoint_fixtures: clients, flaky sessions, proxy-free environment.
pytest_plugins = [
    "tests.fixtures.result_documents",
    "tests.fixtures.endpoint_fixtures",
]


@pytest.fixture(autouse=True)
def no_proxy_env(monkeypatch):
    """
    Keep proxy variables of the machine running the tests out of
    EndpointConfig defaults.
    """
    for name in ("http_proxy", "https_proxy", "HTTP_PROXY", "HTTPS_PROXY"):
        monkeypatch.delenv(name, raising=False)

"""
Test configuration shared by unit and integration tests.

Unit tests (tests/unit) run offline against an httpx.MockTransport.
Integration tests (tests/integration) call the live Coda API and are
skipped unless CODA_API_TOKEN is set.
"""


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: tests that call the live Coda API")

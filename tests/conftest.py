import pytest

from mock_server import MockEPPServer


@pytest.fixture
def epp_server():
    """Running mock EPP HTTP endpoint."""
    server = MockEPPServer().start()
    yield server
    server.stop()

"""Pytest fixtures for integration tests."""

import time
from collections.abc import Generator

import pytest
import requests
from testcontainers.core.container import DockerContainer

from admiral_cli.core import AdmiralProvider


class AdmiralContainer(DockerContainer):
    """Testcontainer for an Admiral control plane.

    The container image runs without authentication, so no token is needed.
    """

    ADMIRAL_PORT = 8282

    def __init__(self, image: str = "vmware/admiral:latest") -> None:
        super().__init__(image)
        self.with_exposed_ports(self.ADMIRAL_PORT)

    def get_connection_url(self) -> str:
        host = self.get_container_host_ip()
        port = self.get_exposed_port(self.ADMIRAL_PORT)
        return f"http://{host}:{port}"

    def _wait_for_http(self, timeout: int = 180) -> None:
        """Wait until the tag service answers."""
        url = f"{self.get_connection_url()}/resources/tags"
        deadline = time.time() + timeout
        while time.time() < deadline:
            try:
                resp = requests.get(url, timeout=5)
                if resp.status_code == 200:
                    return
            except requests.RequestException:
                pass
            time.sleep(2)
        raise TimeoutError(f"Admiral did not become ready at {url}")

    def start(self) -> "AdmiralContainer":
        super().start()
        self._wait_for_http()
        return self


@pytest.fixture(scope="session")
def admiral_container() -> Generator[AdmiralContainer]:
    """Start an Admiral container for the test session."""
    with AdmiralContainer() as container:
        yield container


@pytest.fixture(scope="session")
def admiral_provider(admiral_container: AdmiralContainer) -> AdmiralProvider:
    """Provide an AdmiralProvider connected to the test container."""
    return AdmiralProvider(url=admiral_container.get_connection_url(), timeout=30)

# tests/conftest.py
import json
from pathlib import Path

import pytest

from bootstrap.config.bootstrap_config import AgentConfig
from bootstrap.context.bootstrap_context_builder import BootstrapContextBuilder

from fakes import RecordingMountAdmin, RecordingNetworkAdmin, StaticTransport

EXAMPLE_DOCUMENT = {
    "netconf": {"ipaddr": "10.0.0.5", "cidr": "24", "gateway": "10.0.0.1"},
    "mounts": [
        {"flags": "", "dev": "root", "mountpoint": "/"},
        {"flags": "-o ro", "dev": "/dev/vdb", "mountpoint": "/data"},
    ],
}


def encode(document) -> bytes:
    return json.dumps(document).encode('utf-8')


@pytest.fixture
def example_document():
    return json.loads(json.dumps(EXAMPLE_DOCUMENT))


@pytest.fixture
def agent_config():
    return AgentConfig()


@pytest.fixture
def network_admin():
    return RecordingNetworkAdmin()


@pytest.fixture
def mount_admin():
    return RecordingMountAdmin()


@pytest.fixture
def make_context(tmp_path: Path, agent_config, network_admin, mount_admin):
    """Build a context with doubles; ``payload`` is what the host will send."""

    def _make(payload: bytes = b'', transport=None, name: str = 'vm_config.json'):
        return (
            BootstrapContextBuilder(agent_config)
            .with_run_id('test_run')
            .with_document_path(tmp_path / name)
            .with_transport(transport or StaticTransport(payload))
            .with_network_admin(network_admin)
            .with_mount_admin(mount_admin)
            .build()
        )

    return _make

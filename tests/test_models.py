# tests/test_models.py
import pytest
from pydantic import ValidationError

from domain.models import ConfigDocument, MountEntry, NetConfig


def test_mount_entry_reads_document_keys():
    entry = MountEntry.model_validate({"flags": "-o ro", "dev": "/dev/vdb", "mountpoint": "/data"})
    assert entry.device == '/dev/vdb'
    assert entry.mount_point == '/data'
    assert entry.command_args() == ['-o', 'ro', '/dev/vdb', '/data']
    assert str(entry) == '-o ro /dev/vdb /data'


def test_mount_entry_with_empty_flags():
    entry = MountEntry.model_validate({"flags": "", "dev": "tmpfs", "mountpoint": "/tmp"})
    assert entry.command_args() == ['tmpfs', '/tmp']


def test_mount_entry_requires_strings():
    with pytest.raises(ValidationError):
        MountEntry.model_validate({"flags": "", "dev": 7, "mountpoint": "/x"})


def test_net_config_keeps_values_verbatim():
    net = NetConfig.model_validate({"ipaddr": "10.0.0.5", "cidr": "24", "gateway": "10.0.0.1"})
    assert net.address_with_prefix == '10.0.0.5/24'


def test_net_config_rejects_numeric_cidr():
    with pytest.raises(ValidationError):
        NetConfig.model_validate({"ipaddr": "10.0.0.5", "cidr": 24, "gateway": "10.0.0.1"})


def test_config_document_from_non_object():
    doc = ConfigDocument.from_decoded([1, 2, 3])
    assert doc.netconf is None and doc.mounts is None


def test_config_document_is_read_only():
    doc = ConfigDocument.from_decoded({"netconf": {}, "mounts": []})
    with pytest.raises(ValidationError):
        doc.mounts = [1]


def test_config_document_keeps_extra_sections():
    doc = ConfigDocument.from_decoded({"netconf": {}, "mounts": [], "hostname": "vm1"})
    assert doc.as_dict()["hostname"] == "vm1"


def test_mount_entry_rejects_flags_that_cannot_be_split():
    with pytest.raises(ValidationError):
        MountEntry.model_validate({"flags": "-o 'ro", "dev": "/dev/vdb", "mountpoint": "/data"})


def test_mount_entry_keeps_quoted_flag_as_one_argument():
    entry = MountEntry.model_validate({"flags": "-o 'uid=0,gid=0'", "dev": "share", "mountpoint": "/mnt"})
    assert entry.command_args() == ['-o', 'uid=0,gid=0', 'share', '/mnt']

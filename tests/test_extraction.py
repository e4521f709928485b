# tests/test_extraction.py
import pytest

from bootstrap.exceptions import (
    ExtractionError,
    MountError,
    MountFailure,
    NetworkConfigError,
    NetworkFailure,
    ValidationError,
)
from bootstrap.extraction import FieldExtractor
from domain.models import ConfigDocument
from infrastructure.decoding.json_decoder import JsonDocumentDecoder

from conftest import encode


@pytest.fixture
def extractor():
    return FieldExtractor(JsonDocumentDecoder())


@pytest.fixture
def document_file(tmp_path, example_document):
    path = tmp_path / 'config.json'
    path.write_bytes(encode(example_document))
    return path


def test_extract_address_with_prefix(extractor, document_file):
    assert extractor.extract(document_file, '.netconf.ipaddr + "/" + .netconf.cidr') == '10.0.0.5/24'


def test_extract_mount_command_line(extractor, document_file):
    expr = '.mounts[1].flags + " " + .mounts[1].dev + " " + .mounts[1].mountpoint'
    assert extractor.extract(document_file, expr) == '-o ro /dev/vdb /data'


def test_extract_empty_string_is_not_an_error(extractor, tmp_path):
    path = tmp_path / 'config.json'
    path.write_text('{"netconf": {"gateway": ""}}')
    assert extractor.extract(path, '.netconf.gateway') == ''


def test_extract_failure_is_extraction_error(extractor, document_file):
    with pytest.raises(ExtractionError) as excinfo:
        extractor.extract(document_file, '.netconf.dns')
    assert excinfo.value.expression == '.netconf.dns'


def test_load_rejects_malformed_document_with_diagnostic(extractor, tmp_path):
    path = tmp_path / 'config.json'
    path.write_text('{"netconf": {"ipaddr": "10.0.0.5",}')
    with pytest.raises(ValidationError) as excinfo:
        extractor.load(path)
    assert 'line 1' in excinfo.value.diagnostic
    assert excinfo.value.path == str(path)


def test_load_missing_file(extractor, tmp_path):
    with pytest.raises(ValidationError):
        extractor.load(tmp_path / 'absent.json')


def test_net_config_from_document(extractor, example_document):
    net = extractor.net_config(ConfigDocument.from_decoded(example_document))
    assert (net.address_with_prefix, net.gateway) == ('10.0.0.5/24', '10.0.0.1')


@pytest.mark.parametrize('netconf, kind', [
    (None, NetworkFailure.MISSING_ADDRESS),
    ({"cidr": "24", "gateway": "10.0.0.1"}, NetworkFailure.MISSING_ADDRESS),
    ({"ipaddr": "10.0.0.5", "gateway": "10.0.0.1"}, NetworkFailure.MISSING_ADDRESS),
    ({"ipaddr": "10.0.0.5", "cidr": "24"}, NetworkFailure.MISSING_GATEWAY),
    ({"ipaddr": "10.0.0.5", "cidr": "24", "gateway": None}, NetworkFailure.MISSING_GATEWAY),
    ({"cidr": "24"}, NetworkFailure.MISSING_ADDRESS),
    ("10.0.0.5/24", NetworkFailure.MISSING_ADDRESS),
])
def test_net_config_failure_kinds(extractor, netconf, kind):
    document = ConfigDocument.from_decoded({"netconf": netconf, "mounts": []})
    with pytest.raises(NetworkConfigError) as excinfo:
        extractor.net_config(document)
    assert excinfo.value.kind is kind


def test_mount_count_and_entry(extractor, example_document):
    document = ConfigDocument.from_decoded(example_document)
    assert extractor.mount_count(document) == 2
    assert extractor.mount_entry(document, 1).mount_point == '/data'


@pytest.mark.parametrize('mounts', [None, {"0": {}}, "none"])
def test_mount_count_unavailable(extractor, mounts):
    document = ConfigDocument.from_decoded({"mounts": mounts})
    with pytest.raises(MountError) as excinfo:
        extractor.mount_count(document)
    assert excinfo.value.kind is MountFailure.COUNT_UNAVAILABLE


def test_mount_entry_unavailable_carries_index(extractor):
    document = ConfigDocument.from_decoded({"mounts": [{}, {"dev": "/dev/vdb"}]})
    with pytest.raises(MountError) as excinfo:
        extractor.mount_entry(document, 1)
    assert excinfo.value.kind is MountFailure.ENTRY_UNAVAILABLE
    assert excinfo.value.index == 1

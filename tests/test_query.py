# tests/test_query.py
import pytest

from domain.query import QueryError, evaluate, render

DOC = {
    "netconf": {"ipaddr": "10.0.0.5", "cidr": "24", "gateway": "10.0.0.1", "empty": "", "nothing": None},
    "mounts": [
        {"flags": "", "dev": "root", "mountpoint": "/"},
        {"flags": "-o ro", "dev": "/dev/vdb", "mountpoint": "/data"},
    ],
}


def test_nested_field_access():
    assert evaluate(DOC, '.netconf.gateway') == '10.0.0.1'


def test_dollar_rooted_path():
    assert evaluate(DOC, '$.netconf.gateway') == '10.0.0.1'


def test_concatenation_builds_address_with_prefix():
    assert evaluate(DOC, '.netconf.ipaddr + "/" + .netconf.cidr') == '10.0.0.5/24'


def test_indexed_entry_composes_mount_arguments():
    expr = '.mounts[1].flags + " " + .mounts[1].dev + " " + .mounts[1].mountpoint'
    assert evaluate(DOC, expr) == '-o ro /dev/vdb /data'


def test_len_of_array():
    assert evaluate(DOC, '.mounts.`len`') == 2


def test_wildcard_returns_every_match():
    assert evaluate(DOC, '.mounts[*].dev') == ['root', '/dev/vdb']


def test_root_returns_document():
    assert evaluate(DOC, '.') == DOC


def test_empty_string_is_a_value():
    assert evaluate(DOC, '.netconf.empty') == ''
    assert evaluate(DOC, '.netconf.empty + .netconf.cidr') == '24'


def test_string_literal_may_contain_plus():
    assert evaluate(DOC, '.netconf.cidr + "+1"') == '24+1'


@pytest.mark.parametrize('expression', [
    '.netconf.missing',
    '.netconf.nothing',
    '.mounts[5]',
    '.netconf.ipaddr.deeper',
    '.mounts + "x"',
    '.mounts[*].dev + "x"',
    '.netconf.ipaddr +',
    '.netconf.ipaddr .netconf.cidr',
    '',
    '.netconf[',
])
def test_failures_raise_query_error(expression):
    with pytest.raises(QueryError):
        evaluate(DOC, expression)


def test_render_is_raw_for_strings():
    assert render('10.0.0.1') == '10.0.0.1'
    assert render(2) == '2'
    assert render({"a": [1]}) == '{"a":[1]}'

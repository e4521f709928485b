# guest_config_agent/domain/query.py
"""
Path expressions over a decoded document.

An expression is one or more terms joined by ``+``. A term is either a
double-quoted string literal or a JSONPath evaluated with ``jsonpath_ng.ext``
(so ``$.mounts.`len``` works). A leading ``.`` is shorthand for ``$.``::

    .netconf.ipaddr + "/" + .netconf.cidr
    $.mounts[1].dev
    .mounts.`len`

A path with no match, or whose match is ``null``, is an evaluation error; an
empty string is a valid result. Concatenation only accepts single strings.
"""
from __future__ import annotations

import json
import re
from typing import Any, List, Tuple

from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse as jsonpath_parse

__all__ = ['QueryError', 'evaluate', 'render']


class QueryError(ValueError):
    """Raised when an expression cannot be parsed or evaluated."""


_TERM_RE = re.compile(
    r'\s*(?:(?P<string>"(?:[^"\\]|\\.)*")|(?P<path>[^"+]+?))\s*(?P<end>\+|$)'
)


def _split_terms(expression: str) -> List[Tuple[str, str]]:
    text = expression.strip()
    if not text:
        raise QueryError('empty expression')

    terms: List[Tuple[str, str]] = []
    pos = 0
    while True:
        match = _TERM_RE.match(text, pos)
        if not match:
            raise QueryError(f'unexpected input at offset {pos}: {text[pos:pos + 16]!r}')
        if match.group('string') is not None:
            terms.append(('string', match.group('string')))
        else:
            terms.append(('path', match.group('path')))
        pos = match.end()
        if match.group('end') != '+':
            return terms
        if pos >= len(text):
            raise QueryError('expression ends with an operator')


def _jsonpath_text(path: str) -> str:
    if re.search(r'\s', path):
        raise QueryError(f'{path!r}: missing operator between paths')
    if path == '.':
        return '$'
    if path.startswith('.['):
        return '$' + path[1:]
    if path.startswith('.'):
        return '$' + path
    return path


def _find(document: Any, path: str) -> Any:
    try:
        compiled = jsonpath_parse(_jsonpath_text(path))
    except JSONPathError as e:
        raise QueryError(f'{path}: {e}') from e

    values = [match.value for match in compiled.find(document)]
    if not values:
        raise QueryError(f'{path}: no match')
    if any(value is None for value in values):
        raise QueryError(f'{path}: value is null')
    return values[0] if len(values) == 1 else values


def evaluate(document: Any, expression: str) -> Any:
    """Evaluate ``expression`` against ``document`` and return the raw value."""
    values = [
        json.loads(text) if kind == 'string' else _find(document, text)
        for kind, text in _split_terms(expression)
    ]
    if len(values) == 1:
        return values[0]
    if not all(isinstance(value, str) for value in values):
        kinds = ', '.join(type(value).__name__ for value in values)
        raise QueryError(f'only strings can be concatenated (got {kinds})')
    return ''.join(values)


def render(value: Any) -> str:
    """Raw-output rendering: strings verbatim, everything else as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(',', ':'))

# pactverify/engine/matching.py
"""
Response matching.

Compares a live provider response with the response recorded in the pact,
following the Pact "be liberal in what you accept" rules for responses:

- status must be equal
- every expected header must be present with an equal value; extra headers are fine
- JSON objects: every expected key must match; extra keys in the actual body are fine
- JSON arrays: same length, element-wise match
- scalars and plain-text bodies: equality
- no expected body: the body is not checked

Matching rules (regex, type matchers) are not interpreted.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterator, List, Mapping, Tuple

import httpx

from pactverify.contracts.pact import NO_BODY, ExpectedResponse
from pactverify.core.outcome import Mismatch

_COMMA = re.compile(r"\s*,\s*")

_MISSING: Any = object()


def compare_response(
    description: str,
    expected: ExpectedResponse,
    actual: httpx.Response,
) -> List[Mismatch]:
    """
    Compare an actual response with the expected one.

    Returns:
        One Mismatch per difference, empty when the response satisfies the pact.
    """
    mismatches: List[Mismatch] = []

    if actual.status_code != expected.status:
        mismatches.append(
            Mismatch(
                interaction=description,
                kind="status",
                path="status",
                expected=expected.status,
                actual=actual.status_code,
                message=f"expected status {expected.status} but was {actual.status_code}",
            )
        )

    mismatches.extend(compare_headers(description, expected.headers, actual.headers))

    if expected.body is not NO_BODY:
        mismatches.extend(_compare_body_of(description, expected.body, actual))

    return mismatches


def compare_headers(
    description: str,
    expected: Mapping[str, str],
    actual: Mapping[str, str],
) -> List[Mismatch]:
    """Check expected headers; ``actual`` must look names up case-insensitively."""
    mismatches = []
    for name, value in expected.items():
        got = actual.get(name)
        if got is None:
            mismatches.append(
                Mismatch(
                    interaction=description,
                    kind="header",
                    path=f"headers.{name}",
                    expected=value,
                    actual=None,
                    message=f"expected header '{name}' but it was missing",
                )
            )
        elif _normalise_header(got) != _normalise_header(value):
            mismatches.append(
                Mismatch(
                    interaction=description,
                    kind="header",
                    path=f"headers.{name}",
                    expected=value,
                    actual=got,
                    message=f"expected header '{name}' to be '{value}' but was '{got}'",
                )
            )
    return mismatches


def _normalise_header(value: str) -> str:
    return _COMMA.sub(",", value.strip())


def _compare_body_of(description: str, expected: Any, actual: httpx.Response) -> List[Mismatch]:
    is_json = "json" in actual.headers.get("content-type", "").lower()

    if isinstance(expected, str) and not is_json:
        if actual.text == expected:
            return []
        return [_body_mismatch(description, "$", expected, actual.text, "body text differs")]

    if not actual.content:
        return [_body_mismatch(description, "$", expected, None, "expected a body but it was empty")]

    try:
        actual_body = json.loads(actual.text)
    except ValueError:
        return [
            _body_mismatch(description, "$", expected, actual.text, "expected a JSON body but it was not valid JSON")
        ]

    return [
        _body_mismatch(description, path, want, got, message)
        for path, want, got, message in compare_body(expected, actual_body)
    ]


def _body_mismatch(description: str, path: str, expected: Any, actual: Any, message: str) -> Mismatch:
    return Mismatch(
        interaction=description,
        kind="body",
        path=path,
        expected=expected,
        actual=actual,
        message=f"{path}: {message}",
    )


def compare_body(expected: Any, actual: Any, path: str = "$") -> Iterator[Tuple[str, Any, Any, str]]:
    """
    Yield ``(path, expected, actual, message)`` for every difference in a JSON body.

    Examples:
        >>> list(compare_body({"id": 1, "name": "a"}, {"id": 1, "name": "b", "extra": 0}))
        [('$.name', 'a', 'b', "expected 'a' but was 'b'")]
    """
    if isinstance(expected, dict):
        if not isinstance(actual, dict):
            yield path, expected, actual, f"expected an object but was {_json_type(actual)}"
            return
        for key, want in expected.items():
            child = f"{path}.{key}"
            got = actual.get(key, _MISSING)
            if got is _MISSING:
                yield child, want, None, "expected key but it was missing"
            else:
                yield from compare_body(want, got, child)
        return

    if isinstance(expected, list):
        if not isinstance(actual, list):
            yield path, expected, actual, f"expected an array but was {_json_type(actual)}"
            return
        if len(expected) != len(actual):
            yield path, expected, actual, (
                f"expected an array of {len(expected)} item(s) but it had {len(actual)}"
            )
            return
        for index, (want, got) in enumerate(zip(expected, actual)):
            yield from compare_body(want, got, f"{path}[{index}]")
        return

    if _json_type(expected) != _json_type(actual) or expected != actual:
        yield path, expected, actual, f"expected {expected!r} but was {actual!r}"


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "a boolean"
    if isinstance(value, (int, float)):
        return "a number"
    if isinstance(value, str):
        return "a string"
    if isinstance(value, list):
        return "an array"
    if isinstance(value, dict):
        return "an object"
    return type(value).__name__

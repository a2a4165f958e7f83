# tests/unit/test_matching.py
"""Test response matching."""

import httpx

from pactverify.contracts.pact import ExpectedResponse
from pactverify.engine.matching import compare_body, compare_response

JSON = {"Content-Type": "application/json; charset=utf-8"}


def test_identical_response_matches():
    expected = ExpectedResponse(200, {"Content-Type": "application/json; charset=utf-8"}, {"id": 1})
    actual = httpx.Response(200, json={"id": 1}, headers=JSON)

    assert compare_response("get item", expected, actual) == []


def test_extra_keys_in_response_are_allowed():
    expected = ExpectedResponse(200, body={"id": 1})
    actual = httpx.Response(200, json={"id": 1, "name": "extra"})

    assert compare_response("get item", expected, actual) == []


def test_status_mismatch():
    expected = ExpectedResponse(200)
    actual = httpx.Response(500)

    (mismatch,) = compare_response("get item", expected, actual)

    assert mismatch.kind == "status"
    assert mismatch.expected == 200
    assert mismatch.actual == 500
    assert mismatch.interaction == "get item"


def test_header_mismatch_and_missing_header():
    expected = ExpectedResponse(200, {"Content-Type": "application/json", "X-Trace": "abc"})
    actual = httpx.Response(200, headers={"content-type": "text/html"})

    mismatches = compare_response("get item", expected, actual)

    assert [m.path for m in mismatches] == ["headers.Content-Type", "headers.X-Trace"]
    assert mismatches[1].actual is None


def test_header_value_whitespace_after_commas_is_ignored():
    expected = ExpectedResponse(200, {"Allow": "GET, POST"})
    actual = httpx.Response(200, headers={"allow": "GET,POST"})

    assert compare_response("options", expected, actual) == []


def test_body_difference_reports_path():
    expected = ExpectedResponse(200, body=[{"eventId": 1, "eventType": "SearchView"}])
    actual = httpx.Response(200, json=[{"eventId": 1, "eventType": "DetailsView"}])

    (mismatch,) = compare_response("list events", expected, actual)

    assert mismatch.kind == "body"
    assert mismatch.path == "$[0].eventType"
    assert mismatch.expected == "SearchView"
    assert mismatch.actual == "DetailsView"


def test_array_length_must_match():
    mismatches = list(compare_body([1, 2], [1, 2, 3]))

    assert len(mismatches) == 1
    assert "2 item(s)" in mismatches[0][3]


def test_missing_key_and_type_differences():
    differences = list(compare_body({"a": 1, "b": "x", "c": True}, {"a": "1", "c": 1}))

    assert [path for path, *_ in differences] == ["$.a", "$.b", "$.c"]


def test_numbers_compare_by_value():
    assert list(compare_body({"price": 1.0}, {"price": 1})) == []


def test_plain_text_body():
    expected = ExpectedResponse(200, body="pong")

    assert compare_response("ping", expected, httpx.Response(200, text="pong")) == []
    (mismatch,) = compare_response("ping", expected, httpx.Response(200, text="pang"))
    assert mismatch.message == "$: body text differs"


def test_invalid_json_body():
    expected = ExpectedResponse(200, body={"id": 1})
    actual = httpx.Response(200, content=b"<html>", headers={"Content-Type": "application/json"})

    (mismatch,) = compare_response("get item", expected, actual)

    assert "not valid JSON" in mismatch.message


def test_empty_body_when_one_expected():
    (mismatch,) = compare_response("get item", ExpectedResponse(200, body={"id": 1}), httpx.Response(200))

    assert mismatch.actual is None


def test_unspecified_body_is_not_checked():
    assert compare_response("get item", ExpectedResponse(204), httpx.Response(204, text="anything")) == []

# tests/test_result_negotiator.py
import json

import pytest

from sitebuilder.services.generation_types import EdgeFunction, GenerationResult
from sitebuilder.services.result_negotiator import Fallback, Structured, negotiate, parse_structured

HTML = "<html><body>Hello</body></html>"


@pytest.mark.parametrize(
    "raw",
    [
        HTML,
        json.dumps({"html": HTML, "hasBackend": True}),
        "",
        "{not json",
    ],
)
def test_markup_only_never_parses(raw):
    result = negotiate(raw, include_backend=False)
    assert result == GenerationResult(markup=raw, has_backend=False)
    assert result.backend_code is None
    assert result.edge_functions is None


def test_structured_payload_with_all_fields():
    raw = json.dumps({
        "html": HTML,
        "hasBackend": True,
        "backendCode": "serve(() => new Response('ok'))",
        "databaseSchema": "CREATE TABLE todos(id int);",
        "edgeFunctions": [{"name": "list-todos", "description": "Lists todos"}],
    })
    result = negotiate(raw, include_backend=True)

    assert result.markup == HTML
    assert result.has_backend is True
    assert result.backend_code == "serve(() => new Response('ok'))"
    assert result.database_schema == "CREATE TABLE todos(id int);"
    assert result.edge_functions == (EdgeFunction("list-todos", "Lists todos"),)


def test_absent_optional_fields_become_none():
    result = negotiate(json.dumps({"html": HTML}), include_backend=True)
    assert result == GenerationResult(markup=HTML, has_backend=False)


@pytest.mark.parametrize(
    "raw",
    [
        HTML,
        '{"html": "<html>',                              # truncated
        "```json\n" + json.dumps({"html": HTML}) + "\n```",  # fenced
        json.dumps([{"html": HTML}]),                     # not an object
        json.dumps({"html": ""}),                         # empty html
        json.dumps({"html": 42}),                         # non-string html
        json.dumps({"hasBackend": True, "databaseSchema": "CREATE TABLE t();"}),
        "",
    ],
)
def test_unusable_structured_output_falls_back_to_raw_text(raw):
    result = negotiate(raw, include_backend=True)
    assert result == GenerationResult(markup=raw, has_backend=False)


def test_parse_step_is_tagged():
    assert isinstance(parse_structured(json.dumps({"html": HTML})), Structured)
    fallback = parse_structured("<html>")
    assert isinstance(fallback, Fallback)
    assert fallback.reason


def test_negotiate_is_deterministic():
    raw = json.dumps({"html": HTML, "hasBackend": True, "edgeFunctions": [{"name": "a", "description": "b"}]})
    assert negotiate(raw, True) == negotiate(raw, True)
    assert negotiate(HTML, True) == negotiate(HTML, True)


def test_malformed_edge_function_entries_are_skipped():
    raw = json.dumps({"html": HTML, "hasBackend": True, "edgeFunctions": [{"name": "ok"}, "junk", 3]})
    result = negotiate(raw, True)
    assert result.edge_functions == (EdgeFunction("ok", ""),)

"""Tests for request snapshots and content parsing."""

import pytest

from request_manager.config import Settings
from request_manager.exceptions import SmartProblemException
from request_manager.request.content import RequestData, expand_brackets, parse_request_content


class TestExpandBrackets:
    def test_plain_keys(self) -> None:
        assert expand_brackets([("a", "1"), ("b", "2")]) == {"a": "1", "b": "2"}

    def test_nested_mapping(self) -> None:
        items = [("filters[status]", "open"), ("filters[owner][id]", "7")]
        assert expand_brackets(items) == {"filters": {"status": "open", "owner": {"id": "7"}}}

    def test_append_lists(self) -> None:
        items = [("tags[]", "a"), ("tags[]", "b")]
        assert expand_brackets(items) == {"tags": ["a", "b"]}


class TestParseRequestContent:
    def test_json_object(self) -> None:
        data = RequestData(method="POST", content_type="application/json; charset=utf-8", body=b'{"a": [1, 2]}')
        assert parse_request_content(data) == {"a": [1, 2]}

    def test_vendor_json_suffix(self) -> None:
        data = RequestData(method="PATCH", content_type="application/merge-patch+json", body=b'{"a": 1}')
        assert parse_request_content(data) == {"a": 1}

    @pytest.mark.parametrize("body", [b"{not json", b"", b"null", b"[1, 2]", b"\xff\xfe"])
    def test_invalid_json(self, body: bytes) -> None:
        data = RequestData(method="POST", content_type="application/json", body=body)

        with pytest.raises(SmartProblemException) as exc_info:
            parse_request_content(data)

        problem = exc_info.value.problem
        assert problem.status == 400
        assert problem.type == "invalid_body_format"
        assert problem.title == "Invalid JSON format sent."

    def test_get_uses_query(self) -> None:
        data = RequestData(method="GET", query={"q": "x"}, form={"f": "y"})
        assert parse_request_content(data) == {"q": "x"}

    def test_post_uses_form(self) -> None:
        data = RequestData(method="POST", content_type="application/x-www-form-urlencoded", query={"q": "x"}, form={"f": "y"})
        assert parse_request_content(data) == {"f": "y"}

    def test_settings_override(self) -> None:
        settings = Settings(JSON_CONTENT_TYPES=["text/plain"], READ_ONLY_METHODS=["GET"])
        data = RequestData(method="POST", content_type="text/plain", body=b'{"a": 1}')
        assert parse_request_content(data, settings) == {"a": 1}


class TestRequestDataGet:
    def test_lookup_order(self) -> None:
        data = RequestData(attributes={"id": "path"}, query={"id": "query", "q": 1}, form={"id": "form", "f": 2})
        assert data.get("id") == "path"
        assert data.get("q") == 1
        assert data.get("f") == 2
        assert data.get("missing", "default") == "default"

"""
Unit tests for the Content-Type validation helpers.
"""

import pytest
from starlette.datastructures import Headers

from middleware.content_type import has_request_body, is_json_content_type


class TestHasRequestBody:

    @pytest.mark.parametrize(
        "raw",
        [
            {"content-length": "12"},
            {"transfer-encoding": "chunked"},
            {"transfer-encoding": "gzip, Chunked"},
        ],
    )
    def test_body_announced(self, raw):
        assert has_request_body(Headers(raw))

    @pytest.mark.parametrize(
        "raw",
        [
            {},
            {"content-length": "0"},
            {"transfer-encoding": "identity"},
        ],
    )
    def test_no_body(self, raw):
        assert not has_request_body(Headers(raw))


class TestIsJsonContentType:

    @pytest.mark.parametrize(
        "value", ["application/json", "Application/JSON; charset=utf-8"]
    )
    def test_json_accepted(self, value):
        assert is_json_content_type(value)

    @pytest.mark.parametrize("value", [None, "", "text/plain", "multipart/form-data"])
    def test_other_types_rejected(self, value):
        assert not is_json_content_type(value)

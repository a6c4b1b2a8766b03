import pytest
from pydantic import ValidationError

from apidoc_composer.composer.assembler import FORM_CONTENT_TYPE, assemble, encode_params, join_url
from apidoc_composer.composer.fields import FieldKind, FieldSet


def _fields(*specs: tuple[FieldKind, str, str]) -> FieldSet:
    fields = FieldSet()
    for kind, name, value in specs:
        fields.add(kind, name=name, value=value)
    return fields


class TestJoinUrl:
    def test_no_double_slash(self):
        assert join_url("http://x.com/", "/a/b") == "http://x.com/a/b"

    def test_slash_inserted(self):
        assert join_url("http://x.com", "a/b") == "http://x.com/a/b"

    def test_already_single_slash(self):
        assert join_url("http://x.com", "/a/b") == "http://x.com/a/b"
        assert join_url("http://x.com/", "a/b") == "http://x.com/a/b"


class TestEncodeParams:
    def test_bracket_keys_percent_encoded(self):
        assert encode_params({"meta[color]": "dark red"}) == "meta%5Bcolor%5D=dark%20red"


class TestAssemble:
    def test_buckets_by_kind(self):
        fields = _fields(
            (FieldKind.BODY, "name", "widget"),
            (FieldKind.QUERY, "page", "2"),
            (FieldKind.HEADER, "X-Token", "abc"),
        )
        descriptor = assemble("post", "http://x.com", "/items", fields.ordered())

        assert descriptor.method == "POST"
        assert descriptor.headers == {"content-type": FORM_CONTENT_TYPE, "X-Token": "abc"}
        assert descriptor.query == {"page": "2"}
        assert descriptor.body == {"name": "widget"}
        assert descriptor.query_string == "page=2"
        assert descriptor.body_string == "name=widget"

    def test_non_get_always_has_content_type(self):
        descriptor = assemble("DELETE", "", "/items/1", [])
        assert descriptor.headers == {"content-type": FORM_CONTENT_TYPE}
        assert descriptor.body == {}
        assert descriptor.body_string == ""

    def test_get_has_no_content_type(self):
        descriptor = assemble("GET", "", "/items", [])
        assert descriptor.headers == {}

    def test_consumed_empty_and_removed_fields_excluded(self):
        fields = _fields(
            (FieldKind.BODY, "id", "7"),
            (FieldKind.BODY, "note", ""),
            (FieldKind.BODY, "gone", "x"),
        )
        fields.remove(fields.find("gone").id)
        descriptor = assemble("POST", "", "/items/:id", fields.ordered())

        assert descriptor.path == "/items/7"
        assert descriptor.body == {}

    def test_last_header_wins(self):
        fields = _fields(
            (FieldKind.HEADER, "content-type", "text/plain"),
            (FieldKind.HEADER, "X-A", "1"),
            (FieldKind.HEADER, "X-A", "2"),
        )
        descriptor = assemble("POST", "", "/", fields.ordered())
        assert descriptor.headers == {"content-type": "text/plain", "X-A": "2"}

    def test_deterministic(self):
        fields = _fields((FieldKind.QUERY, "a[b]", "1"), (FieldKind.HEADER, "X", "y"))
        first = assemble("GET", "http://x.com", "/q", fields.ordered())
        second = assemble("GET", "http://x.com", "/q", fields.ordered())
        assert first == second

    def test_full_url(self):
        fields = _fields((FieldKind.QUERY, "a[b]", "1"))
        descriptor = assemble("GET", "http://x.com/", "/q", fields.ordered())
        assert descriptor.url == "http://x.com/q"
        assert descriptor.full_url == "http://x.com/q?a%5Bb%5D=1"

    def test_descriptor_is_frozen(self):
        descriptor = assemble("GET", "", "/", [])
        with pytest.raises(ValidationError):
            descriptor.path = "/other"

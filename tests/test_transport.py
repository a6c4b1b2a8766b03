import httpx
import pytest

from apidoc_composer.composer.assembler import assemble
from apidoc_composer.composer.fields import FieldKind, FieldSet
from apidoc_composer.composer.transport import Outcome, TransportExecutor


def _descriptor(method: str, host: str, template: str, *specs: tuple[FieldKind, str, str]):
    fields = FieldSet()
    for kind, name, value in specs:
        fields.add(kind, name=name, value=value)
    return assemble(method, host, template, fields.ordered())


@pytest.mark.asyncio
async def test_send_encodes_query_headers_and_body():
    captured = {}

    async def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["url"] = str(request.url)
        captured["headers"] = dict(request.headers)
        captured["body"] = request.content.decode()
        return httpx.Response(201, json={"id": 7})

    descriptor = _descriptor(
        "POST", "https://example.test/", "/items",
        (FieldKind.HEADER, "X-Token", "abc"),
        (FieldKind.QUERY, "meta[tag]", "a b"),
        (FieldKind.BODY, "name", "widget"),
    )
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        outcome = await TransportExecutor(client=client).send(descriptor)

    assert captured["method"] == "POST"
    assert captured["url"] == "https://example.test/items?meta%5Btag%5D=a%20b"
    assert captured["headers"]["content-type"] == "application/x-www-form-urlencoded"
    assert captured["headers"]["x-token"] == "abc"
    assert captured["body"] == "name=widget"
    assert outcome.ok is True
    assert outcome.status_code == 201
    assert outcome.data == {"id": 7}


@pytest.mark.asyncio
async def test_send_without_body_sends_no_content():
    captured = {}

    async def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = request.content
        return httpx.Response(200, text="deleted")

    descriptor = _descriptor("DELETE", "https://example.test", "/items/1")
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        outcome = await TransportExecutor(client=client).send(descriptor)

    assert captured["body"] == b""
    assert outcome.data is None
    assert outcome.display() == "deleted"


@pytest.mark.asyncio
async def test_http_error_captured_as_outcome():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "UserNotFound"})

    descriptor = _descriptor("GET", "https://example.test", "/user/1")
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        outcome = await TransportExecutor(client=client).send(descriptor)

    assert outcome.ok is False
    assert outcome.status_code == 404
    assert outcome.error == "Request failed with status code 404"
    assert outcome.display().startswith("Request failed with status code 404\n{")


@pytest.mark.asyncio
async def test_network_error_captured_as_outcome():
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    descriptor = _descriptor("GET", "https://example.test", "/user/1")
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        outcome = await TransportExecutor(client=client).send(descriptor)

    assert outcome.ok is False
    assert outcome.status_code is None
    assert outcome.error == "connection refused"
    assert outcome.display() == "connection refused"


@pytest.mark.asyncio
async def test_missing_host_captured_as_outcome():
    descriptor = _descriptor("GET", "", "/user/1")
    outcome = await TransportExecutor().send(descriptor)

    assert outcome.ok is False
    assert outcome.error


@pytest.mark.asyncio
@pytest.mark.parametrize("header", [("X-Name", "café"), ("Café", "1")])
async def test_non_ascii_header_captured_as_outcome(header):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200)

    descriptor = _descriptor("GET", "https://example.test", "/user/1", (FieldKind.HEADER, *header))
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        outcome = await TransportExecutor(client=client).send(descriptor)

    assert outcome.ok is False
    assert outcome.status_code is None
    assert outcome.error


class TestOutcomeDisplay:
    def test_json_pretty_printed(self):
        outcome = Outcome(ok=True, status_code=200, data={"a": 1}, text='{"a":1}')
        assert outcome.display() == '{\n  "a": 1\n}'

    def test_empty_success(self):
        assert Outcome(ok=True, status_code=204).display() == ""

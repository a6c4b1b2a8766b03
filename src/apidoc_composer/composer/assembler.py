"""Builds the immutable request descriptor from the active fields."""

from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict

from apidoc_composer.composer.fields import Field, FieldKind
from apidoc_composer.composer.templater import resolve_path

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class RequestDescriptor(BaseModel):
    """A fully resolved request.

    ``query_string`` and ``body_string`` are encoded once, at assembly
    time; the transport and both text renderings read them from here.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    host: str
    path: str
    headers: dict[str, str]
    query: dict[str, str]
    body: dict[str, str]
    query_string: str = ""
    body_string: str = ""

    @property
    def url(self) -> str:
        return join_url(self.host, self.path)

    @property
    def full_url(self) -> str:
        """``url`` with the encoded query appended."""
        if not self.query_string:
            return self.url
        return f"{self.url}?{self.query_string}"


def join_url(host: str, path: str) -> str:
    """Join host and path with exactly one slash between them."""
    if host.endswith("/"):
        return host + path.removeprefix("/")
    if path.startswith("/"):
        return host + path
    return f"{host}/{path}"


def encode_params(params: dict[str, str]) -> str:
    """Percent-encode a flat map whose keys may use bracket notation (``a[b][c]``)."""
    return urlencode(params, quote_via=quote)


def assemble(method: str, host: str, template: str, fields: list[Field]) -> RequestDescriptor:
    """Resolve the path and bucket the remaining fields into headers, query and body.

    ``fields`` is expected in :meth:`FieldSet.ordered` order. No side effects:
    the same inputs always give an equal descriptor.
    """
    method = method.upper()
    resolved = resolve_path(template, fields)

    headers: dict[str, str] = {}
    query: dict[str, str] = {}
    body: dict[str, str] = {}

    if method != "GET":
        headers["content-type"] = FORM_CONTENT_TYPE

    buckets = {
        FieldKind.HEADER: headers,
        FieldKind.QUERY: query,
        FieldKind.BODY: body,
    }
    for f in fields:
        if f.removed or not f.value or f.id in resolved.consumed:
            continue
        buckets[f.kind][f.name] = f.value

    return RequestDescriptor(
        method=method,
        host=host,
        path=resolved.path,
        headers=headers,
        query=query,
        body=body,
        query_string=encode_params(query) if query else "",
        body_string=encode_params(body) if body else "",
    )

"""Composer session: the active endpoint, its fields, and submission."""

from dataclasses import dataclass

from apidoc_composer.catalog.apidoc import Catalog
from apidoc_composer.catalog.base import Endpoint
from apidoc_composer.composer.assembler import RequestDescriptor, assemble
from apidoc_composer.composer.fields import FieldSet
from apidoc_composer.composer.representations import render_call, render_curl
from apidoc_composer.composer.transport import Outcome, TransportExecutor
from apidoc_composer.logging import get_logger

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Submission:
    descriptor: RequestDescriptor
    outcome: Outcome
    call_text: str
    curl_text: str


class Composer:
    """Composes and sends requests for endpoints of an injected catalog.

    Submits are not serialized: each one snapshots the fields when it
    starts, and whichever finishes last is kept as ``last_submission``.
    """

    def __init__(self, catalog: Catalog, host: str = "", executor: TransportExecutor | None = None):
        self.catalog = catalog
        self.host = host
        self.executor = executor or TransportExecutor()
        self.fields = FieldSet()
        self.endpoint: Endpoint | None = None
        self.last_submission: Submission | None = None

    def select(self, endpoint: Endpoint) -> None:
        self.endpoint = endpoint
        self.fields.seed(endpoint)
        _LOGGER.debug("endpoint_selected", group=endpoint.group, name=endpoint.name, fields=len(self.fields))

    def select_by_name(self, group: str, name: str) -> Endpoint:
        endpoint = self.catalog.find(group, name)
        self.select(endpoint)
        return endpoint

    def build(self) -> RequestDescriptor:
        """Assemble a fresh descriptor from the current field state."""
        if self.endpoint is None:
            raise RuntimeError("No endpoint selected")
        return assemble(self.endpoint.method, self.host, self.endpoint.url, self.fields.ordered())

    async def submit(self) -> Submission:
        descriptor = self.build()
        outcome = await self.executor.send(descriptor)

        submission = Submission(
            descriptor=descriptor,
            outcome=outcome,
            call_text=render_call(descriptor),
            curl_text=render_curl(descriptor),
        )
        self.last_submission = submission

        _LOGGER.info(
            "submission_finished",
            method=descriptor.method,
            url=descriptor.url,
            ok=outcome.ok,
            status_code=outcome.status_code,
        )
        return submission

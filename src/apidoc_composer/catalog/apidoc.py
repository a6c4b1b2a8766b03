"""apidoc catalog reader.

Loads ``api_data.json`` (the endpoint list) and ``api_project.json``
(project metadata) into an immutable :class:`Catalog` that is passed to
the composer at construction.
"""

import json
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from apidoc_composer.catalog.base import Endpoint, Project
from apidoc_composer.logging import get_logger

DATA_FILE = "api_data.json"
PROJECT_FILE = "api_project.json"

_LOGGER = get_logger(__name__)


class CatalogError(Exception):
    """The catalog could not be read or does not look like apidoc output."""


class EndpointNotFound(LookupError):
    """No endpoint with the requested group and name."""


class Catalog:
    """Read-only view over a loaded endpoint list and its project record."""

    def __init__(self, endpoints: list[Endpoint], project: Project | None = None):
        self._endpoints = tuple(endpoints)
        self._project = project or Project()

    @property
    def endpoints(self) -> tuple[Endpoint, ...]:
        return self._endpoints

    @property
    def project(self) -> Project:
        return self._project

    def __len__(self) -> int:
        return len(self._endpoints)

    def groups(self) -> list[str]:
        """Distinct group names in first-seen order."""
        return list(dict.fromkeys(ep.group for ep in self._endpoints))

    def by_group(self, endpoints: list[Endpoint] | None = None) -> dict[str, list[Endpoint]]:
        """Group endpoints (all of them by default) by their group name."""
        groups: dict[str, list[Endpoint]] = {}
        for ep in self._endpoints if endpoints is None else endpoints:
            groups.setdefault(ep.group, []).append(ep)
        return groups

    def first(self) -> Endpoint | None:
        return self._endpoints[0] if self._endpoints else None

    def find(self, group: str, name: str) -> Endpoint:
        for ep in self._endpoints:
            if ep.group == group and ep.name == name:
                return ep
        raise EndpointNotFound(f"No endpoint named {name!r} in group {group!r}")

    def search(self, text: str) -> list[Endpoint]:
        """Endpoints whose name, title, group, url or parameters contain ``text``."""
        if not text:
            return list(self._endpoints)
        return [ep for ep in self._endpoints if _matches(ep, text)]

    def locate(self, anchor: str) -> Endpoint | list[Endpoint] | None:
        """Resolve a ``#api-<group>-<name>`` deep link.

        A full anchor resolves to its endpoint, a group-only anchor
        (``#api-<group>``) to the group's endpoints. Anything else, or an
        anchor naming an unknown endpoint, resolves to None.
        """
        pieces = re.split(r"[#-]", anchor)
        if len(pieces) < 3 or pieces[1] != "api":
            return None

        group = pieces[2]
        name = pieces[3] if len(pieces) > 3 else ""
        if not name:
            return [ep for ep in self._endpoints if ep.group == group]

        try:
            return self.find(group, name)
        except EndpointNotFound:
            return None


def _matches(ep: Endpoint, text: str) -> bool:
    if text in ep.name or text in ep.title or text in ep.group or text in ep.url:
        return True
    if ep.parameter is None:
        return False
    return any(
        text in param.field or text in param.description
        for param in ep.parameter.labelled("Parameter")
    )


def load_catalog(path: Path) -> Catalog:
    """Load a catalog from an apidoc output directory or a single data file."""
    if path.is_dir():
        data_path = path / DATA_FILE
        project_path = path / PROJECT_FILE
    else:
        data_path = path
        project_path = path.with_name(PROJECT_FILE)

    if not data_path.exists():
        raise CatalogError(f"Endpoint data not found: {data_path}")

    endpoints = parse_endpoints(_read_document(data_path))
    project = parse_project(_read_document(project_path)) if project_path.exists() else Project()

    _LOGGER.info("catalog_loaded", path=str(data_path), endpoints=len(endpoints))
    return Catalog(endpoints, project)


def parse_endpoints(data: object) -> list[Endpoint]:
    if not isinstance(data, list):
        raise CatalogError("Endpoint data must be a list of endpoint records")
    try:
        return [Endpoint.model_validate(item) for item in data]
    except ValidationError as e:
        raise CatalogError(f"Invalid endpoint record: {e}") from e


def parse_project(data: object) -> Project:
    if not isinstance(data, dict):
        raise CatalogError("Project data must be an object")
    try:
        return Project.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid project record: {e}") from e


def _read_document(file_path: Path) -> object:
    """Parse a JSON document, or YAML for ``.yaml``/``.yml`` files."""
    text = file_path.read_text(encoding="utf-8")

    if file_path.suffix.lower() in (".yaml", ".yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise CatalogError(f"{file_path}: {e}") from e

    try:
        return json.loads(text)
    except (json.JSONDecodeError, ValueError) as e:
        raise CatalogError(f"{file_path}: {e}") from e

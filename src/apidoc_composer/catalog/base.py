"""Data models for apidoc catalog records.

The catalog is what apidoc writes to ``api_data.json`` and
``api_project.json``. These models only read it; the composer never
writes catalog data back.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class ApiField(_Record):
    """A single documented field (header, parameter, success or error)."""

    field: str
    type: str = ""
    description: str = ""
    optional: bool = False
    default_value: str | None = Field(default=None, alias="defaultValue")
    allowed_values: list[str] = Field(default_factory=list, alias="allowedValues")
    size: str | None = None
    group: str = ""


class ApiExample(_Record):
    title: str = ""
    content: str = ""
    type: str = "json"


class FieldGroup(_Record):
    """Fields of one documentation section, keyed by their group label."""

    fields: dict[str, list[ApiField]] = Field(default_factory=dict)
    examples: list[ApiExample] = Field(default_factory=list)

    def labelled(self, label: str) -> list[ApiField]:
        return self.fields.get(label, [])


class Deprecation(_Record):
    content: str = ""


class Endpoint(_Record):
    """A single documented endpoint."""

    group: str
    name: str
    title: str = ""
    type: str = "GET"  # may be "GET|POST" for display
    url: str = ""
    version: str = ""
    description: str = ""
    deprecated: Deprecation | None = None
    header: FieldGroup | None = None
    parameter: FieldGroup | None = None
    success: FieldGroup | None = None
    error: FieldGroup | None = None

    @property
    def methods(self) -> list[str]:
        """All documented methods, upper-cased."""
        return [m.strip().upper() for m in self.type.split("|") if m.strip()]

    @property
    def method(self) -> str:
        """The method used when the endpoint is executed."""
        methods = self.methods
        return methods[0] if methods else "GET"

    @property
    def anchor(self) -> str:
        return f"api-{self.group}-{self.name}"

    def header_fields(self) -> list[ApiField]:
        if self.header is None:
            return []
        return self.header.labelled("Header")

    def parameter_fields(self) -> list[ApiField]:
        """Declared parameters across every group label, in declaration order."""
        if self.parameter is None:
            return []
        result: list[ApiField] = []
        for fields in self.parameter.fields.values():
            result.extend(fields)
        return result


class ProjectHeader(_Record):
    title: str = ""
    content: str = ""


class Generator(_Record):
    name: str = ""
    time: str = ""
    version: str = ""


class Project(_Record):
    """Project metadata from ``api_project.json``."""

    name: str = ""
    title: str = ""
    description: str = ""
    version: str = ""
    url: str = ""
    sample_url: str | bool | None = Field(default=None, alias="sampleUrl")
    header: ProjectHeader = Field(default_factory=ProjectHeader)
    generator: Generator = Field(default_factory=Generator)

    @property
    def generated_at(self) -> str:
        return self.generator.time

    @property
    def readme(self) -> str:
        return self.header.content

    @property
    def display_title(self) -> str:
        return self.header.title or self.title or self.name

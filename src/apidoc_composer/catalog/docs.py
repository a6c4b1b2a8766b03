"""Markdown rendering of endpoint and project documentation."""

import re

from apidoc_composer.catalog.base import ApiField, Endpoint, FieldGroup, Project

INDENT = "  "

# (table heading, section attribute, group label)
SECTIONS = [
    ("Header", "header", "Header"),
    ("Parameter", "parameter", "Parameter"),
    ("Success 200", "success", "Success 200"),
    ("Error 4xx", "error", "Error 4xx"),
    ("Error 200", "error", "Error 200"),
]


def strip_html(text: str) -> str:
    """Remove HTML tags, keeping their text content."""
    return re.sub(r"<[^>]+>", "", text)


def describe_endpoint(endpoint: Endpoint) -> str:
    """Render an endpoint's documentation as Markdown."""
    lines = [f"# {endpoint.group} - {endpoint.title or endpoint.name}"]
    if endpoint.version:
        lines.append(f"Version {endpoint.version}")
    lines.append("")

    if endpoint.deprecated is not None:
        notice = "> **Deprecated!**"
        if endpoint.deprecated.content:
            notice += " " + strip_html(endpoint.deprecated.content).strip()
        lines.extend([notice, ""])

    if endpoint.description:
        lines.extend([strip_html(endpoint.description).strip(), ""])

    lines.append(f"`{' | '.join(endpoint.methods)} {endpoint.url}`")

    for heading, attr, label in SECTIONS:
        group: FieldGroup | None = getattr(endpoint, attr)
        if group is None or label not in group.fields:
            continue
        lines.extend(["", *_render_table(heading, group.fields[label], sort=label != "Parameter")])

    if endpoint.success is not None:
        for example in endpoint.success.examples:
            lines.extend(["", f"### {example.title}", f"```{example.type}", example.content, "```"])

    return "\n".join(lines) + "\n"


def describe_project(project: Project) -> str:
    lines = [f"# {project.display_title}"]
    if project.generated_at:
        lines.append(f"Generated {project.generated_at}")
    if project.description:
        lines.extend(["", project.description])
    if project.readme:
        lines.extend(["", strip_html(project.readme).strip()])
    return "\n".join(lines) + "\n"


def _render_table(heading: str, fields: list[ApiField], sort: bool) -> list[str]:
    rows = sorted(fields, key=lambda f: f.field) if sort else fields
    lines = [
        f"## {heading}",
        "",
        "| Field | Type | Description |",
        "|-------|------|-------------|",
    ]
    for param in rows:
        lines.append(f"| {_display_name(param)} | {param.type} | {_describe_field(param)} |")
    return lines


def _display_name(param: ApiField) -> str:
    segments = param.field.split(".")
    name = INDENT * (len(segments) - 1) + segments[-1]
    if param.optional:
        name += " (optional)"
    return name


def _describe_field(param: ApiField) -> str:
    parts = [strip_html(param.description).strip()]
    if param.default_value:
        parts.append(f"Default value: `{param.default_value}`")
    if param.allowed_values:
        values = [v.replace('"', "") for v in param.allowed_values]
        parts.append("Allowed values: " + ", ".join(f"`{v}`" for v in values))
    if param.size:
        parts.append(f"Range: `{param.size}`")
    return " ".join(p for p in parts if p).replace("\n", " ")

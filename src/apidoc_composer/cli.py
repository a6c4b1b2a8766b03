"""CLI entry point for apidoc-composer."""

import asyncio
from pathlib import Path

import click

from apidoc_composer.catalog.apidoc import Catalog, CatalogError, EndpointNotFound, load_catalog
from apidoc_composer.catalog.docs import describe_endpoint, describe_project
from apidoc_composer.composer.fields import FieldKind
from apidoc_composer.composer.representations import render_call, render_curl
from apidoc_composer.composer.session import Composer
from apidoc_composer.config import get_settings
from apidoc_composer.logging import configure_logging


def _load(catalog_path: Path) -> Catalog:
    try:
        return load_catalog(catalog_path)
    except CatalogError as e:
        raise click.ClickException(str(e)) from e


def _split_pair(value: str, option: str) -> tuple[str, str]:
    """Split a ``NAME=VALUE`` option argument."""
    name, sep, field_value = value.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected NAME=VALUE, got {value!r}", param_hint=option)
    return name, field_value


def _print_form(title: str, text: str) -> None:
    click.echo(f"\n## {title}\n")
    click.echo(text, nl=False)


catalog_option = click.option(
    "-c",
    "--catalog",
    "catalog_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="apidoc output directory or api_data.json file (default: APIDOC_CATALOG or the current directory).",
)


def _catalog_path(catalog_path: Path | None) -> Path:
    return catalog_path or Path(get_settings().catalog)


@click.group()
@click.option("--log-level", default=None, help="Log level for stderr logging (default: APIDOC_LOG_LEVEL or WARNING).")
def main(log_level: str | None):
    """apidoc-composer: browse apidoc catalogs and send requests to documented endpoints."""
    configure_logging(log_level or get_settings().log_level)


@main.command()
@catalog_option
def info(catalog_path: Path | None):
    """Show the project title, generation time and readme."""
    catalog = _load(_catalog_path(catalog_path))
    click.echo(describe_project(catalog.project), nl=False)


@main.command("list")
@catalog_option
@click.option("--search", default="", help="Only endpoints whose name, title, group, url or parameters contain TEXT.")
def list_endpoints(catalog_path: Path | None, search: str):
    """List endpoints by group."""
    catalog = _load(_catalog_path(catalog_path))
    endpoints = catalog.search(search)

    for group, group_endpoints in catalog.by_group(endpoints).items():
        click.echo(group)
        for ep in group_endpoints:
            marker = " [deprecated]" if ep.deprecated is not None else ""
            click.echo(f"  {ep.method:<7} {ep.title or ep.name}  ({ep.name}){marker}")

    if not endpoints:
        click.echo("No endpoints found.")


@main.command()
@catalog_option
@click.argument("group", required=False)
@click.argument("name", required=False)
@click.option("--anchor", default=None, help="Deep link such as '#api-User-GetUser'.")
def show(catalog_path: Path | None, group: str | None, name: str | None, anchor: str | None):
    """Show the documentation of one endpoint."""
    catalog = _load(_catalog_path(catalog_path))

    if anchor:
        located = catalog.locate(anchor if anchor.startswith("#") else f"#{anchor}")
        if located is None:
            raise click.ClickException(f"Nothing found for anchor {anchor!r}")
        endpoints = located if isinstance(located, list) else [located]
    elif group and name:
        try:
            endpoints = [catalog.find(group, name)]
        except EndpointNotFound as e:
            raise click.ClickException(str(e)) from e
    else:
        raise click.UsageError("Give GROUP and NAME, or --anchor.")

    click.echo("\n".join(describe_endpoint(ep) for ep in endpoints), nl=False)


@main.command()
@catalog_option
@click.argument("group")
@click.argument("name")
@click.option("--host", default=None, help="Base host, e.g. http://localhost:8080 (default: APIDOC_HOST).")
@click.option("-f", "--field", "field_values", multiple=True, metavar="NAME=VALUE", help="Value for a declared field.")
@click.option("-H", "--header", "headers", multiple=True, metavar="NAME=VALUE", help="Extra header field.")
@click.option("-q", "--query", "queries", multiple=True, metavar="NAME=VALUE", help="Extra query field.")
@click.option("-d", "--data", "bodies", multiple=True, metavar="NAME=VALUE", help="Extra body field.")
@click.option("--remove", "removals", multiple=True, metavar="NAME", help="Drop a declared field.")
@click.option("--dry-run", is_flag=True, help="Render the request without sending it.")
@click.option("--form", "forms", default="both", type=click.Choice(["call", "curl", "both"]), help="Which request text to print.")
def send(
    catalog_path: Path | None,
    group: str,
    name: str,
    host: str | None,
    field_values: tuple[str, ...],
    headers: tuple[str, ...],
    queries: tuple[str, ...],
    bodies: tuple[str, ...],
    removals: tuple[str, ...],
    dry_run: bool,
    forms: str,
):
    """Compose a request for GROUP NAME, send it, and print it as code."""
    catalog = _load(_catalog_path(catalog_path))
    composer = Composer(catalog, host=host if host is not None else get_settings().host)

    try:
        composer.select_by_name(group, name)
    except EndpointNotFound as e:
        raise click.ClickException(str(e)) from e

    for removal in removals:
        field = composer.fields.find(removal)
        if field is None:
            raise click.BadParameter(f"no declared field named {removal!r}", param_hint="--remove")
        composer.fields.remove(field.id)

    for pair in field_values:
        field_name, value = _split_pair(pair, "--field")
        field = composer.fields.find(field_name)
        if field is None:
            raise click.BadParameter(f"no declared field named {field_name!r}", param_hint="--field")
        composer.fields.set_value(field.id, value)

    extras = [
        (FieldKind.HEADER, headers, "--header"),
        (FieldKind.QUERY, queries, "--query"),
        (FieldKind.BODY, bodies, "--data"),
    ]
    for kind, pairs, option in extras:
        for pair in pairs:
            field_name, value = _split_pair(pair, option)
            composer.fields.add(kind, name=field_name, value=value)

    if dry_run:
        descriptor = composer.build()
        call_text, curl_text = render_call(descriptor), render_curl(descriptor)
    else:
        submission = asyncio.run(composer.submit())
        call_text, curl_text = submission.call_text, submission.curl_text
        status = submission.outcome.status_code
        click.echo(f"## Response ({status if status is not None else 'no response'})\n")
        click.echo(submission.outcome.display())

    if forms in ("call", "both"):
        _print_form("httpx", call_text)
    if forms in ("curl", "both"):
        _print_form("curl", curl_text)

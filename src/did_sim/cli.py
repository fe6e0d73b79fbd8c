"""
Command-line interface for did-sim.

Usage:
    did-sim
    did-sim --subject alice --endpoint profile=https://profile.example.com/alice
    did-sim --document did.json
    curl -s https://example.com/.well-known/did.json | did-sim --document -
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from did_sim.builder import parse_endpoint
from did_sim.document import DIDDocument
from did_sim.registry import VerifiableDataRegistry
from did_sim.simulation import SimulationResult, register_and_resolve, simulate


console = Console()


def configure_logging(verbose: bool) -> None:
    """Send did_sim logs to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def format_document(doc: DIDDocument) -> None:
    """Format and print a resolved DID Document."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("DID", f"[bold]{doc.id}[/]")
    table.add_row("Context", doc.context)
    if doc.controller:
        table.add_row("Controller", doc.controller)

    for vm in doc.verification_methods:
        table.add_row("Verification Method", f"{vm.id} ({vm.type})")
        table.add_row("  Controller", vm.controller)
        table.add_row("  Public Key", vm.public_key.hex() or "[dim]none[/]")

    for purpose, method_ids in doc.verification_relations.items():
        table.add_row(purpose, ", ".join(method_ids) or "[dim]none[/]")

    for name, uri in doc.service_endpoints.items():
        table.add_row(f"Service {name}", uri)

    console.print(Panel(table, title="Resolved DID Document", border_style="green"))


def load_document(source: str, timeout: float = 30.0) -> DIDDocument:
    """Load a DID Document from file, URL, or stdin.

    Args:
        source: File path, URL, or "-" for stdin.
        timeout: HTTP request timeout in seconds.

    Returns:
        Parsed DIDDocument.
    """
    data: Any
    if source == "-":
        data = json.loads(sys.stdin.read())
    elif source.startswith("http://") or source.startswith("https://"):
        with httpx.Client(timeout=timeout) as client:
            response = client.get(
                source,
                headers={"Accept": "application/did+ld+json, application/json"},
            )
            response.raise_for_status()
            data = response.json()
    else:
        path = Path(source)
        if not path.exists():
            raise click.ClickException(f"File not found: {source}")
        with path.open() as f:
            data = json.load(f)

    return DIDDocument.from_dict(data)


def _parse_endpoints(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    endpoints: dict[str, str] = {}
    for value in values:
        try:
            name, uri = parse_endpoint(value)
        except ValueError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param) from e
        endpoints[name] = uri
    return endpoints


def _report_error(message: str, json_output: bool) -> None:
    if json_output:
        console.print_json(data={"error": message})
    else:
        console.print(f"[red]Error:[/] {message}")


@click.command(context_settings={"auto_envvar_prefix": "DID_SIM"})
@click.option(
    "--subject",
    default="subject1",
    show_default=True,
    help="Subject identifier used to build the DID",
)
@click.option(
    "--method",
    default="example",
    show_default=True,
    help="DID method name",
)
@click.option(
    "--endpoint",
    "endpoints",
    multiple=True,
    callback=_parse_endpoints,
    metavar="NAME=URI",
    help="Service endpoint to publish (repeatable)",
)
@click.option(
    "--document",
    "document_source",
    default=None,
    help="Register this DID Document (file, URL or -) instead of generating one",
)
@click.option(
    "--timeout",
    type=float,
    default=30.0,
    help="HTTP request timeout in seconds",
)
@click.option(
    "--json-output",
    is_flag=True,
    help="Output the resolved document as JSON",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log registry activity to stderr",
)
@click.version_option(package_name="did-sim")
def main(
    subject: str,
    method: str,
    endpoints: dict[str, str],
    document_source: str | None,
    timeout: float,
    json_output: bool,
    verbose: bool,
) -> None:
    """Simulate a DID lifecycle: generate, register and resolve.

    A P-256 controller key is generated, a DID Document for the subject is
    built and registered in an in-memory registry, and the DID is then
    resolved back and printed.

    Examples:

        did-sim

        did-sim --subject alice --endpoint profile=https://profile.example.com/alice

        did-sim --document did.json --json-output
    """
    configure_logging(verbose)

    try:
        registry = VerifiableDataRegistry()
        result: SimulationResult
        if document_source is not None:
            result = register_and_resolve(
                load_document(document_source, timeout=timeout), registry
            )
        else:
            if not endpoints:
                endpoints = {"profile": f"https://profile.example.com/{subject}"}
            result = simulate(subject, endpoints, method=method, registry=registry)

        if result.resolved is None:
            _report_error(f"DID not found in registry: {result.did}", json_output)
            sys.exit(1)

        if json_output:
            console.print_json(data=result.resolved.to_dict())
        else:
            format_document(result.resolved)

        sys.exit(0)

    except json.JSONDecodeError as e:
        _report_error(f"Invalid JSON: {e}", json_output)
        sys.exit(2)

    except httpx.HTTPError as e:
        _report_error(f"HTTP error: {e}", json_output)
        sys.exit(2)

    except click.ClickException as e:
        _report_error(e.format_message(), json_output)
        sys.exit(2)

    except Exception as e:
        _report_error(str(e), json_output)
        sys.exit(2)


if __name__ == "__main__":
    main()

"""CLI for the assessment-model toolkit."""

import json
import logging
import shutil
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from assessment_model import __version__
from assessment_model.config import (
    GlobalConfig,
    get_home,
    get_resource_root,
    load_global_config,
    log_level,
    write_global_config,
)
from assessment_model.errors import AssessmentModelError
from assessment_model.factory import get_default_registry
from assessment_model.io import read_json, write_json, write_jsonl
from assessment_model.navigation import iter_nodes, navigation_annotation
from assessment_model.registry.types import FAMILIES
from assessment_model.serialization import (
    DecodePolicy,
    build_documentation,
    decode_node,
    encode,
    encode_node,
    validate_payload,
)
from assessment_model.unpack import AssessmentLoader, LoaderConfig

app = typer.Typer(
    name="assessment-model",
    help="Decode, resolve, and document assessment node trees.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"assessment-model version {__version__}")
        raise typer.Exit()


def _load_config() -> GlobalConfig:
    try:
        return load_global_config()
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug output"),
    ] = False,
) -> None:
    """assessment-model: Decode, resolve, and document assessment node trees."""
    level = logging.DEBUG if verbose else log_level(_load_config())
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def init(
    source: Annotated[
        Path | None,
        typer.Option("--from", "-f", help="Directory of resource JSON files to sync"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing resources"),
    ] = False,
) -> None:
    """Initialize global configuration and sync resources.

    Creates:
      ~/.config/assessment-model/config.yaml
      ~/.config/assessment-model/resources/
    """
    home = get_home()
    resource_root = get_resource_root()

    if source is None:
        source = Path.cwd() / "resources"

    if not source.is_dir():
        console.print(f"[red]Error:[/red] resources not found at {source}")
        console.print("Use --from to specify source directory")
        raise typer.Exit(1)

    if resource_root.exists() and not force:
        console.print(f"[yellow]Warning:[/yellow] Resources already exist at {resource_root}")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    console.print(f"[bold]Initializing assessment-model at {home}[/bold]")
    home.mkdir(parents=True, exist_ok=True)
    if resource_root.exists():
        shutil.rmtree(resource_root)
    shutil.copytree(source, resource_root)
    count = len(list(resource_root.rglob("*.json")))
    console.print(f"  [green]✓[/green] {count} resources synced")

    config_path = write_global_config(GlobalConfig(resource_root=resource_root))
    console.print(f"  [green]✓[/green] Created config at {config_path}")


@app.command()
def validate(
    path: Annotated[
        Path,
        typer.Argument(help="Path to a node JSON file"),
    ],
    skip_invalid: Annotated[
        bool,
        typer.Option("--skip-invalid", help="Skip children that fail to decode"),
    ] = False,
) -> None:
    """Decode a node file and check it against the registered schemas."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)

    policy = DecodePolicy.SKIP_INVALID_CHILDREN if skip_invalid else DecodePolicy.STRICT
    try:
        data = read_json(path)
        if isinstance(data, dict):
            validate_payload(data, get_default_registry())
        node = decode_node(data, policy=policy)
    except (ValueError, AssessmentModelError) as e:
        console.print(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(1)

    count = sum(1 for _ in iter_nodes(node))
    console.print(f"[green]Valid:[/green] {path} ({node.type} {node.identifier!r}, {count} nodes)")


@app.command()
def resolve(
    name: Annotated[
        str,
        typer.Argument(help="Resource name of the assessment"),
    ],
    version: Annotated[
        str | None,
        typer.Option("--version", help="Resource version (default: unversioned)"),
    ] = None,
    resources: Annotated[
        Path | None,
        typer.Option(
            "--resources",
            "-r",
            envvar="ASSESSMENT_MODEL_RESOURCES",
            help="Directory of resource JSON files",
        ),
    ] = None,
    output_path: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Write the resolved assessment to this file"),
    ] = None,
    diagnostics: Annotated[
        Path | None,
        typer.Option("--diagnostics", "-d", help="Diagnostics output JSONL path"),
    ] = None,
    skip_invalid: Annotated[
        bool,
        typer.Option("--skip-invalid", help="Skip children that fail to decode"),
    ] = False,
) -> None:
    """Fetch an assessment, resolve its placeholders, and print the result."""
    config = _load_config()
    resource_root = resources or config.resource_root
    if resource_root is None or not resource_root.exists():
        console.print(f"[red]Error:[/red] Resource directory not found: {resource_root}")
        raise typer.Exit(1)

    policy = DecodePolicy.SKIP_INVALID_CHILDREN if skip_invalid else config.decode_policy
    loader = AssessmentLoader(
        LoaderConfig(
            resource_root=resource_root,
            policy=policy,
            match_children=config.match_children,
        )
    )
    result = loader.load(name, version)

    if diagnostics:
        write_jsonl(diagnostics, [result.diagnostic.model_dump(mode="json")])

    for issue in result.diagnostic.skipped:
        console.print(f"[yellow]Skipped:[/yellow] {issue.identifier or '<unknown>'}: {issue.message}")

    if result.assessment is None:
        for issue in result.diagnostic.errors:
            console.print(f"[red]Error:[/red] {issue.message}")
        raise typer.Exit(1)

    payload = encode_node(result.assessment)
    if output_path:
        write_json(output_path, payload)
        console.print(f"[green]Resolved:[/green] {name} -> {output_path}")
    else:
        console.print_json(json.dumps(payload))


@app.command()
def schema(
    output_path: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Write the documentation to this file"),
    ] = None,
) -> None:
    """Document every registered variant with its fields and an example."""
    documentation = build_documentation(get_default_registry())
    if output_path:
        write_json(output_path, documentation)
        console.print(f"[green]Wrote:[/green] {output_path}")
    else:
        console.print_json(json.dumps(documentation))


@app.command()
def examples(
    family: Annotated[
        str,
        typer.Option("--family", help=f"Variant family: {', '.join(FAMILIES)}"),
    ] = "node",
    out_dir: Annotated[
        Path | None,
        typer.Option("--out-dir", help="Write one golden file per variant to this directory"),
    ] = None,
) -> None:
    """Print every registered example of a family as JSON."""
    if family not in FAMILIES:
        console.print(f"[red]Error:[/red] Unknown family: {family}")
        raise typer.Exit(1)

    registry = get_default_registry()
    if out_dir is None:
        payloads = [encode(example) for example in registry.all_registered_examples(family)]
        console.print_json(json.dumps(payloads))
        return

    out_dir.mkdir(parents=True, exist_ok=True)
    for descriptor in registry.variants(family):
        golden = out_dir / f"{family}.{descriptor.type_name}.json"
        write_json(golden, [encode(example) for example in descriptor.examples()])
    console.print(f"[green]Wrote:[/green] {len(registry.variants(family))} golden files to {out_dir}")


@app.command()
def navigation(
    path: Annotated[
        Path,
        typer.Argument(help="Path to a node JSON file"),
    ],
) -> None:
    """Show the navigation annotations of every node in a file."""
    try:
        node = decode_node(read_json(path))
    except (OSError, ValueError, AssessmentModelError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"{node.type} {node.identifier}")
    table.add_column("Path")
    table.add_column("Type")
    table.add_column("Next")
    table.add_column("Survey rules")
    table.add_column("Commands")
    for node_path, child in iter_nodes(node):
        annotation = navigation_annotation(child)
        rules = ", ".join(
            f"{rule.rule_operator.value} {rule.matching_answer!r} -> {rule.skip_to_identifier}"
            for rule in annotation.survey_rules
        )
        table.add_row(
            "/".join(node_path),
            child.type,
            annotation.next_node_identifier or "",
            rules,
            ", ".join(sorted(command.value for command in annotation.commands)),
        )
    console.print(table)


if __name__ == "__main__":
    app()

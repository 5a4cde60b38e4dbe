"""CLI entry point for swagger-sync."""

import functools
import logging
from pathlib import Path

import click
from jinja2 import TemplateError, TemplateNotFound

from swagger_sync.compare.diff import DiffKind, DiffRecord, diff_snapshots
from swagger_sync.compare.impact import compute_impact
from swagger_sync.config import SyncConfig, load_config
from swagger_sync.errors import SwaggerSyncError, UnresolvedReferenceError
from swagger_sync.fetch import load_document
from swagger_sync.generator.template import TemplateRenderer
from swagger_sync.generator.typescript import render_snapshot
from swagger_sync.lock import load_lock, save_lock
from swagger_sync.parser.base import Snapshot
from swagger_sync.parser.swagger import build_snapshot

KIND_LABELS = {
    DiffKind.ADDED: "+",
    DiffKind.REMOVED: "-",
    DiffKind.CHANGED: "~",
}

root_option = click.option(
    "--root", "root", default=".", type=click.Path(file_okay=False, path_type=Path),
    help="Project root holding swag-config and the output directory.",
)


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SwaggerSyncError as e:
            raise click.ClickException(str(e)) from e
    return wrapper


def _fetch_snapshot(source: str | None, config: SyncConfig) -> Snapshot:
    source = source or config.origin_url
    if not source:
        raise click.UsageError("No API description given: pass SOURCE or set originUrl in swag-config.")
    click.echo(f"Loading {source}...")
    return build_snapshot(load_document(source), config.collapse_policy)


def _format_record(record: DiffRecord) -> str:
    line = f"  {KIND_LABELS[record.kind]} {record.name}"
    if record.description:
        line += f" ({record.description})"
    return line


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def main(verbose: bool):
    """swagger-sync: keep a normalized API snapshot and report what changed."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


@main.command()
@click.argument("source", required=False)
@root_option
@_handle_errors
def diff(source: str | None, root: Path):
    """Compare the API description at SOURCE with the lock file."""
    config = load_config(root)
    old = load_lock(config.lock_file(root)) or Snapshot()
    new = _fetch_snapshot(source, config)

    graph = compute_impact(new.definitions, new.mods)
    result = diff_snapshots(old, new, graph)
    if result.is_empty:
        click.echo("No changes.")
        return

    if result.mod_diffs:
        click.echo("Modules:")
        for record in result.mod_diffs:
            click.echo(_format_record(record))

    if result.definition_diffs:
        click.echo("Definitions:")
        for record in result.definition_diffs:
            click.echo(_format_record(record))
            if record.kind == DiffKind.REMOVED:
                continue
            affected = graph.modules_affected_by(record.name)
            if affected:
                click.echo(f"      affects modules: {', '.join(affected)}")


@main.command()
@click.argument("source", required=False)
@root_option
@click.option("--mod", "mod_names", multiple=True, help="Only update this module (repeatable).")
@click.option("--def", "def_names", multiple=True, help="Only update this definition (repeatable).")
@_handle_errors
def update(source: str | None, root: Path, mod_names: tuple[str, ...], def_names: tuple[str, ...]):
    """Write the API description at SOURCE into the lock file."""
    config = load_config(root)
    lock_file = config.lock_file(root)
    new = _fetch_snapshot(source, config)
    snapshot = load_lock(lock_file)

    if snapshot is None or not (mod_names or def_names):
        snapshot = new
    else:
        for name in mod_names:
            mod = new.find_mod(name)
            if mod is None:
                raise click.BadParameter(f"Module {name} not found in {source or config.origin_url}", param_hint="--mod")
            snapshot.update_mod(mod)
        for name in def_names:
            definition = new.find_definition(name)
            if definition is None:
                raise click.BadParameter(f"Definition {name} not found in {source or config.origin_url}", param_hint="--def")
            snapshot.update_definition(definition)

    try:
        compute_impact(snapshot.definitions, snapshot.mods)
    except UnresolvedReferenceError as e:
        click.echo(f"Warning: the updated snapshot is inconsistent: {e}", err=True)

    save_lock(snapshot, lock_file)
    click.echo(f"Lock saved to {lock_file}")


@main.command()
@root_option
@click.option("--template", "template_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Jinja2 endpoint template.")
@_handle_errors
def render(root: Path, template_path: Path | None):
    """Render the locked snapshot into TypeScript files."""
    config = load_config(root, {"template_path": str(template_path) if template_path else None})
    snapshot = load_lock(config.lock_file(root))
    if snapshot is None:
        raise click.ClickException(f"No lock file at {config.lock_file(root)}; run `update` first.")

    try:
        renderer = TemplateRenderer(Path(config.template_path) if config.template_path else None)
    except TemplateNotFound as e:
        raise click.ClickException(f"Template not found: {e}") from e
    except TemplateError as e:
        raise click.ClickException(f"Template error: {e}") from e

    out_dir = config.out_path(root)
    try:
        files = render_snapshot(snapshot, renderer)
    except TemplateError as e:
        raise click.ClickException(f"Template error: {e}") from e
    for filename, content in files.items():
        file_path = out_dir / filename
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")

    click.echo(f"Generated {len(files)} files in {out_dir}")


@main.command()
@click.argument("name")
@root_option
@_handle_errors
def impact(name: str, root: Path):
    """Show which definitions and modules depend on definition NAME."""
    config = load_config(root)
    snapshot = load_lock(config.lock_file(root))
    if snapshot is None:
        raise click.ClickException(f"No lock file at {config.lock_file(root)}; run `update` first.")

    result = compute_impact(snapshot.definitions, snapshot.mods).get(name)
    if result is None:
        raise click.ClickException(f"Definition {name} not found in the lock file.")

    click.echo(f"Definition {name}")
    click.echo(f"  direct dependents:     {', '.join(result.direct_dependents) or '-'}")
    click.echo(f"  transitive dependents: {', '.join(result.transitive_dependents) or '-'}")
    click.echo(f"  direct modules:        {', '.join(result.direct_modules) or '-'}")
    click.echo(f"  transitive modules:    {', '.join(result.transitive_modules) or '-'}")

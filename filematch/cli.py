"""CLI interface for filematch."""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

import click

from .config import MatchConfig, load_match_configs_from_json
from .entities import File, FileEntity
from .exceptions import FileMatchError
from .match import Match, hash_files
from .output import OutputFormatter
from .utils import format_timestamp

logger = logging.getLogger(__name__)


def match_options(func: Callable) -> Callable:
    """Add the options shared by all single-pattern commands."""
    func = click.argument("pattern")(func)
    func = click.option(
        "--cwd",
        "-C",
        type=click.Path(file_okay=False, path_type=Path),
        default=".",
        show_default=True,
        help="Root directory to resolve the pattern from",
    )(func)
    func = click.option(
        "--ignore",
        "-i",
        multiple=True,
        help="Pattern of paths to drop from the match (repeatable)",
    )(func)
    func = click.option(
        "--exclude-dot-files",
        is_flag=True,
        help="Drop paths with a segment starting with a dot",
    )(func)
    return func


def _build_match(
    pattern: str, cwd: Path, ignore: tuple[str, ...], exclude_dot_files: bool
) -> Match:
    config = MatchConfig(
        pattern=pattern,
        cwd=cwd,
        ignore=list(ignore),
        exclude_dot_files=exclude_dot_files,
    )
    return config.create_match(sync_mode=True)


def _entity_row(entity: FileEntity, out: OutputFormatter) -> dict[str, Any]:
    row: dict[str, Any] = {
        "kind": entity.kind.value if entity.kind else "",
        "path": entity.path,
    }
    if isinstance(entity, File):
        row["size"] = out.format_size(entity.size())
        row["modified"] = format_timestamp(entity.last_modified())
    else:
        row["size"] = ""
        row["modified"] = ""
    return row


@click.group()
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="filematch")
@click.pass_context
def main(ctx: Any, quiet: bool, json: bool, verbose: bool) -> None:
    """filematch - Match files and folders with glob patterns and fingerprint them."""
    ctx.ensure_object(dict)
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("filematch").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


@main.command()
@match_options
@click.option(
    "--type",
    "entry_type",
    type=click.Choice(["all", "files", "folders"]),
    default="all",
    show_default=True,
    help="Kind of entries to list",
)
@click.pass_context
def ls(
    ctx: Any,
    pattern: str,
    cwd: Path,
    ignore: tuple[str, ...],
    exclude_dot_files: bool,
    entry_type: str,
) -> None:
    """List files and folders matching PATTERN.

    \b
    Examples:
        filematch ls "*.txt"                    # Text files in current directory
        filematch ls "**/*.py" -C src           # Python files below src/
        filematch ls "**" --type folders        # All folders, recursively
    """
    out: OutputFormatter = ctx.obj["out"]

    try:
        match = _build_match(pattern, cwd, ignore, exclude_dot_files)
        if entry_type == "files":
            entities: list[FileEntity] = match.files()
        elif entry_type == "folders":
            entities = match.folders()
        else:
            entities = match.all()

        if out.json_output:
            out.output_json([entity.to_dict() for entity in entities])
            return

        if not entities:
            what = "entries" if entry_type == "all" else entry_type
            out.info(f"No {what} match '{pattern}'")
            return

        out.output_table(
            [_entity_row(entity, out) for entity in entities],
            ["kind", "path", "size", "modified"],
            {"kind": "Type", "path": "Path", "size": "Size", "modified": "Modified"},
        )
    except (FileMatchError, OSError) as e:
        out.error(str(e))
        ctx.exit(1)


@main.command(name="hash")
@match_options
@click.option(
    "--last-modified",
    "-m",
    is_flag=True,
    help="Include file modification times in the hash",
)
@click.option("--size", "-s", is_flag=True, help="Include file sizes in the hash")
@click.pass_context
def hash_command(
    ctx: Any,
    pattern: str,
    cwd: Path,
    ignore: tuple[str, ...],
    exclude_dot_files: bool,
    last_modified: bool,
    size: bool,
) -> None:
    """Print the file list hash of files matching PATTERN.

    The hash changes when a file is added or removed. With --last-modified
    or --size it also changes when a file's modification time or size does.
    """
    out: OutputFormatter = ctx.obj["out"]

    try:
        match = _build_match(pattern, cwd, ignore, exclude_dot_files)
        files = match.files()
        digest = hash_files(files, last_modified, size)
    except (FileMatchError, OSError) as e:
        out.error(str(e))
        ctx.exit(1)
        return

    if out.json_output:
        out.output_json(
            {
                "pattern": pattern,
                "cwd": str(cwd),
                "files": len(files),
                "hash": digest,
            }
        )
    else:
        out.print(digest)


@main.command()
@click.argument(
    "config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option("--alias", "-a", help="Only run the match with this alias")
@click.pass_context
def run(ctx: Any, config_file: Path, alias: Optional[str]) -> None:
    """Hash every match defined in CONFIG_FILE.

    CONFIG_FILE is a JSON list of match definitions:

    \b
        [{"pattern": "**/*.txt", "cwd": "notes", "alias": "notes",
          "ignore": ["*.tmp"], "includeLastModified": true}]
    """
    out: OutputFormatter = ctx.obj["out"]

    try:
        configs = load_match_configs_from_json(config_file)
    except FileMatchError as e:
        out.error(str(e))
        ctx.exit(1)
        return

    if alias is not None:
        configs = [c for c in configs if c.alias == alias]
        if not configs:
            out.error(f"No match with alias '{alias}' in {config_file}")
            ctx.exit(1)
            return

    results = []
    failed = 0
    for config in configs:
        try:
            files = config.create_match(sync_mode=True).files()
            digest = config.hash_files(files)
        except (FileMatchError, OSError) as e:
            out.error(f"{config.name}: {e}")
            failed += 1
            continue
        results.append(
            {"name": config.name, "files": len(files), "hash": digest}
        )

    if out.json_output:
        out.output_json(results)
    else:
        for result in results:
            out.print(f"{result['name']}  {result['files']} files  {result['hash']}")

    if failed:
        ctx.exit(1)


if __name__ == "__main__":
    main()

"""
Re-indents JavaScript, TypeScript, JSX, TSX or JSON source.
Prints the result to stdout, or rewrites the file in place with --write.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import VARIANT_CHOICES, ConfigError, build_config
from .exceptions import FormatterError
from .filesystem import (
    collect_file_stat,
    enforce_size,
    get_max_file_size,
    normalize_filepath,
    safe_read,
    write_formatted,
)
from .formatter import detect_variant, format_code

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="js-reindent")
@click.option(
    "-l",
    "--language",
    type=click.Choice(VARIANT_CHOICES, case_sensitive=False),
    help="Syntax variant (defaults to the file extension)",
)
@click.option("--indent", "indent_width", type=int, help="Spaces per indentation level")
@click.option("--spaces/--tabs", "use_spaces", default=None, help="Indent with spaces or tabs")
@click.option("-w", "--write", is_flag=True, help="Rewrite the file in place")
@click.option("--check", is_flag=True, help="Exit with status 1 if the file would change")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.argument("filepath", required=False, type=click.Path(dir_okay=False, allow_dash=True))
def cli(
    filepath: str | None,
    language: str | None = None,
    indent_width: int | None = None,
    use_spaces: bool | None = None,
    write: bool = False,
    check: bool = False,
    verbose: bool = False,
):
    """
    Re-indent a source file, or standard input when no file is given.

    Args:
        filepath: Path to the source file; ``-`` or omitted reads stdin.
        language: Override for the syntax variant.
        indent_width: Override for the number of spaces per level.
        use_spaces: Indent with spaces (True) or tabs (False).
        write: Rewrite the file atomically instead of printing.
        check: Report whether the file would change without printing it.
        verbose: Log debug information to stderr.

    Returns:
        None.

    Raises:
        click.UsageError: If --write and --check are combined, or --write is
            used without a file.
        click.BadParameter: If the path or configuration values are invalid.
        click.ClickException: If reading, formatting or writing fails.

    Examples:
        js-reindent src/App.tsx --indent 4 --write
        cat data.json | js-reindent -l json --tabs
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if write and check:
        raise click.UsageError("--write and --check cannot be used together")

    from_stdin = filepath is None or filepath == "-"
    if from_stdin and write:
        raise click.UsageError("--write requires a file path")

    base_dir = Path.cwd().resolve()
    path: Path | None = None
    if not from_stdin:
        try:
            path = normalize_filepath(filepath, base_dir, writable=write)
        except ValueError as error:
            raise click.BadParameter(str(error)) from error

    detected = detect_variant(path) if path is not None else None
    try:
        config = build_config(
            path.parent if path is not None else base_dir,
            variant=language or detected,
            indent_width=indent_width,
            use_spaces=use_spaces,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    initial_stat = None
    try:
        if path is None:
            source = click.get_text_stream("stdin").read()
            enforce_size(len(source.encode("utf-8")), max_file_size)
        else:
            initial_stat = collect_file_stat(path)
            enforce_size(initial_stat.st_size, max_file_size)
            with safe_read(path) as handle:
                source = handle.read()
    except UnicodeDecodeError as error:
        raise click.ClickException(f"Invalid UTF-8 sequence in {path}: {error}") from error
    except (IOError, FormatterError) as error:
        raise click.ClickException(str(error)) from error

    result = format_code(source, config)
    if not result.success:
        raise click.ClickException(result.error)

    formatted = f"{result.code}\n" if result.code else ""
    changed = formatted != source
    display_path = "<stdin>" if path is None else str(path)

    if check:
        if changed:
            click.echo(f"{display_path} would be reformatted", err=True)
            raise SystemExit(1)
        return

    if write:
        if not changed:
            return
        try:
            write_formatted(
                path,
                formatted,
                initial_stat,
                warn=lambda message: click.echo(message, err=True),
            )
        except IOError as error:
            raise click.ClickException(str(error)) from error
        click.echo(f"Reformatted {display_path}", err=True)
        return

    click.echo(formatted, nl=False)


if __name__ == "__main__":
    cli()

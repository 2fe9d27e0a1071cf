import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from fieldretype.config import RewriteConfig, default_log_level
from fieldretype.core.pipeline import run_rewrite
from fieldretype.errors import FieldRetypeError
from fieldretype.models import Locator, RewriteSpec

app = typer.Typer(
    name="fieldretype",
    help="Rewrite the types of Go struct fields.",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else default_log_level()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command(no_args_is_help=True, context_settings={"help_option_names": ["-h", "--help"]})
def retype(
    file: Annotated[Path | None, typer.Option("--file", help="Filename to be parsed.")] = None,
    write: Annotated[
        bool, typer.Option("--write", "-w", help="Write result to source file instead of stdout.")
    ] = False,
    line: Annotated[str, typer.Option(help="Line number of the field or a range of line, i.e. 4 or 4,8.")] = "",
    struct: Annotated[str, typer.Option("--struct", help="Struct name to be processed.")] = "",
    field: Annotated[str, typer.Option("--field", help="Field name to be processed.")] = "",
    all_: Annotated[bool, typer.Option("--all", help="Select all structs to be processed.")] = False,
    from_type: Annotated[str, typer.Option("--from", help="From type.")] = "",
    to_type: Annotated[str, typer.Option("--to", help="To type.")] = "",
    skip_unexported: Annotated[bool, typer.Option(help="Skip unexported fields.")] = False,
    use_gofmt: Annotated[bool, typer.Option("--gofmt", help="Pipe the result through gofmt.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Rewrite the type of struct fields whose type is spelled exactly like --from."""
    _configure_logging(verbose)

    config = RewriteConfig(
        file=file,
        locator=Locator(line=line, record=struct, field=field, all=all_),
        spec=RewriteSpec(from_type=from_type, to_type=to_type),
        write=write,
        skip_unexported=skip_unexported,
        gofmt=use_gofmt,
    )

    try:
        outcome = run_rewrite(config)
    except (FieldRetypeError, FileNotFoundError) as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(1) from None

    if not write:
        typer.echo(outcome.output, nl=False)

    span = outcome.span
    rewritten = len(outcome.result.rewritten)
    err_console.print(f"Rewrote {rewritten} field(s) in lines {span.start}-{span.end}", soft_wrap=True)


def main() -> None:
    app()

import json
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

import typer

from ..chunking import Chunk, Chunker, ParseError, iter_boundaries
from ..core import config as config_module
from ..core.config import Settings
from ..core.logging import log, setup_logging
from ..encoding import Encoding, EncodingError, Transcoder, TruncatedInputError

app = typer.Typer(add_completion=False, help="Split YAML streams into documents")

OUTPUT_FORMATS = ("delimited", "jsonl")

# Failures reported to the user instead of raising a traceback
REPORTED_ERRORS = (OSError, EncodingError, TruncatedInputError, ParseError, ValueError)


@app.callback()
def _init(
    config_file: str | None = typer.Option(
        None,
        "--config",
        help="Config file (.yamlsplit.yaml auto-discovered)",
    ),
) -> None:
    try:
        settings = Settings.load_config(config_file)
        setup_logging(settings.LOG_FORMAT, settings.LOG_LEVEL)  # type: ignore[arg-type]
    except Exception as e:
        typer.echo(f"❌ Config error: {e}", err=True)
        raise typer.Exit(1) from e

    config_module.SETTINGS = settings
    log.debug("config.loaded", config_file=config_file or "auto-discovered")


@contextmanager
def _open_input(inputfile: Path | None) -> Iterator[BinaryIO]:
    """Open the input file, or standard input when no file is given."""
    if inputfile is None:
        yield sys.stdin.buffer
        return
    with open(inputfile, "rb", buffering=config_module.SETTINGS.YAMLSPLIT_READ_SIZE) as f:
        yield f


def _transcoder(reader: BinaryIO, encoding: str) -> Transcoder:
    if encoding.lower() == "auto":
        return Transcoder.from_reader(reader)
    return Transcoder(reader, Encoding.from_name(encoding))


def _format_chunk(chunk: Chunk, output_format: str) -> bytes:
    if output_format == "jsonl":
        record = {
            "index": chunk.index,
            "start": chunk.start,
            "end": chunk.end,
            "bytes": len(chunk.data),
            "text": chunk.text,
        }
        return (json.dumps(record, ensure_ascii=False) + "\n").encode("utf-8")
    return (
        f">>> START CHUNK ({len(chunk.data)} bytes) >>>|".encode("utf-8")
        + chunk.data
        + b"|<<< END CHUNK <<<\n"
    )


def _stdout() -> BinaryIO:
    return sys.stdout.buffer


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail."""
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        pass


def _fail(e: Exception) -> typer.Exit:
    typer.echo(f"❌ {e}", err=True)
    return typer.Exit(1)


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def config() -> None:
    """Show the effective settings."""
    for key, value in config_module.SETTINGS.model_dump().items():
        typer.echo(f"{key}={value}")


@app.command()
def split(
    inputfile: Path | None = typer.Argument(
        None, help="A file to read from instead of standard input"
    ),
    encoding: str | None = typer.Option(
        None,
        "--encoding",
        help="Source encoding (auto|utf-8|utf-16-be|utf-16-le|utf-32-be|utf-32-le)",
    ),
    output_format: str | None = typer.Option(
        None, "--format", help="Output format: delimited|jsonl"
    ),
) -> None:
    """
    Print every document of a YAML stream exactly as written.

    The stream may be UTF-8, UTF-16 or UTF-32; documents are printed as
    UTF-8 with any leading byte order mark removed.

    Example:
        yaml-split split docs.yaml                 # delimited records
        cat docs.yaml | yaml-split split --format jsonl
    """
    settings = config_module.SETTINGS
    encoding = encoding or settings.YAMLSPLIT_ENCODING
    output_format = output_format or settings.YAMLSPLIT_OUTPUT_FORMAT
    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"❌ Unknown output format: {output_format}", err=True)
        raise typer.Exit(1)

    out = _stdout()
    count = 0
    try:
        with _open_input(inputfile) as reader:
            with Chunker(_transcoder(reader, encoding)) as chunker:
                for chunk in chunker:
                    out.write(_format_chunk(chunk, output_format))
                    count += 1
            out.flush()
    except BrokenPipeError:
        _silence_stdout()
        log.debug("split.broken_pipe", documents=count)
        return
    except REPORTED_ERRORS as e:
        log.error("split.failed", error=str(e), documents=count)
        raise _fail(e) from e

    log.info("split.complete", documents=count)


@app.command()
def detect(
    inputfile: Path | None = typer.Argument(
        None, help="A file to read from instead of standard input"
    ),
) -> None:
    """Print the detected encoding of a YAML stream."""
    try:
        with _open_input(inputfile) as reader:
            transcoder = Transcoder.from_reader(reader)
    except REPORTED_ERRORS as e:
        raise _fail(e) from e
    typer.echo(transcoder.encoding.value)


@app.command()
def boundaries(
    inputfile: Path | None = typer.Argument(
        None, help="A file to read from instead of standard input"
    ),
    encoding: str | None = typer.Option(
        None, "--encoding", help="Source encoding (default: detect)"
    ),
) -> None:
    """Print the byte offset of every document start and end."""
    encoding = encoding or config_module.SETTINGS.YAMLSPLIT_ENCODING
    try:
        with _open_input(inputfile) as reader:
            for event in iter_boundaries(_transcoder(reader, encoding)):
                typer.echo(f"{event.kind.value} {event.offset}")
    except REPORTED_ERRORS as e:
        raise _fail(e) from e


def main() -> None:
    app()

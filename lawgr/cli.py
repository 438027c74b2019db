import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click
import yaml  # type: ignore
from attrs import evolve
from dotenv import load_dotenv

from lawgr.config import ConfigError, NumberingConfig
from lawgr.json_utils import json_dumps
from lawgr.numbering import greek_numerals
from lawgr.numbering.document import document_to_string, load_document
from lawgr.pipeline import process_document

try:
    __version__ = version("lawgr")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"

# Formatters selectable with ``lawgr numeral --style``.
NUMERAL_STYLES = {
    "lower": greek_numerals.greek_lower,
    "upper": greek_numerals.greek_upper,
    "keraia": greek_numerals.greek_letter_keraia,
    "book": greek_numerals.book_ordinal,
    "edafio": greek_numerals.edafio_ordinal,
    "roman": greek_numerals.roman,
}


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="LAWGR_LOG_FILE",
)
@click.version_option(__version__, prog_name="lawgr")
def cli(debug: bool, trace: bool, log_file: Optional[str] = None) -> None:
    """Configure logging and load environment variables.

    Args:
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()


def _load_config(
    config_path: Optional[str], inherit_numbering: Optional[bool]
) -> NumberingConfig:
    """Build the run configuration from file, environment and flags.

    Throws:
        click.UsageError: If the configuration cannot be interpreted.
    """

    try:
        if config_path:
            config = NumberingConfig.from_file(Path(config_path))
        else:
            config = NumberingConfig()
        config = config.with_env()
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    # The command line flag wins over file and environment.
    if inherit_numbering is not None:
        config = evolve(config, inherit_numbering=inherit_numbering)
    return config


@cli.command()
@click.argument(
    "input_path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format of the anchor map.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=True),
    default=None,
    help="Write anchors to FILE or DIRECTORY instead of the console.",
)
@click.option(
    "--xml-output",
    "xml_output",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Write the numbered document to FILE.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    default=None,
    help="YAML file with numbering settings.",
)
@click.option(
    "--inherit-numbering/--no-inherit-numbering",
    default=None,
    help="Override the document's inherited numbering flag.",
)
def number(
    input_path: str,
    output_format: str = "json",
    output_path: Optional[str] = None,
    xml_output: Optional[str] = None,
    config_path: Optional[str] = None,
    inherit_numbering: Optional[bool] = None,
) -> None:
    """Number a document and print its anchor map.

    Args:
        input_path: Document markup to number.
        output_format: Format of the anchor map.
        output_path: Optional file or directory for the anchor map. If a
            directory is provided, the file name is derived from the input.
        xml_output: Optional file receiving the numbered document.
        config_path: Optional YAML configuration file.
        inherit_numbering: Force inherited numbering on or off.
    """

    config = _load_config(config_path, inherit_numbering)
    source = Path(input_path)

    doc = load_document(source.read_text(encoding="utf-8"))
    try:
        result = process_document(doc, config)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    data = result.to_dict()
    if output_format == "json":
        content = json_dumps(data, indent=True)
    else:
        content = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)

    if output_path:
        final_path = Path(output_path)

        # If the provided path is a directory, build the file path inside it.
        if final_path.is_dir():
            final_path = final_path / f"{source.stem}.{output_format}"
        final_path.write_text(content, encoding="utf-8")
    else:
        click.echo(content)

    if xml_output:
        Path(xml_output).write_text(
            document_to_string(result.document), encoding="utf-8"
        )


@cli.command()
@click.argument("value", type=int)
@click.option(
    "--style",
    type=click.Choice(sorted(NUMERAL_STYLES)),
    default="lower",
    show_default=True,
    help="Numeral system to use.",
)
def numeral(value: int, style: str = "lower") -> None:
    """Print ``value`` spelled in the chosen numeral style.

    Args:
        value: Number to convert.
        style: Name of the numeral style.
    """

    text = NUMERAL_STYLES[style](value)
    if not text:
        raise click.ClickException(f"{value} cannot be written as {style}")
    click.echo(text)


if __name__ == "__main__":
    cli()

import logging
import sys

import click
from typing_extensions import Never

from jlview.__main__ import PROJECT_VERSION
from jlview.config import Config, ConfigError, load_config
from jlview.core import init_stringers
from jlview.raw_message import RawMessage
from jlview.registry import get_stringer, list_stringers


class LogFormatter(logging.Formatter):
    COLORS = {
        logging.DEBUG: "white",
        logging.INFO: "bright_white",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "bright_red",
    }

    def __init__(self, format: str) -> None:
        super().__init__(fmt=format)

    def format(self, record: logging.LogRecord) -> str:
        record.msg = click.style(
            str(record.msg), fg=self.COLORS.get(record.levelno, "white")
        )
        return super().format(record)


def fatal(message: str, exit_code: int = 1) -> Never:
    click.secho(message, fg="red", bold=True, err=True)
    sys.exit(exit_code)


def init_logging(level_name: str) -> None:
    log_level = getattr(logging, level_name.upper(), logging.WARNING)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LogFormatter("%(message)s"))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(log_level)


@click.group("jlview")
@click.option(
    "--file", "-f", type=click.Path(dir_okay=False, readable=True, resolve_path=True)
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="WARNING",
    help="Log level",
)
@click.version_option(PROJECT_VERSION)
@click.pass_context
def jlview_cli(ctx: click.Context, file: str | None, log_level: str) -> None:
    init_logging(log_level)
    init_stringers()

    try:
        ctx.obj = load_config(file)
    except ConfigError as ex:
        fatal(str(ex))


@jlview_cli.command("list")
@click.pass_obj
def list_command(config: Config) -> None:
    click.secho("STRINGERS", fg="yellow", bold=True)
    for name in list_stringers():
        click.echo(f"  {name}")

    fields = sorted(config.fields.as_dict().items())
    if not fields:
        return

    field_len = max(len(field) for field, _ in fields)
    click.secho(f"{'FIELD':<{field_len}}  STRINGER", fg="yellow", bold=True)
    for field, name in fields:
        click.echo(f"{field:<{field_len}}  {name}")


@jlview_cli.command("render")
@click.argument("value", type=str, required=False)
@click.option("--stringer", "-s", "stringer_name", help="Stringer to apply")
@click.option("--field", "field", help="Render as this field of a log line")
@click.option(
    "--text", is_flag=True, help="Pass the value as text instead of raw JSON"
)
@click.pass_obj
def render_command(
    config: Config,
    value: str | None,
    stringer_name: str | None,
    field: str | None,
    text: bool,
) -> None:
    if stringer_name and field:
        fatal("Use either --stringer or --field, not both.")

    if value is None:
        value = click.get_text_stream("stdin").read().rstrip("\n")

    if stringer_name:
        stringer = get_stringer(stringer_name)
        if stringer is None:
            fatal(f"Stringer '{stringer_name}' not found.")
    else:
        stringer = config.fields.get(field or "")

    click.echo(stringer(config.context, value if text else RawMessage(value)))


def main() -> None:
    jlview_cli(auto_envvar_prefix="JLVIEW")

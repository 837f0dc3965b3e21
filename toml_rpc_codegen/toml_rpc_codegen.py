import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .pipeline import (
    CodegenError,
    CodeGeneratorConfig,
    FieldOrder,
    OutputMode,
    UnknownTypePolicy,
    compile_to_out_dir,
    compile_to_stream,
)


def load_config(path):
    """Load a JSON configuration file, or the defaults when no path is given."""
    if path is None:
        return CodeGeneratorConfig()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Cannot load config {path}: {e}") from e
    return CodeGeneratorConfig.from_dict(data)


@click.command(name="toml_rpc_codegen")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--language", "-l", default="rust", type=click.Choice(["rust", "python"]))
@click.option(
    "--strict-types",
    is_flag=True,
    default=False,
    help="Reject field types missing from the type mapping instead of emitting `Unknown`",
)
@click.option("--field-order", default=None, type=click.Choice([o.value for o in FieldOrder]), help="Order of message fields")
@click.option("--mode", default=None, type=click.Choice([m.value for m in OutputMode]), help="What to do if the output file exists")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log pipeline progress")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("out_dir", type=click.Path(allow_dash=True))
def toml_rpc_codegen(config, language, strict_types, field_order, mode, verbose, path, out_dir):
    """Compile the TOML RPC schema PATH into OUT_DIR (use - for stdout)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    command_line = reconstruct_command_line(click.get_current_context().command)

    try:
        config = load_config(config)

        # CLI flags override the config file
        if strict_types:
            config.unknown_type_policy = UnknownTypePolicy.ERROR
        if field_order is not None:
            config.field_order = FieldOrder(field_order)
        if mode is not None:
            config.output.mode = OutputMode(mode)

        if out_dir == "-":
            compile_to_stream(path, click.get_text_stream("stdout"), config, language, command_line)
        else:
            out_path = compile_to_out_dir(path, out_dir, config, language, command_line)
            click.echo(f"Wrote {out_path}", err=True)
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct the command line from the current Click context.

    File paths are shortened to their names so the result does not
    depend on where the build runs.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    program = click_command.name or "toml_rpc_codegen"

    ctx = click.get_current_context(silent=True)
    if ctx is None or not ctx.params:
        return program

    cli_args = ctx.params
    arguments = []
    options = []

    for param in click_command.params:
        if param.name not in cli_args:
            continue

        value = cli_args[param.name]
        if value is None or value == ():
            continue

        if isinstance(param, click.Argument):
            if isinstance(value, (str, Path)):
                path_obj = Path(str(value))
                value = path_obj.name if path_obj.exists() else str(value)
            arguments.append(str(value))

        elif isinstance(param, click.Option):
            # Skip options left at their default value
            if value == param.default:
                continue

            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                if param.secondary_opts and not value:
                    flag = param.secondary_opts[0]
                options.append(flag)
            else:
                if isinstance(value, (str, Path)) and Path(str(value)).exists():
                    value = Path(str(value)).name
                options.extend([flag, str(value)])

    return " ".join([program, *arguments, *options])

# -----------------------------------------------------------------------------
# jjslice - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of jjslice.
#
# jjslice is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------

from enum import Enum
from pathlib import Path
from textwrap import shorten
from typing import Any

import typer
from colorama import Fore, Style
from platformdirs import user_config_dir
from pydantic import ValidationError as PydanticValidationError

from jjslice.constants import APP_NAME, CONFIG_FILENAME, ENV_PREFIX
from jjslice.context import GlobalConfig
from jjslice.core.config.config_loader import ConfigLoader
from jjslice.core.exceptions import (
    ConfigurationError,
    ValidationError,
    handle_jjslice_exception,
)


class ConfigScope(str, Enum):
    LOCAL = "local"
    GLOBAL = "global"
    ENV = "env"


def display_config(data: list[dict], max_value_length: int = 50) -> None:
    """
    Display config data in a two-line format:
    Key: Description
      Value (Source)
    """
    for item in data:
        value_display = shorten(
            str(item["Value"]), width=max_value_length, placeholder="..."
        )
        print(
            f"{Fore.CYAN}{Style.BRIGHT}{item['Key']}{Style.RESET_ALL}: "
            f"{Fore.WHITE}{item['Description']}{Style.RESET_ALL}"
        )
        print(
            f"  {Fore.GREEN}{value_display}{Style.RESET_ALL} "
            f"{Fore.YELLOW}({item['Source']}){Style.RESET_ALL}"
        )
        print()


def _get_config_schema() -> dict[str, dict[str, Any]]:
    """Get the schema of available config options from GlobalConfig."""
    return {
        name: {
            "description": info.description or "No description available",
            "default": info.default,
            "type": info.annotation,
        }
        for name, info in GlobalConfig.model_fields.items()
    }


def _global_config_path() -> Path:
    return Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME


def _check_key_exists(key: str) -> dict:
    schema = _get_config_schema()
    if key not in schema:
        raise ValidationError(
            f"Unknown configuration key '{key}'",
            f"Available keys: {', '.join(sorted(schema))}",
        )
    return schema[key]


def _convert_value(value: str, target_type: Any) -> Any:
    if target_type is bool:
        if value.lower() in ("true", "1", "yes", "on"):
            return True
        if value.lower() in ("false", "0", "no", "off"):
            return False
        raise ValidationError(f"Expected a boolean, got '{value}'")
    return value


def _help_callback(ctx: typer.Context, param, value: bool):
    if not value or ctx.resilient_parsing:
        return
    typer.echo(ctx.get_help())
    raise typer.Exit()


def _set_config(key: str, value: str, scope: str) -> None:
    field_info = _check_key_exists(key)

    if scope == "env":
        env_var = f"{ENV_PREFIX.upper()}{key.upper()}"
        print(f"{Fore.GREEN}To set this as an environment variable:{Style.RESET_ALL}")
        print(f"  Windows (PowerShell): $env:{env_var}='{value}'")
        print(f"  Windows (CMD): set {env_var}={value}")
        print(f"  Linux/macOS: export {env_var}='{value}'")
        return

    if scope == "global":
        config_path = _global_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        config_path = Path(CONFIG_FILENAME)

    config_data = ConfigLoader.load_toml(config_path)
    final_value = _convert_value(value, field_info["type"])
    config_data[key] = final_value

    # validate the merged file before writing it
    try:
        GlobalConfig.model_validate(config_data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid value for {key}: {value}", str(e)) from e

    with open(config_path, "w", encoding="utf-8") as f:
        for k, v in config_data.items():
            if isinstance(v, bool):
                f.write(f"{k} = {str(v).lower()}\n")
            else:
                escaped = str(v).replace("\\", "\\\\").replace('"', '\\"')
                f.write(f'{k} = "{escaped}"\n')

    print(f"{Fore.GREEN}Set {key} = {final_value} ({scope}){Style.RESET_ALL}")
    print(f"Config file: {config_path.absolute()}")


def _get_config(key: str | None, scope: str | None) -> None:
    schema = _get_config_schema()
    if key is not None:
        _check_key_exists(key)

    # display priority: Local > Env > Global
    sources = []
    if scope in (None, "local"):
        sources.append(("Local Config", ConfigLoader.load_toml(Path(CONFIG_FILENAME))))
    if scope in (None, "env"):
        sources.append(("Environment", ConfigLoader.load_env(ENV_PREFIX)))
    if scope in (None, "global"):
        sources.append(("Global Config", ConfigLoader.load_toml(_global_config_path())))

    keys = [key] if key is not None else sorted(schema)
    table_data = []
    for k in keys:
        value = schema[k]["default"]
        source = "Default"
        for source_name, config_data in sources:
            if k in config_data:
                value = config_data[k]
                source = source_name
                break
        table_data.append(
            {
                "Key": k,
                "Description": schema[k]["description"],
                "Value": value,
                "Source": source,
            }
        )

    display_config(table_data)


@handle_jjslice_exception
def main(
    ctx: typer.Context,
    help: bool = typer.Option(
        False,
        "--help",
        callback=_help_callback,
        is_eager=True,
        help="Show this message and exit.",
    ),
    key: str | None = typer.Argument(None, help="Configuration key to get or set."),
    value: str | None = typer.Argument(
        None, help="Value to set (omit to get current value)."
    ),
    scope: ConfigScope | None = typer.Option(
        None,
        "--scope",
        help="Select which scope to modify. Defaults to local for setting, all for getting.",
    ),
) -> None:
    """
    Manage global and local jjslice configurations.

    Priority order: program arguments > custom config > local config > environment variables > global config

    Examples:
        # Show all configuration
        jjslice config

        # Use a jj binary that is not on PATH
        jjslice config jj_binary /opt/jj/bin/jj --scope global
    """
    if value is not None:
        if key is None:
            raise ValidationError("Key is required when setting a value")
        _set_config(key, value, scope.value if scope else "local")
    else:
        _get_config(key, scope.value if scope else None)

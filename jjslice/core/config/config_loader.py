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

"""Settings for GlobalConfig, merged from CLI options, TOML files and the environment."""

import os
from pathlib import Path

import tomllib
from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError


class ConfigLoader:
    @staticmethod
    def get_full_config(
        config_model: type[BaseModel],
        input_args: dict,
        local_config_path: Path,
        env_app_prefix: str,
        global_config_path: Path,
        custom_config_path: Path | None = None,
    ) -> tuple[BaseModel, list[str], bool]:
        """
        Build ``config_model`` field by field from the first source that sets it.

        Sources in priority order: input args, custom config, local config,
        environment, global config. Returns the model, the names of the
        sources that contributed and whether any field fell back to its default.
        """
        sources = [("Input Args", input_args)]
        if custom_config_path is not None:
            if not custom_config_path.exists():
                raise ConfigurationError(
                    f"Custom config file not found: {custom_config_path}"
                )
            sources.append(
                ("Custom Config", ConfigLoader.load_toml(custom_config_path))
            )
        sources += [
            ("Local Config", ConfigLoader.load_toml(local_config_path)),
            ("Environment Variables", ConfigLoader.load_env(env_app_prefix)),
            ("Global Config", ConfigLoader.load_toml(global_config_path)),
        ]

        merged = {}
        contributors = []
        for name, values in sources:
            logger.debug(f"{name}: {values}")
            picked = {
                k: v
                for k, v in values.items()
                if k in config_model.model_fields and k not in merged
            }
            if picked:
                merged.update(picked)
                contributors.append(name)

        try:
            model = config_model.model_validate(merged)
        except PydanticValidationError as e:
            raise ConfigurationError("Invalid configuration", str(e)) from e

        return model, contributors, len(merged) < len(config_model.model_fields)

    @staticmethod
    def load_toml(path: Path) -> dict:
        """Read a TOML file; a missing or unparsable file counts as empty."""
        if not path.exists():
            return {}
        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.warning(f"Ignoring unreadable config {path}: {e}")
            return {}

    @staticmethod
    def load_env(app_prefix: str) -> dict:
        """Settings from ``<PREFIX>NAME`` variables, keyed by lowercase NAME."""
        prefix = app_prefix.lower()
        return {
            k[len(prefix) :].lower(): v
            for k, v in os.environ.items()
            if k.lower().startswith(prefix)
        }

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

import pytest

from jjslice.context import GlobalConfig
from jjslice.core.config.config_loader import ConfigLoader
from jjslice.core.exceptions import ConfigurationError

# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------


def test_load_toml_missing_file(tmp_path):
    assert ConfigLoader.load_toml(tmp_path / "missing.toml") == {}


def test_load_toml_invalid_file(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("this is = = not toml")

    assert ConfigLoader.load_toml(path) == {}


def test_load_env_strips_prefix(monkeypatch):
    monkeypatch.setenv("JJSLICE_JJ_BINARY", "/opt/jj")
    monkeypatch.setenv("OTHER_VALUE", "ignored")

    data = ConfigLoader.load_env("jjslice_")

    assert data["jj_binary"] == "/opt/jj"
    assert "other_value" not in data


def test_priority_order(tmp_path, monkeypatch):
    local = tmp_path / "local.toml"
    local.write_text('jj_binary = "local-jj"\nanchor_prefix = "local-prefix"\n')
    global_ = tmp_path / "global.toml"
    global_.write_text('jj_binary = "global-jj"\nanchor_prefix = "g"\nsilent = true\n')
    monkeypatch.setenv("JJSLICE_ANCHOR_PREFIX", "env-prefix")
    monkeypatch.setenv("JJSLICE_VERBOSE", "true")

    config, sources, used_defaults = ConfigLoader.get_full_config(
        GlobalConfig,
        {"jj_binary": "arg-jj"},
        local,
        "jjslice_",
        global_,
    )

    assert config.jj_binary == "arg-jj"
    assert config.anchor_prefix == "local-prefix"
    assert config.verbose is True
    assert config.silent is True
    assert sources == [
        "Input Args",
        "Local Config",
        "Environment Variables",
        "Global Config",
    ]
    assert used_defaults is False


def test_custom_config_beats_local(tmp_path):
    local = tmp_path / "local.toml"
    local.write_text('jj_binary = "local-jj"\n')
    custom = tmp_path / "custom.toml"
    custom.write_text('jj_binary = "custom-jj"\n')

    config, sources, used_defaults = ConfigLoader.get_full_config(
        GlobalConfig, {}, local, "jjslice_test_", tmp_path / "none.toml", custom
    )

    assert config.jj_binary == "custom-jj"
    assert sources == ["Custom Config"]
    assert used_defaults is True


def test_missing_custom_config_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        ConfigLoader.get_full_config(
            GlobalConfig,
            {},
            tmp_path / "local.toml",
            "jjslice_test_",
            tmp_path / "global.toml",
            tmp_path / "custom.toml",
        )


def test_invalid_value_raises_configuration_error(tmp_path):
    local = tmp_path / "local.toml"
    local.write_text('verbose = "sometimes"\n')

    with pytest.raises(ConfigurationError) as exc_info:
        ConfigLoader.get_full_config(
            GlobalConfig, {}, local, "jjslice_test_", tmp_path / "global.toml"
        )

    assert "verbose" in exc_info.value.details


def test_all_defaults(tmp_path):
    config, sources, used_defaults = ConfigLoader.get_full_config(
        GlobalConfig,
        {},
        tmp_path / "local.toml",
        "jjslice_test_",
        tmp_path / "global.toml",
    )

    assert config == GlobalConfig()
    assert sources == []
    assert used_defaults is True


def test_unknown_keys_are_ignored(tmp_path):
    local = tmp_path / "local.toml"
    local.write_text('colour = "blue"\n')

    config, sources, used_defaults = ConfigLoader.get_full_config(
        GlobalConfig, {}, local, "jjslice_test_", tmp_path / "global.toml"
    )

    assert not hasattr(config, "colour")
    assert sources == []
    assert used_defaults is True

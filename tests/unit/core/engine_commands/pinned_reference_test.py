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

from unittest.mock import Mock

import pytest

from jjslice.core.engine_commands.adapter import VersionEngineAdapter
from jjslice.core.engine_commands.pinned_reference import (
    DEFAULT_ANCHOR_PREFIX,
    PinnedReference,
    anchor_name,
    pinned_reference,
)
from jjslice.core.exceptions import AnchorError, EngineOperationError

# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------


def test_anchor_names_are_unique_and_prefixed():
    names = {anchor_name("pfx") for _ in range(50)}

    assert len(names) == 50
    assert all(name.startswith("pfx-") for name in names)
    assert anchor_name().startswith(DEFAULT_ANCHOR_PREFIX + "-")


def test_reference_str_is_name():
    assert str(PinnedReference("tmp-1", "@")) == "tmp-1"


def test_anchor_created_and_deleted_on_success():
    adapter = Mock(spec=VersionEngineAdapter)

    with pinned_reference(adapter, "@", "pfx") as anchor:
        adapter.create_anchor.assert_called_once_with(anchor.name, "@")
        adapter.delete_anchor.assert_not_called()
        assert anchor.revision == "@"

    adapter.delete_anchor.assert_called_once_with(anchor.name)


def test_anchor_deleted_when_body_raises():
    adapter = Mock(spec=VersionEngineAdapter)

    with pytest.raises(EngineOperationError):
        with pinned_reference(adapter, "@") as anchor:
            raise EngineOperationError("fold", "boom")

    adapter.delete_anchor.assert_called_once_with(anchor.name)


def test_delete_failure_raises_anchor_error():
    adapter = Mock(spec=VersionEngineAdapter)
    adapter.delete_anchor.side_effect = EngineOperationError("delete-anchor", "boom")

    with pytest.raises(AnchorError) as exc_info:
        with pinned_reference(adapter, "@") as anchor:
            pass

    assert anchor.name in exc_info.value.message
    assert "jj bookmark delete" in exc_info.value.details


def test_delete_failure_does_not_mask_body_error():
    adapter = Mock(spec=VersionEngineAdapter)
    adapter.delete_anchor.side_effect = EngineOperationError("delete-anchor", "boom")

    with pytest.raises(EngineOperationError) as exc_info:
        with pinned_reference(adapter, "@"):
            raise EngineOperationError("restore-file", "first failure")

    assert exc_info.value.step == "restore-file"


def test_create_failure_skips_body_and_delete():
    adapter = Mock(spec=VersionEngineAdapter)
    adapter.create_anchor.side_effect = EngineOperationError("create-anchor", "boom")
    body = Mock()

    with pytest.raises(EngineOperationError):
        with pinned_reference(adapter, "@"):
            body()

    body.assert_not_called()
    adapter.delete_anchor.assert_not_called()

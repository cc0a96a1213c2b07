# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging

import pytest

from lazymut.utils.env import (
    Environment,
    EnvironmentVariableError,
    StandardEnvironment,
    maybe_get_log_level,
)


def test_maybe_get_log_level_returns_none_when_not_set(env: Environment) -> None:
    assert maybe_get_log_level(env) is None


@pytest.mark.parametrize(
    "value,expected_level",
    [
        ("DEBUG", logging.DEBUG),
        ("info", logging.INFO),
        (" Warning ", logging.WARNING),
        ("ERROR", logging.ERROR),
    ],
)
def test_maybe_get_log_level_works(env, value: str, expected_level: int) -> None:
    env.set("LAZYMUT_LOG_LEVEL", value)

    assert maybe_get_log_level(env) == expected_level


def test_maybe_get_log_level_raises_error_when_value_is_invalid(env) -> None:
    env.set("LAZYMUT_LOG_LEVEL", "LOUD")

    with pytest.raises(
        EnvironmentVariableError, match=r"^`LAZYMUT_LOG_LEVEL` environment variable is expected to be one of DEBUG, INFO, WARNING, ERROR, but is 'LOUD' instead\.$"  # fmt: skip
    ) as exc_info:
        maybe_get_log_level(env)

    assert exc_info.value.var_name == "LAZYMUT_LOG_LEVEL"


def test_maybe_get_log_level_reads_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LAZYMUT_LOG_LEVEL", "debug")

    assert maybe_get_log_level(StandardEnvironment()) == logging.DEBUG

    monkeypatch.delenv("LAZYMUT_LOG_LEVEL")

    assert maybe_get_log_level(StandardEnvironment()) is None

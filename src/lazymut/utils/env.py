# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Final, final

from typing_extensions import override

LOG_LEVEL_VAR: Final = "LAZYMUT_LOG_LEVEL"

_LOG_LEVELS: Final = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class Environment(ABC):
    @abstractmethod
    def maybe_get(self, name: str) -> str | None: ...


class EnvironmentVariableError(Exception):
    def __init__(self, var_name: str, message: str) -> None:
        super().__init__(message)

        self.var_name = var_name


@final
class StandardEnvironment(Environment):
    """Reads variables from ``os.environ``."""

    @override
    def maybe_get(self, name: str) -> str | None:
        return os.environ.get(name)


def maybe_get_log_level(env: Environment) -> int | None:
    """
    Returns the log level set in ``LAZYMUT_LOG_LEVEL``, or ``None`` if the
    variable is not set.

    :raises EnvironmentVariableError: The variable holds an unknown level name.
    """
    s = env.maybe_get(LOG_LEVEL_VAR)
    if s is None:
        return None

    level = _LOG_LEVELS.get(s.strip().upper())
    if level is None:
        names = ", ".join(_LOG_LEVELS)

        raise EnvironmentVariableError(
            LOG_LEVEL_VAR, f"`{LOG_LEVEL_VAR}` environment variable is expected to be one of {names}, but is '{s}' instead."  # fmt: skip
        )

    return level

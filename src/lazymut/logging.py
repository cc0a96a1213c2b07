# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging
from logging import INFO, Formatter, Handler, Logger, StreamHandler, getLogger
from typing import Any, Final, final

from lazymut.utils.env import Environment, StandardEnvironment, maybe_get_log_level


@final
class LogWriter:
    """Writes log messages using ``format()`` strings."""

    _NO_HIGHLIGHT: Final = {"highlighter": None}

    def __init__(self, logger: Logger) -> None:
        self._logger = logger

    def debug(
        self, message: str, *args: Any, exc: BaseException | None = None, **kwargs: Any
    ) -> None:
        self._log(logging.DEBUG, message, args, kwargs, exc or False)

    def _log(
        self,
        level: int,
        message: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        exc_info: bool | BaseException = False,
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return

        if args or kwargs:
            message = message.format(*args, **kwargs)

        self._logger.log(level, message, exc_info=exc_info, extra=self._NO_HIGHLIGHT)

    def is_enabled_for_debug(self) -> bool:
        return self._logger.isEnabledFor(logging.DEBUG)

    @property
    def logger(self) -> Logger:
        return self._logger


def get_log_writer(name: str | None = None) -> LogWriter:
    """Returns the :class:`LogWriter` for the specified name."""
    return LogWriter(getLogger(name))


log = get_log_writer("lazymut")


def configure_logging(no_rich: bool = False, env: Environment | None = None) -> None:
    """
    Installs a console handler on the ``lazymut`` logger. The level is read
    from ``LAZYMUT_LOG_LEVEL`` and defaults to ``INFO``.

    :raises EnvironmentVariableError:
    """
    if env is None:
        env = StandardEnvironment()

    level = maybe_get_log_level(env)

    logger = log.logger

    for old_handler in logger.handlers[:]:
        logger.removeHandler(old_handler)

        old_handler.close()

    datefmt = "%Y-%m-%d %H:%M:%S"

    handler: Handler

    if no_rich:
        handler = StreamHandler()

        formatter = Formatter(
            "%(asctime)s %(levelname)s: %(name)s - %(message)s", datefmt
        )
    else:
        from rich.logging import RichHandler

        from lazymut.utils.rich import get_error_console

        handler = RichHandler(console=get_error_console(), show_path=False, keywords=[])

        formatter = Formatter("%(name)s - %(message)s", datefmt)

    handler.setFormatter(formatter)

    logger.addHandler(handler)

    logger.setLevel(INFO if level is None else level)

    logger.propagate = False

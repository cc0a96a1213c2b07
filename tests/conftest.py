# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

from collections.abc import Iterator
from typing import final

import pytest
from typing_extensions import override

from lazymut.logging import log
from lazymut.utils.env import Environment


@final
class FooEnvironment(Environment):
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    @override
    def maybe_get(self, name: str) -> str | None:
        return self._data.get(name)

    def set(self, name: str, value: str) -> None:
        self._data[name] = value


@pytest.fixture
def env() -> FooEnvironment:
    return FooEnvironment()


@pytest.fixture
def restore_logger() -> Iterator[None]:
    logger = log.logger

    handlers = logger.handlers[:]

    level, propagate = logger.level, logger.propagate

    try:
        yield
    finally:
        for handler in logger.handlers[:]:
            if handler not in handlers:
                logger.removeHandler(handler)

        for handler in handlers:
            if handler not in logger.handlers:
                logger.addHandler(handler)

        logger.setLevel(level)

        logger.propagate = propagate

# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

from lazymut.error import BorrowError as BorrowError
from lazymut.error import InvalidOperationError as InvalidOperationError
from lazymut.error import PoisonedError as PoisonedError
from lazymut.lazy import LazyMut as LazyMut
from lazymut.lazy import LazyMutRef as LazyMutRef
from lazymut.logging import configure_logging as configure_logging

__version__ = "0.1.0"

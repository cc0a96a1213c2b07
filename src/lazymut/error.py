# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations


class InvalidOperationError(Exception):
    pass


class PoisonedError(InvalidOperationError):
    """Raised when a cell whose initializer previously failed is used again."""


class BorrowError(InvalidOperationError):
    """Raised when a cell is accessed while it is mutably borrowed."""

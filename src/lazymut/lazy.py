# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Final, Generic, TypeVar, final

from lazymut.error import BorrowError, InvalidOperationError, PoisonedError
from lazymut.logging import log

T = TypeVar("T")


@final
@dataclass(frozen=True)
class _Uninit(Generic[T]):
    factory: Callable[[], T]


@final
@dataclass
class _Inited(Generic[T]):
    value: T


@final
class _Poisoned:
    pass


_POISONED: Final = _Poisoned()


@final
class LazyMut(Generic[T]):
    """
    Holds either a deferred initializer or the value it produced, and hands out
    that value for in-place mutation.

    The initializer is called at most once, the first time :meth:`get` is
    called. If it raises, the cell is poisoned and every later :meth:`get` or
    :meth:`into_value` call raises :class:`PoisonedError`.

    .. code:: python

        index = LazyMut(lambda: [1])

        index.get().append(2)

        assert index.try_get() == [1, 2]

    The cell is not thread-safe. While its initializer runs or a
    :meth:`borrow_mut` context is open, any other access raises
    :class:`BorrowError`.
    """

    _state: _Uninit[T] | _Inited[T] | _Poisoned | None
    _borrowed: bool

    def __init__(self, factory: Callable[[], T]) -> None:
        """
        :param factory: The callable that produces the value. It is not called
            until the value is first requested.
        """
        if not callable(factory):
            raise TypeError(
                f"`factory` must be callable, but is of type `{type(factory)}` instead."
            )

        self._state = _Uninit(factory)

        self._borrowed = False

    @staticmethod
    def from_value(value: T) -> LazyMut[T]:
        """Returns a cell that is already initialized with ``value``."""
        cell: LazyMut[T] = LazyMut.__new__(LazyMut)

        cell._state = _Inited(value)

        cell._borrowed = False

        return cell

    @staticmethod
    def from_default(kls: Callable[[], T]) -> LazyMut[T]:
        """
        Returns a cell that is already initialized with ``kls()``, for types
        that can be constructed without arguments (e.g. ``list``, ``dict``).
        """
        return LazyMut.from_value(kls())

    def try_get(self) -> T | None:
        """
        Returns the value if the cell is initialized; otherwise, ``None``. Never
        triggers initialization.
        """
        state = self._check_state()

        if isinstance(state, _Inited):
            return state.value

        return None

    def try_get_mut(self) -> T | None:
        """
        Same as :meth:`try_get`, for callers that mutate the returned value in
        place.
        """
        return self.try_get()

    def get(self) -> T:
        """
        Returns the value, calling the initializer first if the cell is not
        initialized yet.

        :raises PoisonedError: A previous initialization attempt failed.
        """
        state = self._check_state()

        match state:
            case _Inited():
                return state.value
            case _Uninit():
                return self._initialize(state.factory)
            case _:
                raise PoisonedError("`LazyMut` instance has previously been poisoned.")

    def _initialize(self, factory: Callable[[], T]) -> T:
        if log.is_enabled_for_debug():
            log.debug("Initializing lazy value with {}.", _name_of(factory))

        # Poison first so that a raising factory leaves no usable state behind.
        # Nothing but the factory call may run until the state is replaced.
        self._state = _POISONED

        self._borrowed = True

        try:
            value = factory()
        except BaseException as ex:
            if log.is_enabled_for_debug():
                log.debug("Lazy value initializer failed. Poisoning the cell.", exc=ex)

            raise
        finally:
            self._borrowed = False

        self._state = _Inited(value)

        log.debug("Lazy value initialized.")

        return value

    @contextmanager
    def borrow_mut(self) -> Iterator[LazyMutRef[T]]:
        """
        Initializes the cell if needed and yields a :class:`LazyMutRef` through
        which the value can be read or replaced. The cell cannot be accessed
        in any other way until the context exits.

        :raises PoisonedError: A previous initialization attempt failed.
        """
        self.get()

        self._borrowed = True

        ref = LazyMutRef(self)

        try:
            yield ref
        finally:
            ref._release()

            self._borrowed = False

    def into_value(self) -> T | None:
        """
        Returns the value if the cell is initialized; otherwise, ``None``. The
        initializer is never called. The cell cannot be used afterwards.

        :raises PoisonedError: A previous initialization attempt failed.
        """
        state = self._check_state()

        if isinstance(state, _Poisoned):
            raise PoisonedError("`LazyMut` instance has previously been poisoned.")

        self._state = None

        if isinstance(state, _Inited):
            return state.value

        return None

    @property
    def is_initialized(self) -> bool:
        return isinstance(self._state, _Inited)

    @property
    def is_poisoned(self) -> bool:
        return isinstance(self._state, _Poisoned)

    def _check_state(self) -> _Uninit[T] | _Inited[T] | _Poisoned:
        if self._borrowed:
            raise BorrowError("`LazyMut` instance is already mutably borrowed.")

        if self._state is None:
            raise InvalidOperationError(
                "`LazyMut` instance has already been consumed by `into_value()`."
            )

        return self._state

    def __repr__(self) -> str:
        if self._borrowed:
            return "LazyMut(<borrowed>)"

        if self._state is None:
            return "LazyMut(<consumed>)"

        if isinstance(self._state, _Inited):
            return f"LazyMut({self._state.value!r})"

        return "LazyMut(<uninit>)"


@final
class LazyMutRef(Generic[T]):
    """A mutable view of an initialized :class:`LazyMut`, valid inside
    :meth:`LazyMut.borrow_mut` only."""

    def __init__(self, cell: LazyMut[T]) -> None:
        self._cell: LazyMut[T] | None = cell

    @property
    def value(self) -> T:
        state = self._inited_state()

        return state.value

    @value.setter
    def value(self, value: T) -> None:
        state = self._inited_state()

        state.value = value

    def _release(self) -> None:
        self._cell = None

    def _inited_state(self) -> _Inited[T]:
        cell = self._cell

        if cell is None:
            raise InvalidOperationError(
                "`LazyMutRef` cannot be used outside of its `borrow_mut()` context."
            )

        state = cell._state

        if not isinstance(state, _Inited):
            raise InvalidOperationError("The borrowed `LazyMut` is not initialized.")

        return state


def _name_of(factory: Callable[..., object]) -> str:
    return getattr(factory, "__qualname__", None) or repr(factory)

"""Beartype configurations for the storage entry points.

Overloaded entry points dispatch on which arguments were given, so their
implementation signature is wider than any single overload. They are decorated
with ``bear_spray``, which skips runtime checks. Plain entry points use
``bear_enforce``.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from beartype import BeartypeConf, BeartypeStrategy, beartype

F = TypeVar("F", bound=Callable[..., Any])

no_bear_type_check_conf = BeartypeConf(strategy=BeartypeStrategy.O0)

enforce_bear_type_conf = BeartypeConf(strategy=BeartypeStrategy.O1)


def bear_spray(func: F) -> F:
    return beartype(conf=no_bear_type_check_conf)(func)


def bear_enforce(func: F) -> F:
    return beartype(conf=enforce_bear_type_conf)(func)

"""Ok/Err values for operations whose failures the caller reports, not raises."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

K = TypeVar("K")
T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E


Result: TypeAlias = Ok[T] | Err[E]


def collect(results: Iterable[tuple[K, Result[T, E]]]) -> Result[dict[K, T], E]:
    """Gather keyed results into one dict, stopping at the first ``Err``."""
    values: dict[K, T] = {}
    for key, result in results:
        match result:
            case Ok(value):
                values[key] = value
            case Err():
                return result
    return Ok(values)

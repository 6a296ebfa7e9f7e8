"""Outcome Variants — explicit results for expected conditions.

Invariants:
    - Ok carries the value; NotFound and ClientFault carry a client-facing message
    - Only truly unexpected faults are raised; everything else is one of these
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    message: str

    status_code = 404


@dataclass(frozen=True)
class ClientFault:
    message: str
    details: list[dict] = field(default_factory=list)

    status_code = 400


Outcome = Union[Ok[T], NotFound, ClientFault]

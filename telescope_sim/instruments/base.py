"""
Instrument capability set shared by the photometer and the spectrometer.

    configure(**settings)   change settings (rejected while integrating)
    begin_integration()     arm the integration ticker
    tick()                  one integration step (called by the ticker)
    finalize()              stop the ticker and freeze the result
"""

from __future__ import annotations
from typing import Callable, Protocol, runtime_checkable

from ..core.types import PointingInfo
from ..errors import PreconditionError

PointingSource = Callable[[], PointingInfo]


@runtime_checkable
class Instrument(Protocol):
    integrating: bool

    def configure(self, **settings) -> None: ...

    def begin_integration(self) -> bool: ...

    def tick(self) -> None: ...

    def finalize(self) -> None: ...


def require_idle(instrument: Instrument, action: str):
    """Raise PreconditionError if the instrument is mid-integration."""
    if instrument.integrating:
        raise PreconditionError(f"Cannot {action} while integrating")

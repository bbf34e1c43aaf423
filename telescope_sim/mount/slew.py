"""
Telescope mount — manual and automatic slewing.

State machine
-------------
  IDLE   → MANUAL   start_slew(direction)
  MANUAL → IDLE     stop_slew() / abort()
  IDLE   → AUTO     slew_to(target)   (also from MANUAL; AUTO is re-targeted)
  AUTO   → IDLE     arrival / abort()

One slew ticker runs while the mount is not IDLE. Each tick moves the
pointing by one step of the selected speed:
  manual : step_deg along the direction (RA step = step_deg / 15 hours)
  auto   : toward the target, RA difference wrapped to [-12, 12] hours so
           the mount takes the short way round. When both remaining deltas
           are within one step the pointing snaps to the target.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Optional, Sequence

from ..core.scheduler import Scheduler, Ticker
from ..core.types import SlewTarget
from ..instruments.equipment import DEFAULT_SLEW_SPEED_INDEX, SLEW_SPEEDS, SlewSpeed
from .pointing import Pointing

logger = logging.getLogger(__name__)


class SlewState(Enum):
    IDLE = "idle"
    MANUAL = "manual"
    AUTO = "auto"


class Direction(Enum):
    """Hand-paddle directions as (dx, dy) = (RA sign, Dec sign)"""
    NORTH = (0, 1)
    SOUTH = (0, -1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @classmethod
    def parse(cls, name: str) -> "Direction":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown slew direction: {name}") from None


def _sign(x: float) -> float:
    return (x > 0) - (x < 0)


class TelescopeMount:
    """
    Pointing plus slew state, driven by a Scheduler ticker.

    Args:
        scheduler: Tick source for the slew ticker
        pointing: Initial pointing (default RA 0h, Dec 0°)
        speeds: Slew speed table
        speed_index: Initial speed
    """

    def __init__(self, scheduler: Scheduler, pointing: Optional[Pointing] = None,
                 speeds: Sequence[SlewSpeed] = SLEW_SPEEDS,
                 speed_index: int = DEFAULT_SLEW_SPEED_INDEX):
        if not speeds:
            raise ValueError("At least one slew speed is required")
        self.scheduler = scheduler
        self.pointing = pointing if pointing is not None else Pointing()
        self.speeds = tuple(speeds)
        self.speed_index = speed_index % len(self.speeds)

        self.state = SlewState.IDLE
        self.direction: Optional[Direction] = None
        self.target: Optional[SlewTarget] = None
        self._ticker: Optional[Ticker] = None

    # ── Properties ───────────────────────────────────────────────────────────

    @property
    def speed(self) -> SlewSpeed:
        return self.speeds[self.speed_index]

    @property
    def is_slewing(self) -> bool:
        return self.state != SlewState.IDLE

    # ── Commands ─────────────────────────────────────────────────────────────

    def cycle_speed(self) -> SlewSpeed:
        """Next speed (wraps); an active slew continues at the new rate."""
        self.speed_index = (self.speed_index + 1) % len(self.speeds)
        if self._ticker is not None:
            self._ticker.reschedule(self.speed.interval_s)
        logger.info(self.speed.label)
        return self.speed

    def start_slew(self, direction: Direction | str) -> bool:
        """Begin a manual slew. Ignored unless the mount is idle."""
        if isinstance(direction, str):
            direction = Direction.parse(direction)
        if self.state != SlewState.IDLE:
            return False
        self.state = SlewState.MANUAL
        self.direction = direction
        self._start_ticker()
        return True

    def stop_slew(self):
        """Release of the direction button."""
        if self.state == SlewState.MANUAL:
            self._to_idle()

    def abort(self):
        """Stop any slew and forget the target."""
        if self.state != SlewState.IDLE:
            logger.info("Slew aborted")
        self._to_idle()

    def slew_to(self, target: SlewTarget):
        """Automatic slew toward target."""
        self.target = target
        self.direction = None
        self.state = SlewState.AUTO
        logger.info("Slewing to %s (RA %.5fh, Dec %.5f°)", target.name or "target",
                    target.ra, target.dec)
        if self._ticker is None:
            self._start_ticker()

    # ── Ticking ──────────────────────────────────────────────────────────────

    def step(self):
        """One slew tick."""
        step_deg = self.speed.step_deg
        step_ra = step_deg / 15.0
        p = self.pointing

        if self.state == SlewState.AUTO and self.target is not None:
            d_ra = self.target.ra - p.center_ra
            d_dec = self.target.dec - p.center_dec
            if d_ra > 12.0:
                d_ra -= 24.0
            if d_ra < -12.0:
                d_ra += 24.0

            ra = p.center_ra + _sign(d_ra) * step_ra if abs(d_ra) > step_ra else self.target.ra
            dec = p.center_dec + _sign(d_dec) * step_deg if abs(d_dec) > step_deg else self.target.dec
            p.move_to(ra, dec)

            if abs(d_ra) <= step_ra and abs(d_dec) <= step_deg:
                logger.info("Arrived at %s", self.target.name or "target")
                self._to_idle()
        elif self.state == SlewState.MANUAL and self.direction is not None:
            p.move_by(self.direction.dx * step_ra, self.direction.dy * step_deg)

    # ── Internals ────────────────────────────────────────────────────────────

    def _start_ticker(self):
        self._ticker = self.scheduler.every(self.speed.interval_s, self.step, name="slew")

    def _to_idle(self):
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        self.state = SlewState.IDLE
        self.direction = None
        self.target = None

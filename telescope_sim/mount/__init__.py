"""
Mount package — pointing and slew control.

Usage:
    from telescope_sim.mount import TelescopeMount, Direction
    mount = TelescopeMount(scheduler)
    mount.start_slew(Direction.NORTH)
    scheduler.advance(0.5)
    mount.stop_slew()
"""
from .pointing import Pointing
from .slew import Direction, SlewState, TelescopeMount

__all__ = ["Pointing", "Direction", "SlewState", "TelescopeMount"]

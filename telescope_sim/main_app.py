"""
Telescope Simulator - Headless Runner

Runs one observing session from the command line:
- select telescope and field
- optionally slew to a catalog object
- optionally take a photometry reading and/or a timed spectrum

Real time is paced with a pygame clock; --fast drives the virtual clock
without waiting.

    python -m telescope_sim.main_app --telescope 2 --field "Pleiades star cluster" --photometry
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

import pygame

from .config import DEFAULT_CONFIG
from .engine.state_manager import ObservatoryEngine
from .errors import CatalogLoadError, PreconditionError
from .mount.slew import SlewState

logger = logging.getLogger(__name__)

FPS = 60
FAST_STEP_S = 0.0125    # one Medium/Fast slew period
MAX_SLEW_S = 3600.0


class ObservingSession:
    """
    Drives an ObservatoryEngine until a condition holds.

    Args:
        engine: Engine to run
        fast: Advance virtual time in fixed steps instead of wall-clock time
    """

    def __init__(self, engine: ObservatoryEngine, fast: bool = False):
        self.engine = engine
        self.fast = fast
        self.clock = pygame.time.Clock()

    def run_until(self, done: Callable[[], bool], limit_s: float) -> float:
        """Advance the engine until done() is true or limit_s elapses."""
        elapsed = 0.0
        while not done() and elapsed < limit_s:
            dt = FAST_STEP_S if self.fast else self.clock.tick(FPS) / 1000.0
            self.engine.advance(dt)
            elapsed += dt
        return elapsed

    def print_pointing(self):
        snap = self.engine.snapshot()
        p = snap.pointing
        print(f"RA {snap.ra_label}  Dec {snap.dec_label}")
        if p.telescope is not None:
            print(f"LST {p.lst:.4f}h  Alt {p.altitude:.2f}°  Az {p.azimuth:.2f}°  "
                  f"({self.engine.clock.date_label()} {self.engine.clock.time_label()} UTC)")
        print(f"{len(snap.finder.objects)} catalog objects and "
              f"{len(snap.finder.background_stars)} background stars in the finder")

    def slew_to(self, name: str) -> bool:
        matches = self.engine.catalog.search_by_name(name)
        if not matches:
            logger.error("No catalog object matches %r", name)
            return False
        self.engine.select_object(matches[0])
        took = self.run_until(lambda: self.engine.slew_state == SlewState.IDLE, MAX_SLEW_S)
        print(f"Slewed to {matches[0].name} in {took:.1f}s")
        return True

    def photometry(self, band: str):
        phot = self.engine.photometer
        phot.configure(filter=band)
        phot.begin_integration()
        self.run_until(lambda: not phot.integrating, phot.integration_time + 1.0)
        if phot.history:
            for line in phot.history[-1].log_lines():
                print(line)

    def spectrum(self, seconds: int):
        spec = self.engine.spectrometer
        if spec.update_slit() is None:
            logger.error("No object in slit")
            return
        spec.begin_integration()
        limit = seconds * self.engine.config.spectrometer_interval_s
        self.run_until(lambda: spec.elapsed >= seconds, limit + 1.0)
        spec.finalize()
        result = spec.result()
        print(f"{result.object_name} ({spec.spectrum_source.value}): {result.status_line()}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="telescope-sim", description="Headless telescope simulator")
    ap.add_argument("--telescope", type=int, default=0, help="index into the telescope table")
    ap.add_argument("--field", default=DEFAULT_CONFIG.fields[0].name, help="observing field name")
    ap.add_argument("--data-dir", type=Path, default=DEFAULT_CONFIG.data_dir,
                    help="directory holding catalogs and the spectral atlas")
    ap.add_argument("--target", help="catalog object to slew to (substring match)")
    ap.add_argument("--photometry", action="store_true", help="take one photometry reading")
    ap.add_argument("--filter", default="V", choices=sorted(DEFAULT_CONFIG.filters))
    ap.add_argument("--spectrum", type=int, metavar="SECONDS", help="integrate a spectrum")
    ap.add_argument("--fast", action="store_true", help="run on virtual time without waiting")
    ap.add_argument("--log-level", default="INFO")
    return ap


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    engine = ObservatoryEngine(DEFAULT_CONFIG.with_overrides(data_dir=args.data_dir))
    try:
        engine.select_telescope(args.telescope)
        try:
            engine.select_field(args.field)
        except CatalogLoadError as e:
            logger.warning("%s; continuing with sample data", e)

        session = ObservingSession(engine, fast=args.fast)
        if args.target and not session.slew_to(args.target):
            return 1
        session.print_pointing()
        if args.photometry:
            session.photometry(args.filter)
        if args.spectrum:
            session.spectrum(args.spectrum)
    except (ValueError, PreconditionError) as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130
    finally:
        engine.shutdown()
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())

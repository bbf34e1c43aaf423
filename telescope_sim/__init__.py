"""
Telescope Simulator

Observation engine for an educational telescope with a UBV photometer and
a blue-region spectrometer.

    from telescope_sim import ObservatoryEngine
    engine = ObservatoryEngine()
    engine.select_telescope(0)
    engine.select_field("Pleiades star cluster")
"""

__version__ = "0.3.0"

from .config import DEFAULT_CONFIG, EngineConfig
from .engine.state_manager import ObservatoryEngine

__all__ = ["DEFAULT_CONFIG", "EngineConfig", "ObservatoryEngine", "__version__"]

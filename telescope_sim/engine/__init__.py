"""
Engine package — session state and component wiring.
"""
from .state_manager import EngineSnapshot, EngineState, ObservatoryEngine, ViewSnapshot

__all__ = ["EngineSnapshot", "EngineState", "ObservatoryEngine", "ViewSnapshot"]

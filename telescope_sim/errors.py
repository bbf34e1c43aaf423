"""
Simulator exceptions.

Two families:
  ResourceLoadError  — a catalog or spectral library could not be read.
                       The engine installs a fallback and still raises/records
                       the error so the caller can tell the user.
  PreconditionError  — a command was rejected before touching any state
                       (no object in the slit, no field loaded, ...).
"""


class SimulatorError(Exception):
    """Base class for all simulator errors"""


class ResourceLoadError(SimulatorError):
    """A static resource file was missing or malformed"""

    def __init__(self, resource: str, reason: str):
        super().__init__(f"Failed to load {resource}: {reason}")
        self.resource = resource
        self.reason = reason


class CatalogLoadError(ResourceLoadError):
    """Catalog file failed to load; the sample catalog was installed instead"""


class SpectralLibraryError(ResourceLoadError):
    """Spectral library failed to load; synthesis falls back to blackbodies"""


class PreconditionError(SimulatorError, RuntimeError):
    """Command rejected, nothing was changed"""

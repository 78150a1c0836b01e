from .extrema import DetectExtrema, Extremum, ExtremumType
from .persistence1d import NO_FILTERING, GlobalMinimum, PairedExtrema, Persistence1D, RunPersistence

__version__ = "1.0.0"

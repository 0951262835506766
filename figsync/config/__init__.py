from .loader import load_config
from .models import (
    ExportConfig,
    FigmaConfig,
    FigsyncConfig,
    ScanConfig,
    SpecsConfig,
)

__all__ = [
    "ExportConfig",
    "FigmaConfig",
    "FigsyncConfig",
    "ScanConfig",
    "SpecsConfig",
    "load_config",
]

from .loader import load_config
from .models import (
    CLIConfig,
    PolicyConfig,
    WardenConfig,
)

__all__ = [
    "CLIConfig",
    "PolicyConfig",
    "WardenConfig",
    "load_config",
]

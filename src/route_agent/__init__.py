"""route reconciliation agent runtime helpers."""

from .config import AgentConfig, load_config  # noqa: F401
from .converge import ConvergenceReport, converge  # noqa: F401

__all__ = [
    "AgentConfig",
    "ConvergenceReport",
    "converge",
    "load_config",
]

"""Statistics collected during a solve."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    status: str = "running"
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Search metrics
    decisions: int = 0
    backtracks: int = 0
    max_depth: int = 0

    # Propagation metrics
    propagations: int = 0
    reductions: int = 0

    # Additional metadata
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "status": self.status,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "decisions": self.decisions,
            "backtracks": self.backtracks,
            "max_depth": self.max_depth,
            "propagations": self.propagations,
            "reductions": self.reductions,
            **self.extra
        }

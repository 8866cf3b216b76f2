"""
engine/
-------
Run control, pacing & analytics layer.

    from engine import RunController, EngineHost, measure, compare
"""

from engine.state      import RunState, RunMetrics
from engine.pacer      import Pacer
from engine.controller import RunController, RunStatus
from engine.recorder   import ComparisonResult, measure, compare
from engine.host       import EngineHost

__all__ = [
    "RunState",
    "RunMetrics",
    "Pacer",
    "RunController",
    "RunStatus",
    "ComparisonResult",
    "measure",
    "compare",
    "EngineHost",
]

"""Pipeline coordination."""
from .bootstrap import BootstrapGate, RunState
from .orchestrator import Orchestrator, RunResult

__all__ = ["BootstrapGate", "RunState", "Orchestrator", "RunResult"]

"""Run lifecycle records.

Exports Run and its constructor, Result, Output and Outputs, and the records
exchanged with the bundle execution runtime.
"""

from bundlekeeper.run.claim import ExecutionClaim, ExecutionResult
from bundlekeeper.run.output import Output, Outputs
from bundlekeeper.run.result import Result
from bundlekeeper.run.run import Run, new_run

__all__ = [
    "ExecutionClaim",
    "ExecutionResult",
    "Output",
    "Outputs",
    "Result",
    "Run",
    "new_run",
]

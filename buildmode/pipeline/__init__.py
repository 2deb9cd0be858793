"""Pipeline modules.

Commands and step templates (commands.py) and the sequential fail-fast
executor (executor.py).

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from .commands import Command, StepTemplate, expand_step
from .executor import StepResult, run_command, run_pipeline

__all__ = [
    "Command",
    "StepTemplate",
    "expand_step",
    "StepResult",
    "run_command",
    "run_pipeline",
]

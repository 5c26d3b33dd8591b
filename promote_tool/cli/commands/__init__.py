# promote_tool/cli/commands/__init__.py
"""CLI commands"""

from . import prepare
from . import deploy
from . import dispatch
from . import doctor

__all__ = [
    "prepare",
    "deploy",
    "dispatch",
    "doctor",
]

from .build import build_command, build_logic
from .update import update_command, update_logic
from .verify import verify_command, verify_logic

__all__ = [
    "build_command",
    "build_logic",
    "update_command",
    "update_logic",
    "verify_command",
    "verify_logic",
]

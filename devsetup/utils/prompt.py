"""
Interactive confirmation before anything is installed.
"""

from typing import Callable, List, Optional, TextIO
import sys

from ..errors import UserCancelled
from ..models.tool import ToolSpec

AFFIRMATIVE = {"y", "yes"}


def confirm_install(specs: List[ToolSpec],
                    input_func: Callable[[str], str] = input,
                    stream: Optional[TextIO] = None) -> bool:
    """
    Ask the user to approve installing the listed tools.

    Only an explicit 'y' or 'yes' approves; Ctrl-C or end of input cancels.
    """
    stream = stream or sys.stdout
    stream.write(f"\nThis will check {len(specs)} tools and install any that are missing:\n")
    stream.write("  " + ", ".join(spec.name for spec in specs) + "\n\n")
    stream.flush()

    try:
        reply = input_func("Continue? (y/N): ")
    except (EOFError, KeyboardInterrupt):
        raise UserCancelled("No confirmation received") from None

    return reply.strip().lower() in AFFIRMATIVE

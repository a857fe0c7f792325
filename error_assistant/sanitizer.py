"""
Cleanup of captured notebook error output before it is put into a prompt.

Tracebacks from Jupyter arrive with ANSI colour codes and ragged
indentation; both are noise for the model and for the webhook log.
"""

from __future__ import annotations

import re

# CSI sequences ending in SGR ('m') or cursor-column ('G')
_ANSI_CSI_RE = re.compile(r"\x1b\[[0-9;]*[mG]")


def sanitize(raw: str) -> str:
    """Strip ANSI colour codes and trim every line.

    >>> sanitize("\\x1b[31mNameError\\x1b[0m   \\n   line 2")
    'NameError\\nline 2'
    """
    without_colours = raw
    # removing one sequence can splice the halves of another together
    while True:
        without_colours, removed = _ANSI_CSI_RE.subn("", without_colours)
        if not removed:
            break
    return "\n".join(line.strip() for line in without_colours.split("\n"))

"""Running external programs."""

from __future__ import annotations

import subprocess
import sys


def run_external(path: str, argv: list[str]) -> int:
    """Run the program at ``path`` with ``argv`` and wait for it to finish.

    Returns its exit status; a program killed by a signal gives 128 plus the
    signal number.
    """
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        completed = subprocess.run(argv, executable=path, check=False)
    except OSError as exc:
        print(f"execv: {exc.strerror}", file=sys.stderr)
        return 1
    if completed.returncode < 0:
        print("execv error", file=sys.stderr)
        return 128 - completed.returncode
    return completed.returncode
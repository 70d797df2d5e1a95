from __future__ import annotations

OK = 0
ERR_CONFIG = 3
ERR_VALIDATION = 4
ERR_INTERNAL = 99
ERR_NOT_EXECUTABLE = 126
ERR_SPAWN = 127
ERR_INTERRUPTED = 130


def from_returncode(returncode: int) -> int:
    """Map a `Popen.returncode` to a shell-style exit status.

    POSIX reports a child killed by signal N as -N; shells report it as 128 + N.
    """
    if returncode < 0:
        return 128 + (-returncode)
    return returncode

"""Detection of writes to the GitHub environment files from scripts."""

from __future__ import annotations

import re

GITHUB_ENV_WRITE_CMD = re.compile(
    r'^.+\s*>>?\s*"?%(?P<destination>GITHUB_ENV|GITHUB_PATH)%"?.*$',
    re.MULTILINE | re.IGNORECASE,
)


def cmd_uses_github_env(script: str) -> list[tuple[str, tuple[int, int]]]:
    """Find redirections into ``%GITHUB_ENV%`` or ``%GITHUB_PATH%`` in a cmd script.

    Returns one ``(destination, (start, end))`` pair per matching line,
    where the offsets delimit the variable name within ``script``.
    """
    return [
        (match.group("destination"), match.span("destination"))
        for match in GITHUB_ENV_WRITE_CMD.finditer(script)
    ]
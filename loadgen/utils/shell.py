"""Shell command execution utilities for loadgen.

Provides async subprocess execution with timeout support.
"""

import asyncio
import os
from typing import Dict, List, Optional

from loadgen.core.errors import CommandError


async def run_command(
    cmd: List[str],
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
    timeout: int = 300,
) -> tuple[str, str, int]:
    """Run command and return stdout, stderr, returncode.

    Args:
        cmd: Command and arguments as list
        cwd: Working directory
        env: Extra environment variables, merged over os.environ
        timeout: Maximum execution time in seconds

    Returns:
        Tuple of (stdout, stderr, returncode)

    Raises:
        CommandError: If command times out or cannot be started
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=cwd,
            env={**os.environ, **env} if env else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CommandError(cmd, -1, str(e)) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise CommandError(cmd, -1, f"timed out after {timeout}s")

    return stdout.decode(), stderr.decode(), process.returncode

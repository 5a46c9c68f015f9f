"""Running mediainfo against a file path or URL."""

from __future__ import annotations

import logging
import shlex

from mediatracks.exceptions import ArgumentError, ExecutionError
from mediatracks.settings import MediaInfoSettings, get_settings
from mediatracks.tool import ToolHandle, call_mediainfo, get_mediainfo

logger = logging.getLogger(__name__)

OUTPUT_FLAG = "--Output=XML"


def build_command(tool_path: str, input_arg: str) -> list[str]:
    """argv for an XML report of `input_arg`."""
    return [tool_path, input_arg, OUTPUT_FLAG]


def run_mediainfo(
    input_arg: str | None,
    *,
    settings: MediaInfoSettings | None = None,
    tool: ToolHandle | None = None,
) -> str:
    """
    Run mediainfo and return its raw XML report.

    The argument is passed as a single argv element (no shell), so paths with
    spaces or double quotes need no further escaping.

    Args:
        input_arg: Absolute file path or escaped URL
        settings: Settings for tool lookup and timeout
        tool: Already validated binary; located from settings if omitted

    Returns:
        Merged stdout/stderr of the run.

    Raises:
        ArgumentError: If input_arg is blank.
        ExecutionError: On non-zero exit, timeout or spawn failure.
    """
    if not input_arg:
        raise ArgumentError("Your input cannot be blank.")

    settings = settings or get_settings()
    tool = tool or get_mediainfo(settings)

    cmd = build_command(str(tool.path), input_arg)
    command = shlex.join(cmd)
    result = call_mediainfo(cmd, settings.timeout)
    raw_response = result.stdout or ""

    if result.returncode != 0:
        raise ExecutionError(
            f"Execution of '{command}' failed. {raw_response!r}",
            command=command,
            return_code=result.returncode,
            stdout=raw_response,
        )

    logger.info(f"Got MediaInfo for: {input_arg}")
    return raw_response

"""External process invoker.

Runs one OS command (``osascript``, ``system_profiler``, ``nmcli``) with a
hard timeout and captures stdout/stderr separately. ``invoke`` only
classifies; ``run_command`` turns the classification into either the trimmed
stdout or a typed ``PocketError``.
"""

from __future__ import annotations

import locale
import logging
import subprocess
import time

from core.domain.invocation import (
    DEFAULT_TIMEOUT_SECONDS,
    ExitClassification,
    InvocationRequest,
    InvocationResult,
    ScriptLanguage,
)
from core.errors import ProcessLaunchError, ProcessTimeoutError, ScriptError
from core.interfaces.runner import CommandRunner

LOGGER = logging.getLogger(__name__)


def invoke(request: InvocationRequest) -> InvocationResult:
    """Spawn exactly one process for ``request`` and classify the outcome."""

    LOGGER.debug(
        "process_request program=%s language=%s timeout=%.1fs",
        request.program,
        request.language.value if request.language else "-",
        request.timeout,
    )
    started = time.monotonic()
    try:
        process = subprocess.run(
            list(request.command),
            capture_output=True,
            timeout=request.timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        result = InvocationResult(
            stdout=_normalize_output(exc.stdout),
            stderr=_normalize_output(exc.stderr),
            classification=ExitClassification.TIMEOUT,
        )
    except OSError as exc:
        result = InvocationResult(
            stdout="",
            stderr="",
            classification=ExitClassification.LAUNCH_FAILURE,
            launch_error=str(exc),
        )
    else:
        result = InvocationResult(
            stdout=_normalize_output(process.stdout),
            stderr=_normalize_output(process.stderr),
            classification=(
                ExitClassification.SUCCESS
                if process.returncode == 0
                else ExitClassification.NON_ZERO_EXIT
            ),
            returncode=process.returncode,
        )

    LOGGER.debug(
        "process_result program=%s classification=%s returncode=%s duration=%.3fs stdout=%d stderr=%d",
        request.program,
        result.classification.value,
        result.returncode,
        time.monotonic() - started,
        len(result.stdout),
        len(result.stderr),
    )
    return result


def raise_for_result(request: InvocationRequest, result: InvocationResult) -> str:
    """Return trimmed stdout, or raise the error matching the classification."""

    if result.ok:
        return result.stdout.strip()
    if result.classification is ExitClassification.TIMEOUT:
        raise ProcessTimeoutError(
            f"{request.program} timed out after {_format_seconds(request.timeout)} seconds",
            details={"timeout_seconds": request.timeout},
        )
    if result.classification is ExitClassification.LAUNCH_FAILURE:
        raise ProcessLaunchError(
            result.launch_error or f"could not start {request.program}",
            details={"program": request.program},
        )

    message = result.stderr.strip() or f"exit status {result.returncode}"
    raise ScriptError(message, details={"returncode": result.returncode})


def run_command(
    command: tuple[str, ...] | list[str],
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    runner: CommandRunner = invoke,
) -> str:
    request = InvocationRequest(command=tuple(command), timeout=timeout)
    return raise_for_result(request, runner(request))


def run_osascript(
    script: str,
    language: ScriptLanguage = ScriptLanguage.APPLESCRIPT,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    runner: CommandRunner = invoke,
) -> str:
    request = InvocationRequest.osascript(script, language, timeout=timeout)
    return raise_for_result(request, runner(request))


def _format_seconds(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _normalize_output(payload: bytes | str | None) -> str:
    if payload is None:
        return ""
    if isinstance(payload, str):
        return payload

    for encoding in ("utf-8", locale.getpreferredencoding(False)):
        try:
            return payload.decode(encoding)
        except (LookupError, UnicodeDecodeError):
            continue
    return payload.decode("utf-8", errors="replace")

"""Process invocation values.

An ``InvocationRequest`` is built once per external call and never mutated;
``InvocationResult`` is the classified outcome. Neither outlives the
subcommand that created it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_TIMEOUT_SECONDS = 30.0


class ScriptLanguage(str, Enum):
    """osascript language variants.

    ``APPLESCRIPT`` iterates records one Apple Event at a time (slow, but
    exposes labels and nested properties); ``JAVASCRIPT`` (JXA) fetches one
    property for every record in a single call.
    """

    APPLESCRIPT = "AppleScript"
    JAVASCRIPT = "JavaScript"


class ExitClassification(str, Enum):
    SUCCESS = "success"
    TIMEOUT = "timeout"
    NON_ZERO_EXIT = "non_zero_exit"
    LAUNCH_FAILURE = "launch_failure"


@dataclass(frozen=True)
class InvocationRequest:
    command: tuple[str, ...]
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    language: ScriptLanguage | None = None

    @classmethod
    def osascript(
        cls,
        script: str,
        language: ScriptLanguage = ScriptLanguage.APPLESCRIPT,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> InvocationRequest:
        return cls(
            command=("osascript", "-l", language.value, "-e", script),
            timeout=timeout,
            language=language,
        )

    @property
    def program(self) -> str:
        return self.command[0] if self.command else ""


@dataclass(frozen=True)
class InvocationResult:
    stdout: str
    stderr: str
    classification: ExitClassification
    returncode: int | None = None
    launch_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.classification is ExitClassification.SUCCESS

"""Process runner contract.

Sources that shell out (Contacts, WiFi) receive a runner in their
constructor. The default is ``adapters.process_runner.invoke``; tests pass a
plain function returning canned ``InvocationResult`` values.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.invocation import InvocationRequest, InvocationResult


@runtime_checkable
class CommandRunner(Protocol):
    """Minimal contract for running one external process.

    Design rules:
    - Exactly one OS process per call; no retry, no pooling.
    - Never raises for process-level failures: timeouts, non-zero exits and
      launch failures are reported through ``InvocationResult.classification``.
    """

    def __call__(self, request: InvocationRequest) -> InvocationResult:
        ...

"""Fire-and-forget process launching for configured handlers.

The handler process is detached (new session, stdio to devnull) and never
waited on. Only an immediate spawn error is observable; it comes back as a
failed ServiceResult rather than an exception.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

from browdi.services.result import ServiceResult, failure

if TYPE_CHECKING:
    from browdi.domain.targets import OpenTarget

logger = logging.getLogger(__name__)


def _local_path(target: OpenTarget) -> str:
    """File-system path for ``file://`` targets; the raw URI otherwise."""
    if target.scheme != "file":
        return target.uri
    return unquote(urlsplit(target.uri).path)


def build_argv(command: Sequence[str], targets: Sequence[OpenTarget]) -> list[str]:
    """Expand desktop-entry style field codes in *command*.

    ``%u``/``%f`` take the first target (URI / path), ``%U``/``%F`` all of
    them. A lone field code with no targets is dropped. Without any field
    code the URIs are appended.
    """
    uris = [t.uri for t in targets]
    paths = [_local_path(t) for t in targets]
    argv: list[str] = []
    expanded = False
    for token in command:
        if token in ("%u", "%f"):
            expanded = True
            source = uris if token == "%u" else paths
            argv.extend(source[:1])
        elif token in ("%U", "%F"):
            expanded = True
            argv.extend(uris if token == "%U" else paths)
        else:
            argv.append(token)
    if not expanded:
        argv.extend(uris)
    return argv


class SubprocessLauncher:
    """Launcher callable spawning *command* for a handler."""

    def __init__(self, handler_name: str, command: Sequence[str]) -> None:
        self._name = handler_name
        self._command = tuple(command)

    def __repr__(self) -> str:
        return f"SubprocessLauncher({self._name!r}, {list(self._command)!r})"

    def __call__(self, targets: Sequence[OpenTarget]) -> ServiceResult:
        op = "launch"
        argv = build_argv(self._command, targets)
        if not argv:
            return failure(op, "LAUNCH_FAILED", f"{self._name}: empty command")
        try:
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            return failure(
                op,
                "LAUNCH_FAILED",
                f"{self._name}: {exc}",
                argv=argv,
            )
        logger.debug("Spawned %s (pid %s): %s", self._name, proc.pid, argv)
        return ServiceResult(
            ok=True,
            op=op,
            data={"handler": self._name, "argv": argv, "pid": proc.pid},
        )

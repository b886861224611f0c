"""Test doubles shared across browdi test modules."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from browdi.domain.registry import HandlerApp
from browdi.domain.targets import OpenTarget
from browdi.plugins.hookspecs import hookimpl
from browdi.services.result import ServiceResult, failure


class RecordingLauncher:
    """Launcher that records every call instead of spawning anything."""

    def __init__(self, name: str, *, ok: bool = True) -> None:
        self.name = name
        self.ok = ok
        self.calls: list[list[str]] = []

    def __call__(self, targets: Sequence[OpenTarget]) -> ServiceResult:
        self.calls.append([t.uri for t in targets])
        if not self.ok:
            return failure("launch", "LAUNCH_FAILED", f"{self.name}: spawn failed")
        return ServiceResult(ok=True, op="launch", data={"handler": self.name})


def make_handler(name: str, *, app_id: str | None = None, ok: bool = True) -> HandlerApp:
    """HandlerApp backed by a RecordingLauncher."""
    return HandlerApp(
        id=app_id or f"{name.lower()}.desktop",
        name=name,
        launcher=RecordingLauncher(name, ok=ok),
    )


def calls_of(handler: HandlerApp) -> list[list[str]]:
    """Launch calls recorded for *handler*."""
    launcher = handler.launcher
    assert isinstance(launcher, RecordingLauncher)
    return launcher.calls


def web(uri: str) -> OpenTarget:
    return OpenTarget.from_uri(uri)


class RecordingPlugin:
    """Plugin that records every notification hook call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def named(self, hook: str) -> list[dict[str, Any]]:
        return [payload for name, payload in self.calls if name == hook]

    @hookimpl
    def current_changed(
        self, uri: str, domain_visible: bool, domain_key: str | None, pending: int
    ) -> None:
        self.calls.append(
            (
                "current_changed",
                {
                    "uri": uri,
                    "domain_visible": domain_visible,
                    "domain_key": domain_key,
                    "pending": pending,
                },
            )
        )

    @hookimpl
    def handler_launched(self, handler_name: str, uris: list[str], ok: bool) -> None:
        self.calls.append(
            ("handler_launched", {"handler_name": handler_name, "uris": uris, "ok": ok})
        )

    @hookimpl
    def preference_changed(self, name: str, value: Any) -> None:
        self.calls.append(("preference_changed", {"name": name, "value": value}))

    @hookimpl
    def terminated(self, reason: str) -> None:
        self.calls.append(("terminated", {"reason": reason}))


class FakePopen:
    """Stand-in for subprocess.Popen that records argv."""

    spawned: list[list[str]] = []
    fail_for: set[str] = set()
    _next_pid = 1000

    def __init__(self, argv: list[str], **_kwargs: Any) -> None:
        if argv and argv[0] in FakePopen.fail_for:
            msg = f"No such file or directory: {argv[0]!r}"
            raise FileNotFoundError(msg)
        FakePopen.spawned.append(list(argv))
        FakePopen._next_pid += 1
        self.pid = FakePopen._next_pid


HANDLERS_TOML = """\
[store]
path = "{db}"

[[handlers]]
id = "firefox.desktop"
name = "Firefox"
command = ["firefox", "%u"]

[[handlers]]
id = "chromium.desktop"
name = "Chromium"
command = ["chromium"]

[[handlers]]
id = "browdi.desktop"
name = "browdi"
command = ["browdi", "open"]
"""


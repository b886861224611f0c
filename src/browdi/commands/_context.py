"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds the store, plugins, registry, and engine
lazily so ``--help`` and ``--version`` never touch the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from browdi.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from browdi.config.settings import BrowdiSettings
    from browdi.domain.hotkeys import HotkeyMap
    from browdi.domain.registry import HandlerRegistry
    from browdi.infrastructure.kvstore import KeyValueStore
    from browdi.plugins.manager import PluginManager
    from browdi.services.defaults import DomainDefaultStore
    from browdi.services.dispatch import DispatchEngine
    from browdi.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: BrowdiSettings) -> None:
        self.settings = settings
        self._kv: KeyValueStore | None = None
        self._plugins: PluginManager | None = None
        self._registry: HandlerRegistry | None = None
        self._defaults: DomainDefaultStore | None = None

        from browdi.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def kv(self) -> KeyValueStore:
        """The preference store, opened on first use.

        Failing to open it is the one fatal startup error.
        """
        if self._kv is None:
            from browdi.infrastructure.kvstore import KeyValueStore, StoreUnavailableError

            try:
                self._kv = KeyValueStore.open(self.settings.store_path)
            except StoreUnavailableError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._kv

    @property
    def plugins(self) -> PluginManager:
        """Loaded plugin manager."""
        if self._plugins is None:
            from browdi.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load(local_dir=self.settings.plugins.local_dir)
        return self._plugins

    @property
    def registry(self) -> HandlerRegistry:
        """Handler registry, built once from config and plugins."""
        if self._registry is None:
            from browdi.infrastructure.provider import build_registry

            self._registry = build_registry(self.settings, self.plugins)
        return self._registry

    @property
    def hotkeys(self) -> HotkeyMap:
        from browdi.domain.hotkeys import HotkeyMap

        return HotkeyMap.build(list(self.registry), self.settings.dispatch.hotkeys)

    @property
    def defaults(self) -> DomainDefaultStore:
        """Remembered domain defaults, loaded once."""
        if self._defaults is None:
            from browdi.services.defaults import DomainDefaultStore

            self._defaults = DomainDefaultStore.load(self.kv, self.registry)
        return self._defaults

    def create_engine(self) -> DispatchEngine:
        """A fresh dispatch engine wired to the plugin event bus."""
        from browdi.plugins.event_bus import EventBus
        from browdi.services.dispatch import DispatchEngine

        return DispatchEngine(
            self.registry,
            self.hotkeys,
            self.defaults,
            self.kv,
            bus=EventBus(self.plugins),
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout; warnings go to stderr unless in JSON mode.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        """Release the preference store."""
        if self._kv is not None:
            self._kv.close()
            self._kv = None

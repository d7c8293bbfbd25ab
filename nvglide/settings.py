"""A registry of typed setting groups kept in sync with editor variables.

Each subsystem stores its own settings object here, keyed by its type.
Individual editor variables (``g:neovide_<name>``) are wired to update and
read callbacks, so changes made in the editor reach the stored settings.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

UpdateHandlerFunc = Callable[[Any], None]
ReaderFunc = Callable[[], Any]


class EditorConnection(Protocol):
    """The parts of an editor RPC connection that settings need."""

    async def get_var(self, name: str) -> Any: ...

    async def set_var(self, name: str, value: Any) -> Any: ...

    async def command(self, command: str) -> Any: ...


def _notifier_script(name: str) -> str:
    return (
        'exe "'
        f"fun! NeovideNotify{name}Changed(d, k, z)\n"
        f"call rpcnotify(1, 'setting_changed', '{name}', g:neovide_{name})\n"
        "endf\n"
        f"call dictwatcheradd(g:, 'neovide_{name}', 'NeovideNotify{name}Changed')\""
    )


class Settings:
    """Thread-safe store of setting groups and per-variable handlers."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._settings: dict[type, Any] = {}
        self._listeners: dict[str, UpdateHandlerFunc] = {}
        self._readers: dict[str, ReaderFunc] = {}

    def set_setting_handlers(
        self,
        property_name: str,
        update_func: UpdateHandlerFunc,
        reader_func: ReaderFunc,
    ) -> None:
        """Register the callbacks that update and read one editor variable."""
        with self._lock:
            self._listeners[property_name] = update_func
            self._readers[property_name] = reader_func

    def set(self, value: Any) -> None:
        """Store a copy of a settings object, replacing any of the same type."""
        with self._lock:
            self._settings[type(value)] = copy.deepcopy(value)

    def get(self, kind: type[T]) -> T:
        """Return a copy of the stored settings object of the given type."""
        with self._lock:
            try:
                value = self._settings[kind]
            except KeyError:
                raise KeyError(
                    f"Trying to retrieve a settings object that doesn't exist: {kind!r}"
                ) from None
            return copy.deepcopy(value)

    def _names(self) -> list[str]:
        with self._lock:
            return list(self._listeners)

    async def read_initial_values(self, nvim: EditorConnection) -> None:
        """Load each variable from the editor, or push the local value if it is unset."""
        for name in self._names():
            variable_name = f"neovide_{name}"
            try:
                value = await nvim.get_var(variable_name)
            except Exception as error:  # the editor reports a missing variable as an error
                logger.debug("Initial value load failed for %s: %s", name, error)
                with self._lock:
                    reader = self._readers[name]
                try:
                    await nvim.set_var(variable_name, reader())
                except Exception as set_error:
                    logger.debug("Could not set %s: %s", variable_name, set_error)
            else:
                with self._lock:
                    listener = self._listeners[name]
                listener(value)

    async def setup_changed_listeners(self, nvim: EditorConnection) -> None:
        """Ask the editor to notify us whenever one of the variables changes."""
        for name in self._names():
            try:
                await nvim.command(_notifier_script(name))
            except Exception as error:
                raise RuntimeError(
                    f"Could not setup setting notifier for {name}"
                ) from error

    def handle_changed_notification(self, arguments: list[Any]) -> None:
        """Dispatch a ``setting_changed`` notification of ``[name, value]``."""
        if len(arguments) < 2:
            raise ValueError(
                f"setting_changed expects a name and a value, received {arguments!r}"
            )
        name, value = arguments[0], arguments[1]
        if not isinstance(name, str):
            raise TypeError(f"setting name must be a string, received {name!r}")
        with self._lock:
            listener = self._listeners[name]
        listener(value)


SETTINGS = Settings()
"""Reference model of the client loader shim's state machine.

The browser runs the JavaScript in ``shim.py``; this module is the same
contract expressed in Python so it can be exercised without a browser:

    UNINITIALIZED --install--> LOADING --resolve--> READY
                                       --reject---> FAILED

``scope`` stands in for the page's global object. ``LibraryHandle`` is the
stand-in: callers may keep a reference to it before the load finishes, so a
successful load swaps its method table in place instead of replacing it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, MutableMapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from mermaid_html.render import code_block
from mermaid_html.shim import STAND_IN_METHODS

logger = logging.getLogger(__name__)

LIBRARY_GLOBAL = "mermaid"


class LoaderState(Enum):
    UNINITIALIZED = auto()
    LOADING = auto()
    READY = auto()
    FAILED = auto()


class LoaderStateError(RuntimeError):
    """Raised on a transition the state machine does not allow."""


@dataclass
class RenderTarget:
    """A ``pre.mermaid`` element: its id, its text, and its HTML once rewritten."""

    id: str
    text: str
    fallback_html: str | None = None

    @property
    def replaced(self) -> bool:
        return self.fallback_html is not None


class LibraryHandle:
    """Stand-in for the diagram library with a swappable method table.

    Until ``_bind`` is called, every method call is appended to the queue.
    After ``_close`` the stubs drop their calls.
    """

    def __init__(self, queue: list[tuple[str, tuple[Any, ...]]], methods: Iterable[str]) -> None:
        self._queue = queue
        self._closed = False
        self._methods: dict[str, Callable[..., Any]] = {name: self._stub(name) for name in methods}

    def _stub(self, name: str) -> Callable[..., Any]:
        def enqueue(*args: Any) -> None:
            if self._closed:
                return
            self._queue.append((name, args))

        return enqueue

    def _close(self) -> None:
        self._closed = True

    def _bind(self, library: Any) -> None:
        table: dict[str, Callable[..., Any]] = {}
        for name in dir(library):
            if name.startswith("_"):
                continue
            value = getattr(library, name)
            if callable(value):
                table[name] = value
        self._methods = table

    def __getattr__(self, name: str) -> Callable[..., Any]:
        try:
            return self.__dict__["_methods"][name]
        except KeyError:
            raise AttributeError(name) from None


@dataclass
class Page:
    """The document as the shim sees it: targets parsed so far, and whether parsing is done."""

    targets: list[RenderTarget] = field(default_factory=list)
    loading: bool = True
    _on_content_loaded: list[Callable[[], None]] = field(default_factory=list, repr=False)

    def add_target(self, id: str, text: str) -> RenderTarget:
        target = RenderTarget(id=id, text=text)
        self.targets.append(target)
        return target

    def on_content_loaded(self, callback: Callable[[], None]) -> None:
        self._on_content_loaded.append(callback)

    def finish_parsing(self) -> None:
        """Equivalent of DOMContentLoaded: run the queued callbacks once."""
        if not self.loading:
            return
        self.loading = False
        callbacks, self._on_content_loaded = self._on_content_loaded, []
        for callback in callbacks:
            callback()


@dataclass
class ClientLoader:
    """One page load's worth of loader state."""

    state: LoaderState = LoaderState.UNINITIALIZED
    queue: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    handle: LibraryHandle | None = None

    def install(self, scope: MutableMapping[str, Any]) -> Any:
        """Install the stand-in into ``scope`` unless a library is already there.

        Returns whatever ``scope`` holds under the library name afterwards.
        """
        if self.state is not LoaderState.UNINITIALIZED:
            raise LoaderStateError(f"install called in state {self.state.name}")
        if LIBRARY_GLOBAL in scope:
            logger.debug("event=loader_skip reason=library_present")
            return scope[LIBRARY_GLOBAL]
        self.handle = LibraryHandle(self.queue, STAND_IN_METHODS)
        scope[LIBRARY_GLOBAL] = self.handle
        self.state = LoaderState.LOADING
        return self.handle

    def resolve(self, library: Any) -> None:
        """The real library finished loading: splice it in and replay the queue."""
        handle = self._require_loading("resolve")
        handle._bind(library)
        self.state = LoaderState.READY
        pending = list(self.queue)
        self.queue.clear()
        logger.debug("event=loader_ready replayed=%d", len(pending))
        for name, args in pending:
            getattr(library, name)(*args)

    def reject(self, page: Page) -> None:
        """The load failed: drop queued and later calls, rewrite targets as code blocks.

        If ``page`` is still being parsed the rewrite waits for
        ``finish_parsing``, so targets that appear after the loader are covered.
        """
        handle = self._require_loading("reject")
        handle._close()
        self.state = LoaderState.FAILED
        dropped = len(self.queue)
        self.queue.clear()
        logger.error("event=loader_failed dropped_calls=%d deferred=%s", dropped, page.loading)

        def rewrite() -> None:
            count = 0
            for target in page.targets:
                if target.replaced:
                    continue
                target.fallback_html = code_block(target.text)
                count += 1
            logger.debug("event=loader_fallback targets=%d", count)

        if page.loading:
            page.on_content_loaded(rewrite)
        else:
            rewrite()

    def _require_loading(self, action: str) -> LibraryHandle:
        if self.state is not LoaderState.LOADING or self.handle is None:
            raise LoaderStateError(f"{action} called in state {self.state.name}")
        return self.handle

"""Warble application class.

Mutable during setup (options, configuration files, extensions).
Frozen at startup, when the first ASGI lifespan or HTTP scope arrives
or ``render()`` is first called: extensions are instantiated, the
route table and kida environment are compiled, and the config store
becomes read-only.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from kida import Environment

from warble._internal.asgi import Receive, Scope, Send
from warble.config import ConfigStore
from warble.errors import ConfigurationError
from warble.extensions import ExtensionFactory, ExtensionRegistry
from warble.http.request import Request
from warble.http.response import Response
from warble.i18n.negotiation import LanguageDecision, negotiate_language
from warble.rendering.environment import create_environment
from warble.rendering.renderer import Renderer, language_prefix
from warble.routing.resolver import ResolvedPage, RouteTable, resolve_page
from warble.urls import UrlBuilder

logger = logging.getLogger("warble.app")


@dataclass(frozen=True, slots=True)
class PageResult:
    """One dispatched page: its body, route, and language decision.

    ``decision`` is ``None`` when the app declares no languages.
    """

    body: str
    page: ResolvedPage
    decision: LanguageDecision | None = None


class App:
    """The warble application.

    Usage::

        app = App(config_file="site_config.py")
        app.extensions.register("menu", Menu)

        # ASGI: serve ``app`` with any ASGI server
        # Offline:
        html = app.render("/fr/apropos", headers={"accept-language": "fr"})

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the app. After the
        freeze every request only reads shared state.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_renderer",
        "_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
        "extensions",
    )

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        *,
        config_file: str | Path | None = None,
    ) -> None:
        self.config: ConfigStore = ConfigStore()
        if config_file is not None:
            self.config.load(config_file)
        if config is not None:
            self.config.merge(config)
        self.extensions: ExtensionRegistry = ExtensionRegistry()
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._routes: RouteTable = RouteTable()
        self._kida_env: Environment | None = None
        self._renderer: Renderer | None = None

    # -- Configuration --

    def configure(self, file: str | Path) -> None:
        """Merge a configuration file over the current options."""
        self.config.load(file)

    def set(self, key: str, value: Any) -> None:
        """Set a single option."""
        self.config.set(key, value)

    def get(self, key: str) -> Any:
        """Fetch a single option. Raises ``MissingOption`` if never set."""
        return self.config.get(key)

    def extension(self, name: str) -> Callable[[ExtensionFactory], ExtensionFactory]:
        """Register an extension factory via decorator."""

        def decorator(factory: ExtensionFactory) -> ExtensionFactory:
            self._check_not_frozen()
            self.extensions.register(name, factory)
            return factory

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run after the app is frozen, during ASGI lifespan startup.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Dispatch --

    def build_page(self, request: Request) -> PageResult:
        """Resolve, negotiate, and render the page for *request*.

        Raises:
            FragmentNotFound: If a fragment of the page is missing.
            MissingOption: If a required option was removed from the defaults.
        """
        self._ensure_frozen()
        assert self._renderer is not None
        options = self.config

        page = resolve_page(
            request.path,
            self._routes,
            options.get("page_default"),
            options.get("page_default_title"),
            options.get("page_base"),
        )
        logger.debug("%s resolved to view %r (language %s)", request.path, page.view, page.language)

        decision: LanguageDecision | None = None
        language: str | None = None
        supported = options.get("languages_available")
        if supported:
            decision = negotiate_language(
                page.language,
                request.query_value(options.get("language_param")),
                request.cookie(options.get("language_cookie")),
                request.accept_language,
                tuple(supported),
                options.get("language_default"),
            )
            language = decision.language
            logger.debug("Language %s (persist=%s)", language, decision.persist)

        urls = UrlBuilder(
            host=request.host,
            secure=request.is_secure,
            base=options.get("page_base"),
            protocol_force=options.get("protocol_force"),
        )

        scope = options.snapshot()
        scope.update(
            this_page=page.view,
            language=language,
            title=page.title,
            url_canonical=urls.canonical_url(page.path),
            url_root=urls.root_url(include_base=True),
            url_page=page.path,
            request=request,
        )

        body = self._renderer.render(
            language_prefix(language),
            options.get("page_include_before"),
            page.view,
            options.get("page_include_after"),
            scope,
        )
        return PageResult(body=body, page=page, decision=decision)

    def respond(self, request: Request) -> Response:
        """Dispatch *request* and wrap the page in a Response.

        Sets the language preference cookie when the decision is new.
        """
        result = self.build_page(request)
        response = Response(body=result.body)
        if result.decision is not None and result.decision.persist:
            base = self.config.get("page_base")
            response = response.with_cookie(
                self.config.get("language_cookie"),
                result.decision.language,
                path=base if base.startswith("/") else "/",
                secure=request.is_secure,
            )
        return response

    def render(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        query_string: str = "",
        scheme: str = "http",
    ) -> str:
        """Render the page for *path* without a transport."""
        request = Request.build(path, headers=headers, query_string=query_string, scheme=scheme)
        return self.build_page(request).body

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        from warble.server.handler import handle_request

        await handle_request(scope, receive, send, app=self, debug=bool(self.config.get("debug")))

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, so configuration and extension
        errors surface before the first request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    await _run_hooks(self._startup_hooks)
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await _run_hooks(self._shutdown_hooks)
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        options = self.config

        # 1. Route table and languages
        routes = RouteTable.from_config(options.get("pages_available"))
        supported = options.get("languages_available")
        if supported is not None and (
            isinstance(supported, str)
            or not isinstance(supported, Collection)
            or not all(isinstance(code, str) for code in supported)
        ):
            msg = f"languages_available must be a sequence of language codes, got {supported!r}"
            raise ConfigurationError(msg)

        # 2. Extensions: discovered modules first, then explicit registrations.
        # Nothing is stored until every factory has run.
        registry = self.extensions
        directory = options.get("directory_extensions")
        if directory is not None:
            registry = ExtensionRegistry()
            registry.discover(directory)
            for name, factory in self.extensions.items():
                registry.register(name, factory)
        instances = registry.instantiate(self)
        for name, instance in instances.items():
            options.set(name, instance)
        self.extensions = registry
        self._routes = routes

        # 3. Fragment renderer
        self._kida_env = create_environment(options)
        self._renderer = Renderer(
            self._kida_env,
            options.get("directory_pages"),
            options.get("page_extension"),
        )

        options.freeze()
        self._frozen = True
        logger.debug(
            "App frozen: %d language(s), %d extension(s)", len(self._routes), len(self.extensions)
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register extensions and hooks before serving."
            )
            raise RuntimeError(msg)


async def _run_hooks(hooks: list[Callable[..., Any]]) -> None:
    for hook in hooks:
        result = hook()
        if inspect.isawaitable(result):
            await result

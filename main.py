import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from forum.config import Settings, get_settings
from forum.exception_handlers import register_exception_handlers
from forum.extensions.loader import initialize_extensions, load_extensions_config
from forum.extensions.registry import ExtensionRegistry, extension_registry
from forum.hooks.registry import HookRegistry
from forum.hooks.relay import EventRelay
from forum.hooks.wiring import attach_host_bindings, attach_sub_actions, detach_all
from forum.routes import forum, hooks

logger = logging.getLogger(__name__)

# Host lifecycle, in the order the host fires it at boot
BOOT_SEQUENCE = ("plugins_loaded", "setup_theme", "after_setup_theme", "init", "widgets_init")


def create_app(
    settings: Settings | None = None,
    registry: HookRegistry | None = None,
    extensions: ExtensionRegistry | None = None,
) -> FastAPI:
    """Create the FastAPI application. Extensions default to the process-wide ``extension_registry``."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")

    relay = EventRelay(registry=registry if registry is not None else HookRegistry(), settings=settings)
    extensions = extensions if extensions is not None else extension_registry

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting up %s %s (%s)", settings.app_name, settings.app_version, settings.environment)
        attach_host_bindings(relay.registry, relay)
        attach_sub_actions(relay.registry, relay)
        initialize_extensions(extensions, relay, load_extensions_config(settings.extensions_config_file))

        for hook in BOOT_SEQUENCE:
            relay.registry.do_action(hook)
        yield

        logger.info("Shutting down %s", settings.app_name)
        try:
            extensions.teardown_all(relay)
        finally:
            detach_all(relay.registry, relay)

    app = FastAPI(
        title=settings.app_name,
        description="Lifecycle hooks for the forum plugin",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.relay = relay
    app.state.extensions = extensions

    register_exception_handlers(app)
    app.include_router(forum.router, prefix="/forum")
    app.include_router(hooks.router, prefix="/api/v1/hooks")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=get_settings().debug)

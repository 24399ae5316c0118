import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.assets import AssetSources
from core.config import AppConfig, get_app_config
from core.htmx import mount_htmx, mount_static
from core.responses import ApiError, api_error_handler, http_error_handler
from routers import api, page_data

logger = logging.getLogger(__name__)

# Не отдаём эти префиксы корневому HTMX маунту
ROUTE_PREFIXES = ("api", page_data.registry.prefix)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    config = config or get_app_config()
    logging.basicConfig(level=config.log_level)

    app = FastAPI(title=config.name, version=config.version)
    app.state.config = config

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Роуты до HTMX маунтов, иначе их перехватит "/"
    app.include_router(page_data.router)
    app.include_router(api.router)
    app.include_router(api.health_router)

    sources = AssetSources(embedded=config.embedded_assets, root=config.asset_root)

    for mount in config.static_mounts:
        mount_static(
            app,
            mount["path"],
            sources.resolve(mount.get("sources", [])),
            spa=bool(mount.get("spa", False)),
        )

    # Более длинный префикс раньше: /admin до /
    htmx_mounts = sorted(config.htmx_mounts, key=lambda m: len(m["path"].rstrip("/")), reverse=True)
    for mount in htmx_mounts:
        mount_htmx(
            app,
            mount["path"],
            sources.resolve(mount.get("sources", [])),
            page_data.registry,
            layout=mount.get("layout", "base.html"),
            excluded=ROUTE_PREFIXES if mount["path"].strip("/") == "" else (),
        )

    return app


app = create_app()


def main():
    config = get_app_config()
    logger.info(f"Starting {config.name} on {config.host}:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()

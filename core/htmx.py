"""HTMX page mounts.

A mount serves ``pages/*.html`` templates from its sources and wraps them in
a layout from ``layouts/``. Each page asks the page-data registry for its
title, description and data. HTMX requests (``HX-Request: true``) get only the
page content so the client can swap it into ``<main>``.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import anyio
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import FileResponse, HTMLResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException
from starlette.staticfiles import StaticFiles

from core.assets import AssetSourceError, find_file
from core.templates import build_templates, partial_layout

logger = logging.getLogger(__name__)

PAGE_DATA_PREFIX = "/page-data"
RESERVED_DIRS = ("layouts", "pages")


class PageData(BaseModel):
    title: str = ""
    description: str = ""
    data: Optional[Dict[str, Any]] = None


PageDataProvider = Callable[[Request], PageData]


def page_key(prefix: str, page_path: str) -> str:
    """Registry key of a page: mount roots keep the trailing slash (``/admin/``)."""
    return prefix.rstrip("/") + "/" + page_path.strip("/")


def is_clean_path(page_path: str) -> bool:
    """No empty, '.' or '..' segments, so reserved dirs can be checked by prefix."""
    if not page_path:
        return True
    return all(segment not in ("", ".", "..") for segment in page_path.split("/"))


def is_htmx_request(request: Request) -> bool:
    return request.headers.get("HX-Request", "").lower() == "true"


class PageDataRegistry:
    """The page-data route group.

    Every provider is exposed as ``GET /page-data<path>`` and is also used by
    the HTMX mounts to fill in the page being rendered.
    """

    def __init__(self, prefix: str = PAGE_DATA_PREFIX):
        self.prefix = prefix
        self.router = APIRouter(prefix=prefix, tags=["page-data"])
        self._providers: Dict[str, PageDataProvider] = {}

    def page(self, path: str):
        def decorator(func: PageDataProvider) -> PageDataProvider:
            self._providers[path] = func
            self.router.add_api_route(
                path, self._endpoint(func), methods=["GET"], response_model=PageData
            )
            return func

        return decorator

    def _endpoint(self, provider: PageDataProvider):
        def endpoint(request: Request) -> PageData:
            return provider(request)

        endpoint.__name__ = provider.__name__
        return endpoint

    def paths(self) -> List[str]:
        return sorted(self._providers)

    def resolve(self, path: str, request: Request) -> PageData:
        provider = self._providers.get(path)
        if provider is None:
            return PageData()
        return provider(request)


class HtmxMount:
    def __init__(
        self,
        prefix: str,
        directories: List[Path],
        registry: PageDataRegistry,
        layout: str = "base.html",
        excluded: Sequence[str] = (),
    ):
        self.prefix = "/" + prefix.strip("/")
        self.directories = directories
        # first path segments owned by other routes (api, page-data)
        self.excluded = tuple(e.strip("/") for e in excluded)
        self.registry = registry
        self.layout = f"layouts/{layout}"
        if find_file(directories, self.layout) is None:
            raise AssetSourceError(f"Layout {self.layout} not found for mount {self.prefix}")
        self.templates = build_templates(directories)
        self.partial_layout = partial_layout(self.templates)

    def find_page(self, page_path: str) -> Optional[str]:
        if not page_path:
            candidates = ["pages/index.html"]
        else:
            candidates = [f"pages/{page_path}.html", f"pages/{page_path}/index.html"]
        for name in candidates:
            if find_file(self.directories, name) is not None:
                return name
        return None

    def serve_asset(self, page_path: str):
        if page_path.split("/", 1)[0] in RESERVED_DIRS:
            return self.not_found_response()
        path = find_file(self.directories, page_path)
        if path is None:
            return self.not_found_response()
        return FileResponse(path)

    def not_found_response(self) -> HTMLResponse:
        return HTMLResponse("<h1>404 Not Found</h1>", status_code=404)

    def render(self, request: Request, page_path: str = ""):
        page_path = page_path.strip("/")
        if page_path.split("/", 1)[0] in self.excluded:
            raise HTTPException(status_code=404)
        if not is_clean_path(page_path):
            return self.not_found_response()
        if "." in page_path.rsplit("/", 1)[-1]:
            return self.serve_asset(page_path)

        status_code = 200
        template = self.find_page(page_path)
        if template is None:
            template = self.find_page("404")
            if template is None:
                return self.not_found_response()
            status_code = 404
            page = PageData(title="Page Not Found")
        else:
            page = self.registry.resolve(page_key(self.prefix, page_path), request)

        partial = is_htmx_request(request)
        layout = self.partial_layout if partial else self.layout
        context = {
            "page": page,
            "title": page.title,
            "description": page.description,
            "data": page.data or {},
            "mount": self.prefix.rstrip("/"),
            "layout": layout,
            "partial": partial,
        }
        response = self.templates.TemplateResponse(
            request, template, context, status_code=status_code
        )
        response.headers["Vary"] = "HX-Request"
        return response


def mount_htmx(
    app: FastAPI,
    prefix: str,
    directories: List[Path],
    registry: PageDataRegistry,
    layout: str = "base.html",
    excluded: Sequence[str] = (),
) -> HtmxMount:
    mount = HtmxMount(prefix, directories, registry, layout=layout, excluded=excluded)

    def htmx_page(request: Request, page_path: str = ""):
        return mount.render(request, page_path)

    base = mount.prefix.rstrip("/")
    if base:
        app.add_api_route(base, htmx_page, methods=["GET", "HEAD"], include_in_schema=False)
    app.add_api_route(
        base + "/{page_path:path}", htmx_page, methods=["GET", "HEAD"], include_in_schema=False
    )
    logger.info(f"HTMX mount {mount.prefix} -> {[str(d) for d in directories]}")
    return mount


class MultiDirStaticFiles(StaticFiles):
    """StaticFiles over several directories, first match wins."""

    def __init__(self, directories: List[Path], spa: bool = False):
        self._directories = [str(d) for d in directories]
        self.spa = spa
        super().__init__(directory=None, check_dir=False)

    def get_directories(self, directory=None, packages=None):
        return list(self._directories)

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if not self.spa or exc.status_code != 404:
                raise
        full_path, stat_result = await anyio.to_thread.run_sync(self.lookup_path, "index.html")
        if stat_result is None:
            raise HTTPException(status_code=404)
        return self.file_response(full_path, stat_result, scope)


def mount_static(app: FastAPI, prefix: str, directories: List[Path], spa: bool = False):
    prefix = "/" + prefix.strip("/")
    app.mount(prefix, MultiDirStaticFiles(directories, spa=spa), name=prefix.strip("/") or "root")
    logger.info(f"Static mount {prefix} (spa={spa}) -> {[str(d) for d in directories]}")

"""FastAPI application serving the content hub.

Usage:
    devhub serve
    uvicorn --factory devhub.web.app:create_app
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from devhub import __version__
from devhub.core.config import DevhubConfig
from devhub.core.exceptions import EntityNotFoundError, RenderError
from devhub.core.repository import ContentRepository
from devhub.core.seed import load_promo_or_empty, load_seed
from devhub.engine.embeds import EmbedResolver
from devhub.engine.template_loader import TemplateLoader
from devhub.engine.views import PageContext, ViewComposer
from devhub.web.negotiation import is_allowed_host, prefers_json

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html; charset=utf-8"

NOT_FOUND_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width,initial-scale=1">
  <title>404</title>
  <style>
    :root { color-scheme: dark; }
    body { margin: 0; min-height: 100vh; display: grid; place-items: center; background: #0d1117; color: #c9d1d9; font: 14px/1.6 -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif; }
    main { width: min(520px, calc(100% - 40px)); border: 1px solid #30363d; border-radius: 12px; background: #161b22; padding: 22px 24px; }
    h1 { margin: 0 0 6px; font-size: 18px; }
    p { margin: 0; color: #8b949e; }
    a { color: #58a6ff; text-decoration: none; }
  </style>
</head>
<body>
  <main>
    <h1>404</h1>
    <p>Nothing here. Go <a href="/">home</a>.</p>
  </main>
</body>
</html>
"""


@dataclass(frozen=True, slots=True)
class Site:
    """Everything a request needs, built once before serving."""

    config: DevhubConfig
    repository: ContentRepository
    templates: TemplateLoader
    composer: ViewComposer


def build_site(config: DevhubConfig) -> Site:
    """Load content and templates.

    Raises:
        MalformedSeedError: If the seed document is missing or invalid
        FileNotFoundError: If the template directory does not exist

    """
    seed = load_seed(config.paths.abs_seed_path)
    promo = load_promo_or_empty(config.paths.abs_promo_path)
    repository = ContentRepository(seed)
    templates = TemplateLoader(config.paths.abs_templates_dir)
    composer = ViewComposer(repository, EmbedResolver(templates), promo, config.carousel)
    return Site(config=config, repository=repository, templates=templates, composer=composer)


def not_found_response(request: Request) -> Response:
    if prefers_json(request.headers.get("accept")):
        return JSONResponse({"error": "Not found"}, status_code=404)
    return HTMLResponse(NOT_FOUND_HTML, status_code=404)


def get_site(request: Request) -> Site:
    return request.app.state.site


def page_response(request: Request, site: Site, page: PageContext) -> Response:
    """Serialize the context for JSON clients, otherwise render its template."""
    context = page.to_context()
    if prefers_json(request.headers.get("accept")):
        return JSONResponse(context)
    try:
        body = site.templates.render(page.template, context)
    except RenderError:
        logger.exception("Template render error (%s)", page.template)
        return Response(status_code=500)
    return HTMLResponse(
        body,
        headers={"Cache-Control": site.config.server.html_cache_control},
        media_type=HTML_CONTENT_TYPE,
    )


router = APIRouter()


@router.get("/")
@router.get("/index.html")
async def home(request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.home())


@router.get("/ecosystems")
async def ecosystems_list(request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.ecosystems_list())


@router.get("/ecosystems/{slug}")
async def ecosystem_page(slug: str, request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.ecosystem(slug))


@router.get("/tools")
async def tools_list(request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.tools_list())


@router.get("/tools/{slug}")
async def tool_page(slug: str, request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.tool(slug))


@router.get("/events")
async def events_list(request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.events_list())


@router.get("/events/{slug}")
async def event_page(slug: str, request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.event(slug))


@router.get("/learn")
async def learn_list(request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.learn_list())


@router.get("/learn/{slug}")
async def learning_page(slug: str, request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.learning_path(slug))


@router.get("/creators")
async def creators_list(request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.creators_list())


@router.get("/creators/{slug}")
async def creator_page(slug: str, request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.creator(slug))


@router.get("/news")
async def news_list(request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.news_list())


@router.get("/news/{slug}")
async def post_page(slug: str, request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.post(slug))


@router.get("/jobs")
async def jobs_list(request: Request, site: Site = Depends(get_site)) -> Response:
    return page_response(request, site, site.composer.jobs_list())


def create_app(config: DevhubConfig | None = None, site: Site | None = None) -> FastAPI:
    """Build the application. Content is fully loaded before this returns."""
    if site is None:
        site = build_site(config if config is not None else DevhubConfig.load())
    server = site.config.server

    app = FastAPI(
        title="devhub",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.site = site

    @app.middleware("http")
    async def host_gate(request: Request, call_next):
        host = request.headers.get("host")
        if not is_allowed_host(host, server.allowed_hosts, allow_loopback=server.allow_loopback):
            logger.debug("Refusing request for host %r", host)
            return not_found_response(request)
        return await call_next(request)

    @app.exception_handler(EntityNotFoundError)
    async def entity_not_found(request: Request, exc: EntityNotFoundError) -> Response:
        return not_found_response(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 404:
            return not_found_response(request)
        return await http_exception_handler(request, exc)

    app.include_router(router)
    return app

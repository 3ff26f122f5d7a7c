import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional, Union

from fastapi import Body, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from loguru import logger

from .cards.languages import render_languages_card
from .cards.skills import render_skills_card
from .cards.stats import render_stats_card
from .config import get_settings
from .datasources.github_graphql import GitHubGraphQLAdapter
from .errors import CardServiceError
from .schemas import ContributionStats, LanguageUsage, SkillEntry
from .services.cache import InMemoryCache
from .services.profile_service import ProfileService

SVG_MEDIA_TYPE = "image/svg+xml"

settings = get_settings()


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def parse_skills(raw: str) -> List[SkillEntry]:
    """Split ``react,vue:#42b883`` into entries; an optional ``:color`` follows the name."""
    entries: List[SkillEntry] = []
    for item in raw.split(","):
        name, _, color = item.strip().partition(":")
        if name.strip():
            entries.append(SkillEntry(name=name, color=color.strip() or None))
    return entries


def svg_response(markup: str) -> Response:
    return Response(
        content=markup,
        media_type=SVG_MEDIA_TYPE,
        headers={"Cache-Control": f"public, max-age={settings.cache_ttl_seconds}"},
    )


def create_app(service: Optional[ProfileService] = None) -> FastAPI:
    owns_source = service is None
    if service is None:
        service = ProfileService(GitHubGraphQLAdapter(), InMemoryCache())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_source:
            await service.source.aclose()

    app = FastAPI(title="StatCards", version="0.1.0", lifespan=lifespan)
    app.state.profile_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CardServiceError)
    async def card_service_error_handler(request: Request, exc: CardServiceError):
        logger.warning(f"[api] {request.url.path} failed: {type(exc).__name__}: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    @app.get("/ping")
    async def ping():
        return {"message": "pong"}

    @app.get("/health")
    async def health():
        return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}

    @app.get("/languages", response_model=List[LanguageUsage])
    async def languages(
        username: Optional[str] = Query(None),
        format: str = Query("svg", pattern="^(svg|json)$"),
    ):
        top = await service.fetch_aggregated_languages(username)
        if format == "json":
            return top
        return svg_response(render_languages_card(top))

    @app.get("/stats", response_model=ContributionStats)
    async def stats(
        username: Optional[str] = Query(None),
        format: str = Query("svg", pattern="^(svg|json)$"),
    ):
        summary = await service.fetch_aggregated_stats(username)
        if format == "json":
            return summary
        return svg_response(render_stats_card(summary))

    @app.get("/skills")
    async def skills(skills: str = Query("")):
        return svg_response(render_skills_card(parse_skills(skills)))

    @app.post("/skills")
    async def skills_from_body(items: List[Union[str, SkillEntry]] = Body(...)):
        return svg_response(render_skills_card(items))

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    configure_logging(settings.log_level)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)

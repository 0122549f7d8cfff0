import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tennis_brackets.config import get_settings
from tennis_brackets.database import init_db
from tennis_brackets.errors import BracketError
from tennis_brackets.routes import live, matches, qualifiers, teams, tournaments

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Tennis Brackets API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BracketError)
async def bracket_error_handler(request: Request, exc: BracketError):
    """Map domain errors to their HTTP status."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers
app.include_router(tournaments.router, prefix="/api", tags=["tournaments"])
app.include_router(teams.router, prefix="/api", tags=["teams"])
app.include_router(matches.router, prefix="/api", tags=["matches"])
app.include_router(qualifiers.router, prefix="/api", tags=["qualifiers"])
app.include_router(live.router, prefix="/api", tags=["live"])


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("Database ready at %s", settings.database_url)


@app.get("/api/health")
def health_check():
    return {"app_name": "Tennis Brackets API", "status": "healthy"}

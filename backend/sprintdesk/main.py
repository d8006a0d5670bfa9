"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from sprintdesk.config import get_settings
from sprintdesk.database import dispose_engines, init_db
from sprintdesk.errors import SprintDeskError
from sprintdesk.routers import csv, developers, epics, projects, reports, sprints, statuses, stories

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield
    await dispose_engines()


app = FastAPI(
    title="SprintDesk",
    description="Sprint planning: backlog, sprints, capacity and progress statistics",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SprintDeskError)
async def sprintdesk_error_handler(request: Request, exc: SprintDeskError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=409, content={"detail": "Conflicts with existing data"})


app.include_router(projects.router)
app.include_router(developers.router)
app.include_router(epics.router)
app.include_router(statuses.router)
app.include_router(sprints.router)
app.include_router(stories.router)
app.include_router(reports.router)
app.include_router(csv.router)


@app.get("/health")
async def health():
    return {"status": "ok"}

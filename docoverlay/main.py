from __future__ import annotations

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .app_logging import configure_logging
from .api.v1.dependencies import get_analysis_dispatcher
from .api.v1.routers import documents, fields, selection

load_dotenv()
configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
  yield
  # Stop in-flight polls; the remote operations are simply abandoned.
  get_analysis_dispatcher().shutdown(wait=False)


app = FastAPI(title="Document Overlay Backend", version=__version__, lifespan=lifespan)

app.add_middleware(
  CORSMiddleware,
  allow_origins=["*"],
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)

api_router = APIRouter(prefix="/api")
api_router.include_router(documents.router)
api_router.include_router(fields.router)
api_router.include_router(selection.router)

app.include_router(api_router)

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ideascout.api.routes import jobs, legacy
from ideascout.config import settings
from ideascout.services.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("In-memory job processor initialized")
    yield


app = FastAPI(
    title="IdeaScout",
    description="Business idea research from multi-source web evidence",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(jobs.router)
app.include_router(legacy.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "ideascout"}

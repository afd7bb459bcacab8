from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import search
from app.config import settings
from app.services import logger as log_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_service.log_event("startup", "CiteSearch API starting", model=settings.default_model)
    yield
    log_service.log_event("shutdown", "CiteSearch API stopping")


app = FastAPI(
    title="CiteSearch",
    description="Web search answers with cited sources",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(search.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "citesearch"}


def serve():
    """Run the API with uvicorn on the configured host and port."""
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.noisy_log_level.lower(),
    )


if __name__ == "__main__":
    serve()

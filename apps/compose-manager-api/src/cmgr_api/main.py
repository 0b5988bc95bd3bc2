"""FastAPI application entry point."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cmgr_api.config import settings
from cmgr_api.routers import containers, stacks

app = FastAPI(
    title="Compose Manager API",
    description="Docker Compose stack status for the NAS web UI",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(stacks.router, prefix="/api")
app.include_router(containers.router, prefix="/api")


@app.get("/api/health")
async def health():
    return {"status": "ok"}


def run():
    import uvicorn
    uvicorn.run("cmgr_api.main:app", host="0.0.0.0", port=8000)

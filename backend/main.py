"""
Diff Align Backend - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import config, diff
from services.config_manager import ConfigManager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    print("[Backend] Starting Diff Align Backend...")
    config_manager = ConfigManager.get_instance()
    settings = config_manager.get_diff_settings()
    print(
        f"[Backend] ConfigManager initialized (collapseUnchanged={settings['collapseUnchanged']}, "
        f"contextLines={settings['contextLines']})"
    )

    yield
    print("[Backend] Shutting down Diff Align Backend...")


app = FastAPI(
    title="Diff Align Backend",
    description="Side-by-side diff alignment: connector curves, collapsed regions and scroll mapping",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for local editor front-ends
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(diff.router, prefix="/api/diff", tags=["diff"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "diff-align-backend"}


if __name__ == "__main__":
    import uvicorn

    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "0.0.0.0"), port=server.get("port", 8000))

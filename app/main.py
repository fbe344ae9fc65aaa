import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import CORS_ORIGINS
from app.logging_setup import configure_logging
from app.routers import admin
from app.routers import platforms
from app.routers import reviews
from app.routers import search
from app.routers import tags

configure_logging()
logger = logging.getLogger("app")

# Create FastAPI app FIRST
app = FastAPI(title="AI Platform Directory")
# Enable CORS for the directory frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Register routers
app.include_router(platforms.router)
app.include_router(search.router)
app.include_router(reviews.router)
app.include_router(tags.router)
app.include_router(admin.router)

logger.info("directory api ready (%s cors origin(s))", len(CORS_ORIGINS))


# Health check
@app.get("/")
def health_check():
    return {"status": "ok"}

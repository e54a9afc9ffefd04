import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.features.health.routes.health import router as health_router
from app.features.waitlist.routes.waitlist import router as waitlist_router
from app.platform.config import get_settings
from app.platform.exceptions import add_exception_handlers

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    description="Waitlist signup API for the TapRight landing page",
    version="1.0.0",
    debug=settings.DEBUG,
)


# Root endpoint for basic info
@app.get("/", tags=["Info"])
def root():
    return {
        "app_name": settings.APP_NAME,
        "description": "Waitlist signups and stats for the TapRight landing page.",
        "version": "1.0.0",
        "docs_url": "/docs",
        "api_base": "/api/waitlist",
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(waitlist_router)
app.include_router(health_router)

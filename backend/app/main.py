import logging

from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from .db.deps import get_settings
from .errors import register_exception_handlers
from .routes.health import app as health_app
from .routes.plants import app as plants_app
from .routes.care import app as care_app
from .routes.information import app as information_app
from .routes.locations import app as locations_app
from .routes.test_admin import app as test_admin_app

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Plant Tracker")

# Register global exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Mount all routers under /api
api_router = APIRouter(prefix="/api")
api_router.include_router(health_app)
api_router.include_router(plants_app)
api_router.include_router(care_app)
api_router.include_router(information_app)
api_router.include_router(locations_app)

# Conditionally include test admin endpoints when TEST_MODE=1
if settings.test_mode:
    api_router.include_router(test_admin_app)

app.include_router(api_router)


# Top-level health endpoint for container health checks and uptime probes
@app.get("/health")
async def health_root():
    return {"status": "ok"}

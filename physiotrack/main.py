# physiotrack/main.py
import os
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from physiotrack.routers.auth import router as auth_router
from physiotrack.routers.users import router as users_router
from physiotrack.routers.exercises import router as exercises_router
from physiotrack.routers.templates import router as templates_router
from physiotrack.routers.sessions import router as sessions_router
from physiotrack.routers.pain_entries import router as pain_router
from physiotrack.routers.badges import router as badges_router
from physiotrack.routers.analytics import router as analytics_router
from physiotrack.routers.profile import router as profile_router
from physiotrack.routers.recommendations import router as recommendations_router
from physiotrack.routers.reminders import router as reminders_router
from physiotrack.db import SessionLocal  # for healthz DB check
from physiotrack.services.recommendations import RecommendationService
from physiotrack.services.registry import ControllerRegistry
from physiotrack.settings import get_settings

settings = get_settings()

log = logging.getLogger("uvicorn")
logging.getLogger("physiotrack").setLevel(settings.LOG_LEVEL.upper())

app = FastAPI(
    title="PhysioTrack API",
    openapi_tags=[
        {"name": "auth", "description": "Registration & login"},
        {"name": "users", "description": "User administration, goals and voice settings"},
        {"name": "exercises", "description": "Exercise catalog"},
        {"name": "templates", "description": "Saved session templates"},
        {"name": "sessions", "description": "Active session life cycle and history"},
        {"name": "pain", "description": "Pain diary"},
        {"name": "badges", "description": "Milestone badges"},
        {"name": "analytics", "description": "Progress and reports"},
        {"name": "profile", "description": "Therapy profile"},
        {"name": "recommendations", "description": "AI exercise programs"},
        {"name": "reminders", "description": "Exercise reminders"},
    ],
)

# Application-owned state: one session controller per user, one LLM client
app.state.controllers = ControllerRegistry()
app.state.recommender = RecommendationService(settings)

# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
def root():
    return {"ok": True, "name": "PhysioTrack API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok", "active_controllers": len(app.state.controllers)}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(users_router)
app.include_router(auth_router)
app.include_router(exercises_router)
app.include_router(templates_router)
app.include_router(sessions_router)
app.include_router(pain_router)
app.include_router(badges_router)
app.include_router(analytics_router)
app.include_router(profile_router)
app.include_router(recommendations_router)
app.include_router(reminders_router)

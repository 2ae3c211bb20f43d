"""
FastAPI Application Entry Point
Main application setup and route registration
"""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from eventsphere.config import settings
from eventsphere.database import connect_db, disconnect_db
from eventsphere.error_handlers import register_error_handlers
from eventsphere.logging_config import setup_logging

setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="College event management: events, registrations, check-in, certificates",
    version="1.0.0",
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Uploaded files are served from the static directory
Path(settings.STATIC_DIR, settings.UPLOAD_SUBDIR).mkdir(parents=True, exist_ok=True)
app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")


# Startup event
@app.on_event("startup")
async def startup():
    """Run on application startup"""
    await connect_db()
    logger.info("%s started in %s mode", settings.APP_NAME, settings.APP_ENV)


# Shutdown event
@app.on_event("shutdown")
async def shutdown():
    """Run on application shutdown"""
    await disconnect_db()
    logger.info("%s stopped", settings.APP_NAME)


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": "1.0.0"
    }


# Import and include routers
from eventsphere.routes import auth, events, attendance, certificates, organizer, admin, feedback, notifications, gallery, dashboard  # noqa: E402

app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["Attendance"])
app.include_router(certificates.router, prefix="/api/certificates", tags=["Certificates"])
app.include_router(organizer.router, prefix="/api/organizer", tags=["Organizer"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(feedback.router, prefix="/api/feedback", tags=["Feedback"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])
app.include_router(gallery.router, prefix="/api/gallery", tags=["Gallery"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "eventsphere.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )

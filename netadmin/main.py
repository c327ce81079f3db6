"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from netadmin.core.config import settings
from netadmin.core.middleware import setup_middleware
from netadmin.core.exceptions import NetAdminError

from netadmin.api.auth import router as auth_router
from netadmin.api.accounts import router as accounts_router
from netadmin.api.groups import router as groups_router
from netadmin.api.routers import router as routers_router
from netadmin.api.vpns import router as vpns_router
from netadmin.api.users import router as users_router
from netadmin.api.departments import router as departments_router
from netadmin.api.mails import router as mails_router
from netadmin.api.mail_groups import router as mail_groups_router
from netadmin.api.admin import router as admin_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("netadmin")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("🚀 Starting %s API", settings.APP_NAME)
    if not settings.JWT_SECRET:
        logger.warning("⚠️  JWT_SECRET is undefined, every authenticated request will fail")

    if settings.SEED_ON_STARTUP:
        try:
            from netadmin.db.base import Base
            from netadmin.db.session import engine, SessionLocal
            from netadmin.db.seeds.seed_root import seed_root
            from netadmin.db.seeds.seed_settings import seed_settings
            import netadmin.models  # noqa: F401

            Base.metadata.create_all(bind=engine)
            db = SessionLocal()
            try:
                seed_root(db)
                seed_settings(db)
            finally:
                db.close()
            logger.info("✅ Database ready")
        except SQLAlchemyError as e:
            logger.warning(f"⚠️  Database not available: {e}")

    yield

    logger.info("🔻 Shutting down %s API", settings.APP_NAME)


app = FastAPI(
    title="NetAdmin API",
    description="Network administration backend",
    version=settings.VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Middleware
setup_middleware(app)


@app.exception_handler(NetAdminError)
async def netadmin_exception_handler(request: Request, exc: NetAdminError):
    return PlainTextResponse(exc.public_message, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return PlainTextResponse(errors or "Bad Request", status_code=400)


@app.exception_handler(SQLAlchemyError)
async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return PlainTextResponse("Internal Server Error", status_code=500)


# Register routers
app.include_router(auth_router, prefix="/api")
app.include_router(accounts_router, prefix="/api")
app.include_router(groups_router, prefix="/api")
app.include_router(routers_router, prefix="/api")
app.include_router(vpns_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(departments_router, prefix="/api")
app.include_router(mails_router, prefix="/api")
app.include_router(mail_groups_router, prefix="/api")
app.include_router(admin_router, prefix="/api")


@app.get("/api")
async def root():
    return {"status": "server is working"}


@app.get("/api/health")
async def health():
    """Quick health check endpoint."""
    return {"status": "ok", "version": settings.VERSION}

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from .database import engine, Base
from .errors import BudgetError, BudgetErrorKind
from .routers import budgets, customers, materials

logger = logging.getLogger("insulation_budget")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)


def _run_migrations():
    """Run pending Alembic migrations on startup.

    Databases created by Base.metadata.create_all() before the first
    migration get stamped with the base revision instead of re-created.
    """
    try:
        from alembic.config import Config
        from alembic import command
        from sqlalchemy import inspect

        alembic_ini = os.path.join(os.path.dirname(__file__), "..", "alembic.ini")
        if not os.path.exists(alembic_ini):
            logger.info("alembic.ini not found, skipping migrations")
            return

        alembic_cfg = Config(alembic_ini)
        alembic_cfg.set_main_option("script_location", os.path.join(os.path.dirname(alembic_ini), "alembic"))

        database_url = os.environ.get("DATABASE_URL")
        if database_url:
            alembic_cfg.set_main_option("sqlalchemy.url", database_url)

        insp = inspect(engine)
        has_alembic = "alembic_version" in insp.get_table_names()
        has_budgets = "budgets" in insp.get_table_names()

        if not has_alembic and has_budgets:
            logger.info("Stamping base migration 3a1f0c9d2b7e (tables already exist)")
            command.stamp(alembic_cfg, "3a1f0c9d2b7e")

        logger.info("Running pending Alembic migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("Migrations complete")

    except Exception as e:
        # Never let migration errors prevent app startup
        logger.warning("Alembic migration warning: %s", e)


app = FastAPI(
    title="Insulation Budget Service",
    description="Price quotes for insulation material purchases",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(budgets.router, prefix="/api")
app.include_router(customers.router, prefix="/api")
app.include_router(materials.router, prefix="/api")


@app.exception_handler(BudgetError)
async def budget_error_handler(request: Request, exc: BudgetError):
    # lookup misses are already logged by the repository
    if exc.kind == BudgetErrorKind.VALIDATION:
        logger.info("Budget request rejected path=%s fields=%s", request.url.path, sorted(exc.errors))
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health")
def health():
    return {"status": "ok", "app": "insulation-budget"}


@app.on_event("startup")
def auto_migrate():
    """Run pending Alembic migrations on startup."""
    _run_migrations()


@app.on_event("startup")
def auto_seed():
    """Seed the default insulation catalogue on first run."""
    from .database import SessionLocal
    from .routers.materials import seed_default_materials
    db = SessionLocal()
    try:
        seeded = seed_default_materials(db)
        if seeded:
            logger.info("Seeded %d building materials", seeded)
    finally:
        db.close()

"""FastAPI entrypoint for the library tracker service."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.db.connection import TABLES, close_pool, get_pool
from app.routers import router as api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The pool is created lazily on first use
    yield
    await close_pool()


app = FastAPI(
    title="Library Tracker API",
    version="0.1.0",
    description="Book catalog, reading status, reviews and a social feed for readers.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["health"])
async def healthcheck():
    """Basic health check."""
    return {"status": "ok", "env": settings.app_env}


@app.get("/health/db", tags=["health"])
async def db_healthcheck():
    """Database connectivity health check."""
    try:
        pool = await get_pool()
        async with pool.acquire() as conn:
            version = await conn.fetchval("SELECT version()")
            tables = await conn.fetch(
                "SELECT tablename FROM pg_tables WHERE schemaname = 'public' ORDER BY tablename"
            )
            counts = {}
            for table in ("users", "books", "reviews", "saved_books"):
                counts[table] = await conn.fetchval(f"SELECT COUNT(*) FROM {table}")
    except Exception as e:
        # Reported, not raised: this endpoint exists to describe failures
        return {
            "status": "error",
            "error": str(e),
            "type": type(e).__name__,
        }

    table_names = [t["tablename"] for t in tables]
    return {
        "status": "connected",
        "database": {
            "version": version.split(",")[0] if version else "unknown",
            "tables": table_names,
            "missing_tables": [t for t in TABLES if t not in table_names],
            "counts": counts,
        },
    }


app.include_router(api_router)

import os
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from app.routes import efforts_router
from app.database import init_db, DATABASE_URL
from app.background_jobs import scheduler
from app.services.errors import NotFoundError

# Create FastAPI app
app = FastAPI(
    title="Academy Effort Tracker",
    description="Cohort effort logging and weekly summaries",
    version="1.0.0"
)

# Include routers
app.include_router(efforts_router)


@app.on_event("startup")
def on_startup():
    """Create tables when INIT_DB=true (dev/SQLite) and start background jobs."""
    if os.getenv("INIT_DB", "false").lower() == "true":
        try:
            init_db()
        except Exception as e:
            # Re-raise as RuntimeError so the server fails loudly
            raise RuntimeError(
                f"Database initialization failed for DATABASE_URL={DATABASE_URL}: {e}"
            ) from e
    scheduler.start()


@app.on_event("shutdown")
def on_shutdown():
    scheduler.stop()


@app.get("/health")
async def health():
    return {"status": "ok"}


# Error handlers
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    """Missing cohort, user or effort."""
    return JSONResponse(status_code=404, content={"detail": str(exc)})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.database import engine, Base
from app.core.errors import AggregationError
from app.routers import health, auth, tasks, productivity as productivity_router, analytics, reports

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Productivity Metrics API",
    version="1.0.0"
)


@app.exception_handler(AggregationError)
def aggregation_error_handler(request: Request, exc: AggregationError):
    logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=500, content={"detail": exc.message})


# Routes
app.include_router(health.router, prefix="/health")
app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(productivity_router.router)
app.include_router(analytics.router)
app.include_router(reports.router)

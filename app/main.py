import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.public import router as public_router
from app.config import get_settings
from app.database import QueryExecutor, SessionLocal
from app.services.archive_service import ArchiveService

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Imageboard Catalog")
app.include_router(public_router)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error while serving %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"detail": "Database error"}, status_code=500)


@app.on_event("startup")
def startup_event():
    db = SessionLocal()
    try:
        ArchiveService(QueryExecutor(db)).create_schema()
    except Exception:
        logger.exception("Schema creation failed")
        db.rollback()
        raise
    finally:
        db.close()

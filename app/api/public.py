from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.database import QueryExecutor, get_executor
from app.schemas import BoardOut, CatalogThreadOut, CatalogThreadsOut
from app.services.catalog_service import CatalogService

router = APIRouter()


def get_catalog_service(db: QueryExecutor = Depends(get_executor)) -> CatalogService:
    settings = get_settings()
    return CatalogService(db, cdn_url_prefix=settings.cdn_url_prefix, batched=settings.catalog_batched_lookups)


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/api/catalog-threads", response_model=CatalogThreadsOut)
def api_catalog_threads(
    image_board: str | None = Query(default=None, alias="imageBoard"),
    board: str | None = Query(default=None),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return CatalogThreadsOut(threads=catalog.list_threads(image_board=image_board, board=board))


@router.get("/api/catalog-threads/{thread_id}", response_model=CatalogThreadOut)
def api_catalog_thread(thread_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    entry = catalog.get_thread(thread_id)
    if not entry:
        return JSONResponse({"detail": "Thread not found"}, status_code=404)
    return CatalogThreadOut(threads=entry)


@router.get("/api/boards", response_model=list[BoardOut])
def api_boards(
    image_board: str | None = Query(default=None, alias="imageBoard"),
    board: str | None = Query(default=None),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return catalog.list_boards(image_board=image_board, board=board)

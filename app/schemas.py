from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class ThreadSummary(CamelModel):
    id: int
    board: str
    image_board: str
    number: int
    title: str | None
    posters_count: int
    create_timestamp: int
    views_count: int
    last_activity: int
    is_deleted: bool
    posts_count: int
    files_count: int


class PostSummary(CamelModel):
    id: int
    number: int
    list_index: int
    create_timestamp: int
    name: str
    comment: str
    is_banned: bool
    is_deleted: bool
    is_op: bool


class FileSummary(CamelModel):
    id: int
    list_index: int
    url: str | None
    thumbnail_url: str | None


class CatalogEntry(CamelModel):
    thread: ThreadSummary
    post: PostSummary
    file: FileSummary | None


class CatalogThreadOut(CamelModel):
    threads: CatalogEntry


class CatalogThreadsOut(CamelModel):
    threads: list[CatalogEntry]


class BoardOut(CamelModel):
    image_board: str
    board: str
    threads_count: int

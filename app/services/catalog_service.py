"""Catalog read model: one thread, its first post and that post's first file.

Reads for a single entry are strictly sequential (thread -> post -> file),
each step keyed by the id resolved in the previous one. Listings repeat the
same three steps per thread unless ``batched`` is requested, in which case the
posts and files of every listed thread are fetched with two ``IN`` queries.
"""

import logging
from typing import Any

from app.database import QueryExecutor
from app.schemas import CatalogEntry, FileSummary, PostSummary, ThreadSummary
from app.services.file_queries import FileQueries
from app.services.mapping import FILE_PAYLOAD_COLUMNS
from app.services.post_queries import PostQueries
from app.services.records import StoredFile, StoredPost, StoredThread
from app.services.thread_queries import ThreadQueries

logger = logging.getLogger(__name__)


def file_urls(file: StoredFile, cdn_url_prefix: str = "/cdn") -> tuple[str | None, str | None]:
    if not file.extension:
        return None, None
    prefix = cdn_url_prefix.rstrip("/")
    return (
        f"{prefix}/file/{file.id}/{file.cdn_name}.{file.extension}",
        f"{prefix}/thumbnail/{file.id}/{file.cdn_name}_s.png",
    )


def to_catalog_file(file: StoredFile, cdn_url_prefix: str = "/cdn") -> FileSummary:
    url, thumbnail_url = file_urls(file, cdn_url_prefix)
    return FileSummary(id=file.id, list_index=file.list_index, url=url, thumbnail_url=thumbnail_url)


class CatalogService:
    def __init__(self, db: QueryExecutor, cdn_url_prefix: str = "/cdn", batched: bool = False):
        self.threads = ThreadQueries(db)
        self.posts = PostQueries(db)
        self.files = FileQueries(db)
        self.cdn_url_prefix = cdn_url_prefix
        self.batched = batched

    def _entry(self, thread: StoredThread, post: StoredPost, file: StoredFile | None) -> CatalogEntry:
        return CatalogEntry(
            thread=ThreadSummary.model_validate(thread),
            post=PostSummary.model_validate(post),
            file=to_catalog_file(file, self.cdn_url_prefix) if file is not None else None,
        )

    def _compose(self, thread: StoredThread) -> CatalogEntry | None:
        post = self.posts.select_first_of_thread(thread.id)
        if post is None:
            logger.warning("Thread %s has no first post, leaving it out of the catalog", thread.id)
            return None
        file = self.files.select_first_of_post(post.id, FILE_PAYLOAD_COLUMNS)
        return self._entry(thread, post, file)

    def get_thread(self, thread_id: int) -> CatalogEntry | None:
        """Catalog entry for one thread, or None when the thread is unknown."""
        thread = self.threads.select_by_id(thread_id)
        if thread is None:
            return None
        return self._compose(thread)

    def list_threads(
        self,
        image_board: str | None = None,
        board: str | None = None,
        batched: bool | None = None,
    ) -> list[CatalogEntry]:
        threads = self.threads.select_threads(image_board, board, sort=True)
        if self.batched if batched is None else batched:
            return self._compose_batched(threads)

        entries = []
        for thread in threads:
            entry = self._compose(thread)
            if entry is not None:
                entries.append(entry)
        return entries

    def _compose_batched(self, threads: list[StoredThread]) -> list[CatalogEntry]:
        first_posts: dict[int, StoredPost] = {}
        for post in self.posts.select_all_of_threads([t.id for t in threads], list_index=0):
            current = first_posts.get(post.thread_id)
            if current is None or post.id < current.id:
                first_posts[post.thread_id] = post

        first_files: dict[int, StoredFile] = {}
        post_ids = [post.id for post in first_posts.values()]
        for file in self.files.select_all_of_posts(post_ids, FILE_PAYLOAD_COLUMNS, list_index=0):
            current = first_files.get(file.post_id)
            if current is None or file.id < current.id:
                first_files[file.post_id] = file

        entries = []
        for thread in threads:
            post = first_posts.get(thread.id)
            if post is None:
                logger.warning("Thread %s has no first post, leaving it out of the catalog", thread.id)
                continue
            entries.append(self._entry(thread, post, first_files.get(post.id)))
        return entries

    def list_boards(self, image_board: str | None = None, board: str | None = None) -> list[dict[str, Any]]:
        return self.threads.select_boards(image_board, board)

import logging
from collections import defaultdict

from app.database import QueryExecutor
from app.services.file_queries import FileQueries
from app.services.mapping import FILE_PAYLOAD_COLUMNS
from app.services.observed import ObservedPost, ObservedThread, StashFile
from app.services.post_queries import PostQueries
from app.services.records import StoredFile, StoredPost, StoredThread
from app.services.thread_queries import ThreadQueries

logger = logging.getLogger(__name__)


class ArchiveService:
    """Write side of the archive: persists what the observer saw and reads it back."""

    def __init__(self, db: QueryExecutor):
        self.db = db
        self.threads = ThreadQueries(db)
        self.posts = PostQueries(db)
        self.files = FileQueries(db)

    def create_schema(self) -> None:
        # parents first, the FK targets must exist
        for queries in (self.threads, self.posts, self.files):
            queries.create_table()
        self.db.commit()

    def _insert_posts(self, thread_id: int, posts: list[ObservedPost]) -> list[int]:
        post_ids = []
        for post in posts:
            post_id = self.posts.insert(StoredPost.from_observed(post, thread_id))
            for file in post.files:
                file.id = self.files.insert(StoredFile.from_observed(file, post_id))
            post_ids.append(post_id)
        return post_ids

    def save_thread(self, thread: ObservedThread) -> int:
        with self.db.transaction():
            thread_id = self.threads.insert(StoredThread.from_observed(thread))
            self._insert_posts(thread_id, thread.posts)
        logger.info(
            "Saved thread %s/%s/%s as id=%s with %s posts",
            thread.image_board,
            thread.board,
            thread.number,
            thread_id,
            len(thread.posts),
        )
        return thread_id

    def append_posts(self, thread_id: int, posts: list[ObservedPost]) -> list[int]:
        """Add newly observed posts to a stored thread and bump its counters."""
        stored = self.threads.select_by_id(thread_id)
        if stored is None:
            logger.warning("Cannot append posts, thread id=%s not found", thread_id)
            return []

        with self.db.transaction():
            post_ids = self._insert_posts(thread_id, posts)
            stored.posts_count += len(posts)
            stored.files_count += sum(len(post.files) for post in posts)
            self.threads.update(stored, ["postsCount", "filesCount"])
        logger.info("Appended %s posts to thread id=%s", len(post_ids), thread_id)
        return post_ids

    def load_thread(self, thread_id: int) -> ObservedThread | None:
        stored = self.threads.select_by_id(thread_id)
        if stored is None:
            return None

        posts = sorted(self.posts.select_all_of_thread(thread_id), key=lambda p: (p.list_index, p.id))
        files_by_post: dict[int, list[StoredFile]] = defaultdict(list)
        for file in self.files.select_all_of_posts([post.id for post in posts], FILE_PAYLOAD_COLUMNS):
            files_by_post[file.post_id].append(file)

        observed_posts = []
        for post in posts:
            files = sorted(files_by_post.get(post.id, []), key=lambda f: (f.list_index, f.id))
            observed_posts.append(post.to_observed([file.to_observed() for file in files]))
        return stored.to_observed(observed_posts)

    def _mark_deleted(self, queries, record_id: int) -> bool:
        record = queries.select_by_id(record_id, FILE_PAYLOAD_COLUMNS if queries is self.files else ())
        if record is None:
            return False
        record.is_deleted = True
        updated = queries.update(record, ["isDeleted"])
        self.db.commit()
        logger.info("Marked %s id=%s as deleted", queries.schema.name, record_id)
        return updated > 0

    def mark_thread_deleted(self, thread_id: int) -> bool:
        return self._mark_deleted(self.threads, thread_id)

    def mark_post_deleted(self, post_id: int) -> bool:
        return self._mark_deleted(self.posts, post_id)

    def mark_file_deleted(self, file_id: int) -> bool:
        return self._mark_deleted(self.files, file_id)

    def stash_file(self, stash: StashFile) -> StoredFile | None:
        file = self.files.select_by_url(stash.url, FILE_PAYLOAD_COLUMNS)
        if file is None:
            logger.warning("No stored file with url %s to stash", stash.url)
            return None
        file.apply_stash(stash)
        self.files.update(file, ["extension", "data", "thumbnailData"])
        self.db.commit()
        return file

    def remove_thread(self, thread_id: int) -> bool:
        removed = self.threads.delete(thread_id)
        self.db.commit()
        if removed:
            logger.warning("Removed thread id=%s with its posts and files", thread_id)
        return removed > 0

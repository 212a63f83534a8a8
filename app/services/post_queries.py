from collections.abc import Iterable, Sequence

from app.models import Post
from app.services.mapping import POSTS
from app.services.records import StoredPost
from app.services.table_queries import TableQueries


class PostQueries(TableQueries[StoredPost]):
    table = Post.__table__
    schema = POSTS
    record = StoredPost

    def select_first_of_thread(self, thread_id: int, excluded: Iterable[str] = ()) -> StoredPost | None:
        return self._select_one("thread_id = :thread_id AND list_index = 0", {"thread_id": thread_id}, excluded)

    def select_all_of_thread(self, thread_id: int, excluded: Iterable[str] = ()) -> list[StoredPost]:
        return self._select_all("thread_id = :thread_id", {"thread_id": thread_id}, excluded)

    def select_all_of_threads(
        self,
        thread_ids: Sequence[int],
        excluded: Iterable[str] = (),
        list_index: int | None = None,
    ) -> list[StoredPost]:
        return self._select_in("thread_id", thread_ids, excluded, list_index=list_index)

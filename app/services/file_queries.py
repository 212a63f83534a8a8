from collections.abc import Iterable, Sequence

from app.models import File
from app.services.mapping import FILE_PAYLOAD_COLUMNS, FILES
from app.services.records import StoredFile
from app.services.table_queries import TableQueries


class FileQueries(TableQueries[StoredFile]):
    """Queries for the files table.

    List and summary reads skip the binary payload columns unless the caller
    passes ``excluded=()`` explicitly.
    """

    table = File.__table__
    schema = FILES
    record = StoredFile

    def select_by_url(self, url: str, excluded: Iterable[str] = ()) -> StoredFile | None:
        return self._select_one("url = :url", {"url": url}, excluded)

    def select_first_of_post(
        self, post_id: int, excluded: Iterable[str] = FILE_PAYLOAD_COLUMNS
    ) -> StoredFile | None:
        """The file with list_index 0; the lowest id wins if bad data holds several."""
        return self._select_one("post_id = :post_id AND list_index = 0", {"post_id": post_id}, excluded)

    def select_all_of_post(
        self, post_id: int, excluded: Iterable[str] = FILE_PAYLOAD_COLUMNS
    ) -> list[StoredFile]:
        return self._select_all("post_id = :post_id", {"post_id": post_id}, excluded)

    def select_all_of_posts(
        self,
        post_ids: Sequence[int],
        excluded: Iterable[str] = FILE_PAYLOAD_COLUMNS,
        list_index: int | None = None,
    ) -> list[StoredFile]:
        return self._select_in("post_id", post_ids, excluded, list_index=list_index)

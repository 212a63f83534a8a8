from collections.abc import Iterable
from typing import Any

from app.models import Thread
from app.services.mapping import THREADS
from app.services.records import StoredThread
from app.services.table_queries import MAX_ROW_ID, MIN_ROW_ID, TableQueries


def _board_filter(image_board: str | None, board: str | None) -> tuple[str, dict[str, Any]]:
    conditions = []
    params: dict[str, Any] = {}
    if image_board:
        conditions.append("image_board = :image_board")
        params["image_board"] = image_board
    if board:
        conditions.append("board = :board")
        params["board"] = board
    return " AND ".join(conditions), params


class ThreadQueries(TableQueries[StoredThread]):
    table = Thread.__table__
    schema = THREADS
    record = StoredThread

    def select_by_number(
        self, image_board: str, board: str, number: int, excluded: Iterable[str] = ()
    ) -> StoredThread | None:
        return self._select_one(
            "image_board = :image_board AND board = :board AND number = :number",
            {"image_board": image_board, "board": board, "number": number},
            excluded,
        )

    def select_threads(
        self,
        image_board: str | None = None,
        board: str | None = None,
        sort: bool = True,
        excluded: Iterable[str] = (),
    ) -> list[StoredThread]:
        """Threads of one image board and/or board; newest activity first when sorted."""
        where, params = _board_filter(image_board, board)
        return self._select_all(where, params, excluded, order_by="last_activity DESC, id DESC" if sort else "")

    def select_boards(self, image_board: str | None = None, board: str | None = None) -> list[dict[str, Any]]:
        where, params = _board_filter(image_board, board)
        rows = self.db.fetch_all(
            f"""
            SELECT image_board, board, COUNT(*) AS threads_count
            FROM threads
            {"WHERE " + where if where else ""}
            GROUP BY image_board, board
            ORDER BY image_board, board
            """,
            params,
        )
        return [
            {"imageBoard": row["image_board"], "board": row["board"], "threadsCount": int(row["threads_count"])}
            for row in rows
        ]

    def delete(self, thread_id: int) -> int:
        """Physically remove a thread; its posts and files go with it through the FK cascade."""
        if not MIN_ROW_ID <= thread_id <= MAX_ROW_ID:
            return 0
        return self.db.run("DELETE FROM threads WHERE id = :id", {"id": thread_id}).row_count

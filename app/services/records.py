"""Domain records for the threads, posts and files tables."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.services.mapping import FILES, POSTS, THREADS
from app.services.observed import ObservedFile, ObservedPost, ObservedThread, StashFile


@dataclass
class StoredThread:
    image_board: str
    board: str
    number: int
    title: str | None
    posters_count: int
    create_timestamp: int
    views_count: int
    last_activity: int
    is_deleted: bool
    posts_count: int
    files_count: int
    id: int | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "StoredThread":
        return cls(**THREADS.load_row(row))

    @classmethod
    def from_observed(cls, thread: ObservedThread) -> "StoredThread":
        return cls(
            image_board=thread.image_board,
            board=thread.board,
            number=thread.number,
            title=thread.title,
            posters_count=thread.posters_count,
            create_timestamp=thread.create_timestamp,
            views_count=thread.views_count,
            last_activity=thread.last_activity,
            is_deleted=thread.is_deleted,
            posts_count=len(thread.posts),
            files_count=thread.files_count,
        )

    def to_observed(self, posts: list[ObservedPost]) -> ObservedThread:
        return ObservedThread(
            image_board=self.image_board,
            board=self.board,
            number=self.number,
            title=self.title,
            posters_count=self.posters_count,
            create_timestamp=self.create_timestamp,
            views_count=self.views_count,
            last_activity=self.last_activity,
            posts=posts,
            is_deleted=self.is_deleted,
        )


@dataclass
class StoredPost:
    thread_id: int
    number: int
    list_index: int
    create_timestamp: int
    name: str
    comment: str
    is_banned: bool
    is_deleted: bool
    is_op: bool
    id: int | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "StoredPost":
        return cls(**POSTS.load_row(row))

    @classmethod
    def from_observed(cls, post: ObservedPost, thread_id: int) -> "StoredPost":
        return cls(
            thread_id=thread_id,
            number=post.number,
            list_index=post.list_index,
            create_timestamp=post.create_timestamp,
            name=post.name,
            comment=post.comment,
            is_banned=post.is_banned,
            is_deleted=post.is_deleted,
            is_op=post.is_op,
        )

    def to_observed(self, files: list[ObservedFile]) -> ObservedPost:
        return ObservedPost(
            list_index=self.list_index,
            number=self.number,
            create_timestamp=self.create_timestamp,
            name=self.name,
            comment=self.comment,
            files=files,
            is_banned=self.is_banned,
            is_deleted=self.is_deleted,
            is_op=self.is_op,
        )


@dataclass
class StoredFile:
    post_id: int
    list_index: int
    url: str
    thumbnail_url: str
    upload_name: str
    cdn_name: str
    check_sum: str
    is_deleted: bool = False
    extension: str | None = None
    data: bytes | None = None
    thumbnail_data: bytes | None = None
    id: int | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "StoredFile":
        return cls(**FILES.load_row(row))

    @classmethod
    def from_observed(cls, file: ObservedFile, post_id: int) -> "StoredFile":
        """Build a not-yet-persisted record; payload columns stay empty until stashed."""
        return cls(
            post_id=post_id,
            list_index=file.list_index,
            url=file.url,
            thumbnail_url=file.thumbnail_url,
            upload_name=file.upload_name,
            cdn_name=file.cdn_name,
            check_sum=file.check_sum,
            is_deleted=file.is_deleted,
        )

    def to_observed(self) -> ObservedFile:
        file = ObservedFile(
            list_index=self.list_index,
            url=self.url,
            thumbnail_url=self.thumbnail_url,
            upload_name=self.upload_name,
            cdn_name=self.cdn_name,
            check_sum=self.check_sum,
            is_deleted=self.is_deleted,
        )
        file.id = self.id
        return file

    def apply_stash(self, stash: StashFile) -> None:
        self.extension = stash.extension
        self.data = stash.data
        self.thumbnail_data = stash.thumbnail_data

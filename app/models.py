from sqlalchemy import Boolean, ForeignKey, Index, Integer, LargeBinary, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# Column order below is the declared projection order used by raw SQL reads.
# Payload columns marked excludable are dropped from list/summary reads.
EXCLUDABLE = {"excludable": True}


class Thread(Base):
    __tablename__ = "threads"
    __table_args__ = (
        Index("ix_threads_board", "image_board", "board"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    image_board: Mapped[str] = mapped_column(Text, nullable=False)
    board: Mapped[str] = mapped_column(Text, nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    posters_count: Mapped[int] = mapped_column(Integer, nullable=False)
    create_timestamp: Mapped[int] = mapped_column(Integer, nullable=False)
    views_count: Mapped[int] = mapped_column(Integer, nullable=False)
    last_activity: Mapped[int] = mapped_column(Integer, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False)
    posts_count: Mapped[int] = mapped_column(Integer, nullable=False)
    files_count: Mapped[int] = mapped_column(Integer, nullable=False)


class Post(Base):
    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_thread_id_list_index", "thread_id", "list_index"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    thread_id: Mapped[int] = mapped_column(
        ForeignKey("threads.id", ondelete="CASCADE", onupdate="NO ACTION"), nullable=False
    )
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    list_index: Mapped[int] = mapped_column(Integer, nullable=False)
    create_timestamp: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    is_banned: Mapped[bool] = mapped_column(Boolean, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False)
    is_op: Mapped[bool] = mapped_column(Boolean, nullable=False)


class File(Base):
    __tablename__ = "files"
    __table_args__ = (
        Index("ix_files_post_id_list_index", "post_id", "list_index"),
        Index("ix_files_url", "url"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE", onupdate="NO ACTION"), nullable=False
    )
    list_index: Mapped[int] = mapped_column(Integer, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(Text, nullable=False)
    upload_name: Mapped[str] = mapped_column(Text, nullable=False)
    cdn_name: Mapped[str] = mapped_column(Text, nullable=False)
    check_sum: Mapped[str] = mapped_column(Text, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False)
    extension: Mapped[str | None] = mapped_column(Text, nullable=True)
    data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True, info=EXCLUDABLE)
    thumbnail_data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True, info=EXCLUDABLE)

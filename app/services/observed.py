from dataclasses import dataclass, field


@dataclass
class ObservedFile:
    list_index: int
    url: str
    thumbnail_url: str
    upload_name: str
    cdn_name: str
    check_sum: str
    is_deleted: bool = False
    id: int | None = None


@dataclass
class ObservedPost:
    list_index: int
    number: int
    create_timestamp: int
    name: str
    comment: str
    files: list[ObservedFile] = field(default_factory=list)
    is_banned: bool = False
    is_deleted: bool = False
    is_op: bool = False


@dataclass
class ObservedThread:
    image_board: str
    board: str
    number: int
    title: str | None
    posters_count: int
    create_timestamp: int
    views_count: int
    last_activity: int
    posts: list[ObservedPost] = field(default_factory=list)
    is_deleted: bool = False

    @property
    def files_count(self) -> int:
        return sum(len(post.files) for post in self.posts)


@dataclass
class StashFile:
    """Payload fetched for a file by the stashing subsystem."""

    url: str
    extension: str | None
    data: bytes | None
    thumbnail_data: bytes | None

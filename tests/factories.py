from app.services.observed import ObservedFile, ObservedPost, ObservedThread


def make_file(list_index: int = 0, name: str = "cat") -> ObservedFile:
    return ObservedFile(
        list_index=list_index,
        url=f"https://img.example.org/src/{name}.jpg",
        thumbnail_url=f"https://img.example.org/thumb/{name}s.jpg",
        upload_name=f"{name}.jpg",
        cdn_name=f"{name}-cdn",
        check_sum=f"sum-{name}",
    )


def make_post(list_index: int, number: int, files: list[ObservedFile] | None = None) -> ObservedPost:
    return ObservedPost(
        list_index=list_index,
        number=number,
        create_timestamp=1700000000 + list_index,
        name="Anonymous",
        comment=f"post {number}",
        files=files or [],
        is_op=list_index == 0,
    )


def make_thread(
    number: int = 100,
    board: str = "b",
    image_board: str = "2ch",
    last_activity: int = 1700000100,
    posts: list[ObservedPost] | None = None,
) -> ObservedThread:
    if posts is None:
        posts = [make_post(0, number, [make_file(0, f"op{number}")]), make_post(1, number + 1)]
    return ObservedThread(
        image_board=image_board,
        board=board,
        number=number,
        title=f"Thread {number}",
        posters_count=2,
        create_timestamp=1700000000,
        views_count=10,
        last_activity=last_activity,
        posts=posts,
    )


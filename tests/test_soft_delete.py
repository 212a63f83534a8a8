from app.services.file_queries import FileQueries
from factories import make_thread


def test_soft_delete_file_keeps_row(archive, executor):
    thread_id = archive.save_thread(make_thread())
    post = archive.posts.select_first_of_thread(thread_id)
    file = FileQueries(executor).select_first_of_post(post.id)

    assert archive.mark_file_deleted(file.id) is True
    saved = FileQueries(executor).select_by_id(file.id)
    assert saved.is_deleted is True
    assert saved.url == file.url


def test_soft_delete_thread_and_post(archive):
    thread_id = archive.save_thread(make_thread())
    post = archive.posts.select_first_of_thread(thread_id)

    assert archive.mark_thread_deleted(thread_id) is True
    assert archive.mark_post_deleted(post.id) is True

    restored = archive.load_thread(thread_id)
    assert restored.is_deleted is True
    assert restored.posts[0].is_deleted is True
    assert restored.posts[1].is_deleted is False


def test_soft_delete_missing_row(archive):
    assert archive.mark_file_deleted(404) is False

from dataclasses import replace

import pytest

from app.services.file_queries import FileQueries
from app.services.mapping import NOT_LOADED, ConfigurationError
from app.services.observed import StashFile
from app.services.records import StoredFile
from factories import make_file, make_post, make_thread


@pytest.fixture()
def post_id(archive, executor):
    thread_id = archive.save_thread(make_thread(posts=[make_post(0, 100)]))
    return archive.posts.select_first_of_thread(thread_id).id


@pytest.fixture()
def files(executor):
    return FileQueries(executor)


def stored(post_id, list_index=0, name="cat", **kwargs):
    return replace(StoredFile.from_observed(make_file(list_index, name), post_id), **kwargs)


def test_create_table_is_idempotent(files):
    files.create_table()
    files.create_table()


def test_insert_assigns_id_and_select_by_id_reads_it_back(files, post_id):
    file_id = files.insert(stored(post_id))
    assert file_id is not None

    file = files.select_by_id(file_id)
    assert file.id == file_id
    assert file.post_id == post_id
    assert file.is_deleted is False
    assert file.extension is None
    assert file.data is None


def test_insert_keeps_explicit_id(files, post_id):
    assert files.insert(stored(post_id, id=42)) == 42
    assert files.select_by_id(42).url == "https://img.example.org/src/cat.jpg"


def test_select_by_id_missing_returns_none(files):
    assert files.select_by_id(12345) is None


def test_excluded_columns_are_not_loaded(files, post_id):
    file_id = files.insert(stored(post_id, extension="png", data=b"\x89PNG", thumbnail_data=b"thumb"))

    full = files.select_by_id(file_id)
    assert full.data == b"\x89PNG"
    assert full.thumbnail_data == b"thumb"

    light = files.select_by_id(file_id, ["data", "thumbnail_data"])
    assert light.data is NOT_LOADED
    assert light.thumbnail_data is NOT_LOADED
    assert light.extension == "png"


def test_select_first_of_post_prefers_list_index_zero_then_lowest_id(files, post_id):
    files.insert(stored(post_id, list_index=1, name="second"))
    first = files.insert(stored(post_id, list_index=0, name="first"))
    files.insert(stored(post_id, list_index=0, name="duplicate"))

    file = files.select_first_of_post(post_id)
    assert file.id == first
    assert file.data is NOT_LOADED


def test_select_first_of_post_without_files(files, post_id):
    assert files.select_first_of_post(post_id) is None


def test_select_by_url(files, post_id):
    files.insert(stored(post_id, name="dog"))
    assert files.select_by_url("https://img.example.org/src/dog.jpg").cdn_name == "dog-cdn"
    assert files.select_by_url("https://img.example.org/src/none.jpg") is None


def test_select_all_of_posts_with_empty_ids_skips_query(files, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("no query expected")

    monkeypatch.setattr(files.db, "fetch_all", fail)
    assert files.select_all_of_posts([]) == []


def test_select_all_of_posts_filters_by_list_index(files, post_id, archive):
    other_thread = archive.save_thread(make_thread(number=200, posts=[make_post(0, 200)]))
    other_post = archive.posts.select_first_of_thread(other_thread).id
    files.insert(stored(post_id, 0, "a"))
    files.insert(stored(post_id, 1, "b"))
    files.insert(stored(other_post, 0, "c"))

    assert len(files.select_all_of_posts([post_id, other_post])) == 3
    firsts = files.select_all_of_posts([post_id, other_post], list_index=0)
    assert sorted(f.upload_name for f in firsts) == ["a.jpg", "c.jpg"]


def test_update_touches_only_named_fields(files, post_id, executor):
    file_id = files.insert(stored(post_id, extension="jpg"))
    file = files.select_by_id(file_id)
    file.is_deleted = True
    file.extension = "gif"

    assert files.update(file, ["isDeleted"]) == 1
    row = executor.fetch_one("SELECT is_deleted, extension FROM files WHERE id = :id", {"id": file_id})
    assert row["is_deleted"] == 1
    assert row["extension"] == "jpg"


def test_update_rejects_unknown_fields_before_any_sql(files, post_id, monkeypatch):
    file = files.select_by_id(files.insert(stored(post_id)))

    def fail(*args, **kwargs):
        raise AssertionError("no query expected")

    monkeypatch.setattr(files.db, "run", fail)
    with pytest.raises(ConfigurationError):
        files.update(file, ["fooBar"])
    with pytest.raises(ConfigurationError):
        files.update(file, [])
    with pytest.raises(ConfigurationError):
        files.update(file, ["id"])


def test_update_missing_row_reports_zero(files, post_id):
    file = stored(post_id, id=999)
    assert files.update(file, ["isDeleted"]) == 0


def test_apply_stash_then_update_payload(files, post_id):
    file_id = files.insert(stored(post_id))
    file = files.select_by_id(file_id, ["data", "thumbnail_data"])
    file.apply_stash(StashFile(url=file.url, extension="webm", data=b"video", thumbnail_data=b"png"))
    files.update(file, ["extension", "data", "thumbnailData"])

    saved = files.select_by_id(file_id)
    assert (saved.extension, saved.data, saved.thumbnail_data) == ("webm", b"video", b"png")


def test_insert_then_select_round_trip(files, post_id):
    record = stored(post_id, name="round")
    file_id = files.insert(record)
    assert files.select_by_id(file_id) == replace(record, id=file_id)


def test_select_all_of_posts_splits_long_id_lists(files, archive, monkeypatch):
    post_ids = []
    for number in range(5):
        thread_id = archive.save_thread(make_thread(number=number, posts=[make_post(0, number)]))
        post_id = archive.posts.select_first_of_thread(thread_id).id
        files.insert(stored(post_id, name=f"f{number}"))
        post_ids.append(post_id)

    calls = []
    fetch_all = files.db.fetch_all

    def counting_fetch_all(sql, params=None):
        calls.append(list(params["ids"]))
        return fetch_all(sql, params)

    monkeypatch.setattr(files, "in_chunk_size", 2)
    monkeypatch.setattr(files.db, "fetch_all", counting_fetch_all)

    found = files.select_all_of_posts(post_ids + [9999])
    assert sorted(f.post_id for f in found) == sorted(post_ids)
    assert [len(ids) for ids in calls] == [2, 2, 2]


def test_select_by_id_outside_integer_range(files):
    assert files.select_by_id(2**63) is None
    assert files.select_by_id(-(2**63) - 1) is None

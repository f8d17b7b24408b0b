from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from userstore.models import User
from userstore.store import UserStore


def make_user(user_id: str, **fields) -> User:
    now = datetime.now()
    return User(id=user_id, created_at=now, updated_at=now, **fields)


def test_add_and_get_user():
    store = UserStore()
    user = make_user("1", first_name="Alice")
    store.add_user(user)
    assert store.get_user("1") == user


def test_get_missing_user():
    store = UserStore()
    assert store.get_user("nope") is None


def test_add_overwrites_existing_id():
    store = UserStore()
    store.add_user(make_user("1", first_name="Alice"))
    store.add_user(make_user("1", first_name="Bob"))
    assert len(store) == 1
    assert store.get_user("1").first_name == "Bob"


def test_update_upserts_missing_id():
    store = UserStore()
    store.update_user(make_user("1", first_name="Alice"))
    assert store.get_user("1").first_name == "Alice"


def test_delete_user():
    store = UserStore()
    store.add_user(make_user("1"))
    store.delete_user("1")
    assert store.get_user("1") is None
    assert len(store) == 0


def test_delete_missing_user_is_noop():
    store = UserStore()
    store.add_user(make_user("1"))
    store.delete_user("2")
    assert len(store) == 1


def test_list_users_returns_snapshot():
    store = UserStore()
    store.add_user(make_user("1"))
    store.add_user(make_user("2"))
    users = store.list_users()
    store.delete_user("1")
    assert sorted(u.id for u in users) == ["1", "2"]
    assert [u.id for u in store.list_users()] == ["2"]


def test_concurrent_adds():
    store = UserStore()

    def add(i: int) -> None:
        store.add_user(make_user(str(i)))
        store.list_users()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(add, range(500)))

    assert len(store) == 500

"""任务存储测试用例"""

import sqlite3
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from todolist.config import Settings
from todolist.exceptions import TaskStoreError
from todolist.storage import InMemoryTaskStore, SqliteTaskStore, create_store


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    """每个测试使用独立的存储实例"""
    if request.param == "memory":
        instance = InMemoryTaskStore()
    else:
        instance = SqliteTaskStore(str(tmp_path / "todo.db"))
    yield instance
    instance.close()


class TestTaskStoreContract:
    """两种存储实现共用的行为约定"""

    def test_create_assigns_increasing_ids(self, store):
        """测试创建任务时分配递增ID"""
        first = store.create("Buy milk")
        second = store.create("Walk dog", True)
        assert first.id == 1
        assert second.id == 2
        assert first.completed is False
        assert second.completed is True

    def test_ids_not_reused_after_delete(self, store):
        """测试删除后ID不复用"""
        first = store.create("a")
        second = store.create("b")
        assert store.delete(second.id)
        third = store.create("c")
        assert third.id not in (first.id, second.id)
        assert third.id > second.id

    def test_list_empty(self, store):
        """测试空存储返回空列表"""
        assert store.list_all() == []

    def test_list_in_id_order(self, store):
        """测试列表按插入顺序返回"""
        for title in ("one", "two", "three"):
            store.create(title)
        assert [t.title for t in store.list_all()] == ["one", "two", "three"]

    def test_get(self, store):
        """测试按ID查询"""
        task = store.create("Read book")
        assert store.get(task.id) == task
        assert store.get(999) is None

    def test_update_replaces_fields(self, store):
        """测试更新整体替换标题与状态"""
        task = store.create("Buy milk")
        updated = store.update(task.id, "Buy oat milk", True)
        assert updated.id == task.id
        assert updated.title == "Buy oat milk"
        assert updated.completed is True

        listed = store.list_all()
        assert len(listed) == 1
        assert listed[0] == updated

    def test_update_keeps_position(self, store):
        """测试更新不改变顺序"""
        a = store.create("a")
        store.create("b")
        store.update(a.id, "a2", False)
        assert [t.title for t in store.list_all()] == ["a2", "b"]

    def test_update_missing_returns_none(self, store):
        """测试更新不存在的任务返回 None 且不改变存储"""
        store.create("keep")
        assert store.update(42, "x", True) is None
        assert [t.title for t in store.list_all()] == ["keep"]

    def test_out_of_range_ids_not_found(self, store):
        """测试超出 INTEGER 范围的ID视为不存在"""
        store.create("keep")
        huge = 10 ** 20
        assert store.get(huge) is None
        assert store.update(huge, "x", True) is None
        assert store.delete(huge) is False
        assert [t.title for t in store.list_all()] == ["keep"]

    def test_delete_twice(self, store):
        """测试重复删除：第一次成功，第二次返回 False"""
        task = store.create("temp")
        assert store.delete(task.id) is True
        assert store.delete(task.id) is False
        assert store.list_all() == []


class TestInMemoryTaskStore:
    """测试内存存储"""

    def test_returned_records_are_copies(self):
        """测试返回的任务是副本，修改不影响存储"""
        store = InMemoryTaskStore()
        task = store.create("original")
        task.title = "mutated"
        store.list_all()[0].completed = True
        assert store.get(task.id).title == "original"
        assert store.get(task.id).completed is False

    def test_concurrent_creates(self):
        """测试并发创建不产生重复ID也不丢失任务"""
        store = InMemoryTaskStore()
        workers = 16
        per_worker = 50
        barrier = threading.Barrier(workers)

        def worker(n):
            barrier.wait()
            return [store.create(f"task-{n}-{i}").id for i in range(per_worker)]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(worker, range(workers)))

        ids = [task_id for chunk in results for task_id in chunk]
        assert len(ids) == workers * per_worker
        assert len(set(ids)) == len(ids)
        assert len(store.list_all()) == workers * per_worker


class TestSqliteTaskStore:
    """测试 SQLite 存储"""

    def test_schema_created(self, tmp_path):
        """测试初始化时创建 tasks 表"""
        db_path = tmp_path / "todo.db"
        SqliteTaskStore(str(db_path))
        conn = sqlite3.connect(db_path)
        columns = [row[1] for row in conn.execute("PRAGMA table_info(tasks)")]
        conn.close()
        assert columns == ["id", "title", "completed"]

    def test_data_survives_reopen(self, tmp_path):
        """测试重新打开数据库后数据仍在"""
        db_path = str(tmp_path / "todo.db")
        SqliteTaskStore(db_path).create("persisted", True)
        reopened = SqliteTaskStore(db_path)
        tasks = reopened.list_all()
        assert len(tasks) == 1
        assert tasks[0].title == "persisted"
        assert tasks[0].completed is True

    def test_in_memory_database(self):
        """测试 :memory: 数据库在存储生命周期内共享"""
        store = SqliteTaskStore(":memory:")
        store.create("in memory")
        assert [t.title for t in store.list_all()] == ["in memory"]
        store.close()

    def test_in_memory_databases_are_isolated(self):
        """测试不同实例的内存数据库互相隔离"""
        a = SqliteTaskStore(":memory:")
        b = SqliteTaskStore(":memory:")
        a.create("only in a")
        assert b.list_all() == []
        a.close()
        b.close()

    def test_unopenable_database(self, tmp_path):
        """测试数据库无法打开时抛出 TaskStoreError"""
        with pytest.raises(TaskStoreError):
            SqliteTaskStore(str(tmp_path / "missing" / "todo.db"))

    def test_storage_error_wrapped(self, tmp_path):
        """测试 SQL 执行失败时抛出 TaskStoreError"""
        db_path = tmp_path / "todo.db"
        store = SqliteTaskStore(str(db_path))
        conn = sqlite3.connect(db_path)
        conn.execute("DROP TABLE tasks")
        conn.commit()
        conn.close()

        with pytest.raises(TaskStoreError, match="no such table"):
            store.create("x")
        with pytest.raises(TaskStoreError):
            store.list_all()


class TestCreateStore:
    """测试存储工厂"""

    def test_memory_backend(self):
        """测试选择内存存储"""
        store = create_store(Settings(storage_backend="memory"))
        assert isinstance(store, InMemoryTaskStore)

    def test_sqlite_backend(self, tmp_path):
        """测试选择 SQLite 存储"""
        store = create_store(Settings(storage_backend="sqlite", database_path=str(tmp_path / "t.db")))
        assert isinstance(store, SqliteTaskStore)

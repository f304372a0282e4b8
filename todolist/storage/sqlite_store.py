import sqlite3
import logging
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

from ..exceptions import TaskStoreError
from ..models.task import MAX_TASK_ID, Task
from .base import TaskStore

logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    completed BOOLEAN NOT NULL DEFAULT 0
)
"""


class SqliteTaskStore(TaskStore):
    """
    SQLite 任务存储

    每个操作使用独立连接并只执行一条 SQL 语句，不持有应用层锁，
    并发控制完全交给数据库引擎。
    """

    def __init__(self, db_path: str, timeout: float = 5.0):
        """
        初始化存储并建表

        Args:
            db_path: 数据库文件路径，":memory:" 表示进程内共享的内存数据库
            timeout: 等待数据库锁的秒数

        Raises:
            TaskStoreError: 数据库无法打开或建表失败
        """
        self.db_path = db_path
        self.timeout = timeout
        self._anchor: Optional[sqlite3.Connection] = None

        if db_path == ":memory:":
            # 命名共享缓存库，锚连接存活期间数据一直保留
            self._database = f"file:todolist-{uuid.uuid4().hex}?mode=memory&cache=shared"
            self._uri = True
        else:
            self._database = db_path
            self._uri = False

        try:
            if self._uri:
                self._anchor = self._connect()
            with self._connection() as conn:
                conn.execute(SCHEMA)
        except sqlite3.Error as e:
            raise TaskStoreError(f"无法初始化数据库 {db_path}: {e}") from e

        logger.info(f"SQLite 存储已就绪: {db_path}")

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._database, timeout=self.timeout, uri=self._uri)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(id=row["id"], title=row["title"], completed=bool(row["completed"]))

    def create(self, title: str, completed: bool = False) -> Task:
        try:
            with self._connection() as conn:
                cursor = conn.execute(
                    "INSERT INTO tasks (title, completed) VALUES (?, ?)",
                    (title, int(completed)),
                )
                task_id = cursor.lastrowid
        except sqlite3.Error as e:
            raise TaskStoreError(str(e)) from e
        return Task(id=task_id, title=title, completed=completed)

    def list_all(self) -> list[Task]:
        try:
            with self._connection() as conn:
                rows = conn.execute("SELECT id, title, completed FROM tasks ORDER BY id").fetchall()
        except sqlite3.Error as e:
            raise TaskStoreError(str(e)) from e
        return [self._row_to_task(row) for row in rows]

    def get(self, task_id: int) -> Optional[Task]:
        if not 0 < task_id <= MAX_TASK_ID:
            return None
        try:
            with self._connection() as conn:
                row = conn.execute(
                    "SELECT id, title, completed FROM tasks WHERE id = ?", (task_id,)
                ).fetchone()
        except sqlite3.Error as e:
            raise TaskStoreError(str(e)) from e
        return self._row_to_task(row) if row else None

    def update(self, task_id: int, title: str, completed: bool) -> Optional[Task]:
        if not 0 < task_id <= MAX_TASK_ID:
            return None
        try:
            with self._connection() as conn:
                cursor = conn.execute(
                    "UPDATE tasks SET title = ?, completed = ? WHERE id = ?",
                    (title, int(completed), task_id),
                )
                affected = cursor.rowcount
        except sqlite3.Error as e:
            raise TaskStoreError(str(e)) from e
        if affected == 0:
            return None
        return Task(id=task_id, title=title, completed=completed)

    def delete(self, task_id: int) -> bool:
        # 超出 INTEGER 范围的ID不可能存在
        if not 0 < task_id <= MAX_TASK_ID:
            return False
        try:
            with self._connection() as conn:
                cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
                affected = cursor.rowcount
        except sqlite3.Error as e:
            raise TaskStoreError(str(e)) from e
        return affected > 0

    def close(self) -> None:
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None
        logger.info(f"SQLite 存储已关闭: {self.db_path}")

"""A stand-in for a mysql-connector connection that replays scripted results."""
from __future__ import annotations


class ScriptedCursor:
    def __init__(self, steps):
        self._steps = list(steps)
        self.executed: list[tuple[str, tuple]] = []
        self.rowcount = 0
        self.lastrowid = None
        self._row = None

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), tuple(params)))
        step = self._steps.pop(0)
        if isinstance(step, Exception):
            raise step
        self.rowcount = step.get("rowcount", 0)
        self.lastrowid = step.get("lastrowid")
        self._row = step.get("row")

    def fetchone(self):
        return self._row

    def fetchall(self):
        return [self._row] if self._row else []

    def close(self):
        pass


class ScriptedConnection:
    def __init__(self, *steps):
        self.cursor_obj = ScriptedCursor(steps)
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass

    @property
    def executed(self):
        return self.cursor_obj.executed


class ScriptedConnectionFactory:
    def __init__(self, connection: ScriptedConnection):
        self.connection = connection

    def connect(self, *, with_database: bool = True):
        return self.connection

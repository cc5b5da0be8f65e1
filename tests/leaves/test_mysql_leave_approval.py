import mysql.connector
import pytest
from mysql.connector import errorcode

from office_hr.core.exceptions import InsufficientLeaveBalanceError
from office_hr.leaves.mysql_leave_repository import MySQLLeaveRepository
from tests.database.scripted import ScriptedConnection, ScriptedConnectionFactory

PENDING_ANNUAL = {"row": {"employee_id": 2, "leave_type": "annual", "days": 3}}


def _approve(conn, **kwargs):
    repo = MySQLLeaveRepository(ScriptedConnectionFactory(conn))
    return repo.approve(leave_id=7, approved_by=1, **kwargs)


def test_status_and_balance_commit_together():
    conn = ScriptedConnection(PENDING_ANNUAL, {"rowcount": 1}, {"rowcount": 1})

    assert _approve(conn) is True

    assert conn.committed
    sql, params = conn.executed[-1]
    assert sql == "UPDATE users SET leave_annual = leave_annual - %s WHERE user_id=%s AND leave_annual >= %s"
    assert params == (3, 2, 3)


def test_insufficient_balance_rolls_back_the_approval():
    conn = ScriptedConnection(PENDING_ANNUAL, {"rowcount": 1}, {"rowcount": 0})

    with pytest.raises(InsufficientLeaveBalanceError):
        _approve(conn)

    assert conn.rolled_back
    assert not conn.committed


def test_failed_deduction_rolls_back_the_approval():
    timeout = mysql.connector.DatabaseError(msg="Lock wait timeout", errno=errorcode.ER_LOCK_WAIT_TIMEOUT)
    conn = ScriptedConnection(PENDING_ANNUAL, {"rowcount": 1}, timeout)

    with pytest.raises(mysql.connector.DatabaseError):
        _approve(conn)

    assert conn.rolled_back
    assert not conn.committed


def test_negative_balance_allowed_drops_the_guard():
    conn = ScriptedConnection(PENDING_ANNUAL, {"rowcount": 1}, {"rowcount": 1})

    assert _approve(conn, allow_negative_balance=True) is True

    sql, params = conn.executed[-1]
    assert ">=" not in sql
    assert params == (3, 2)


def test_emergency_leave_skips_the_balance_update():
    conn = ScriptedConnection({"row": {"employee_id": 2, "leave_type": "emergency", "days": 1}}, {"rowcount": 1})

    assert _approve(conn) is True
    assert len(conn.executed) == 2
    assert conn.committed


def test_already_decided_request_is_left_alone():
    conn = ScriptedConnection({"row": None})

    assert _approve(conn) is False
    assert len(conn.executed) == 1

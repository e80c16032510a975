from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, user_id, check_in, check_out, total_hours, status"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        total_hours=to_float(r.get("total_hours")),
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE user_id=%s
                ORDER BY created_at DESC, id DESC
                """,
                (int(user_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE user_id=%s AND check_out IS NULL
                ORDER BY id DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(self, *, user_id: int, check_in: datetime, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance(user_id, check_in, status, created_at, updated_at)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), check_in, status.value, check_in, check_in),
                )
            except IntegrityError as e:
                # uq_attendance_open: a second open record for the same user.
                if e.errno == errorcode.ER_DUP_ENTRY:
                    raise ValidationError("You are already checked in")
                raise
            return int(cur.lastrowid)

    def close_record(self, *, attendance_id: int, check_out: datetime, total_hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out=%s, total_hours=%s, updated_at=%s
                WHERE id=%s AND check_out IS NULL
                """,
                (check_out, total_hours, check_out, int(attendance_id)),
            )
            return cur.rowcount > 0

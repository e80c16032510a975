from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_float
from .model import LeaveRequest, LeaveRequestRow
from .repository import LeaveRepository


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        type=LeaveType(r["type"]),
        start_date=r["start_date"],
        end_date=r.get("end_date"),
        hours=to_float(r.get("hours")) or 0.0,
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        rejection_reason=r.get("rejection_reason"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        type: LeaveType,
        start_date: datetime,
        end_date: Optional[datetime],
        hours: float,
        reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, type, start_date, end_date, hours, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    type.value,
                    start_date,
                    end_date,
                    hours,
                    reason,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, type, start_date, end_date, hours, reason,
                       status, rejection_reason, created_at
                FROM leave_requests
                WHERE user_id=%s
                ORDER BY created_at DESC, id DESC
                """,
                (int(user_id),),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_all_with_profiles(self) -> Sequence[LeaveRequestRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.id, r.user_id, r.type, r.start_date, r.end_date, r.hours, r.reason,
                       r.status, r.rejection_reason, r.created_at,
                       p.full_name, p.email
                FROM leave_requests r
                JOIN profiles p ON p.id = r.user_id
                ORDER BY r.created_at DESC, r.id DESC
                """
            )
            return [
                LeaveRequestRow(request=_to_request(r), full_name=r["full_name"], email=r["email"])
                for r in fetchall(cur)
            ]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, rejection_reason=%s, updated_at=NOW()
                WHERE id=%s AND status=%s
                """,
                (status.value, rejection_reason, int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeOption, Profile
from .repository import ProfileRepository

_COLUMNS = "id, email, full_name, password_hash, role, phone, department, position, bio"


def _to_profile(row: dict) -> Profile:
    return Profile(
        id=int(row["id"]),
        email=row["email"],
        full_name=row["full_name"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        phone=row.get("phone"),
        department=row.get("department"),
        position=row.get("position"),
        bio=row.get("bio"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_by_email(self, email: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def create_profile(
        self,
        *,
        email: str,
        password_hash: str,
        full_name: str,
        phone: Optional[str],
        role: Role,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles(email, password_hash, full_name, phone, role)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (email, password_hash, full_name, phone, role.value),
            )
            return int(cur.lastrowid)

    def update_full_name(self, user_id: int, full_name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE profiles SET full_name=%s, updated_at=NOW() WHERE id=%s",
                (full_name, int(user_id)),
            )
            return cur.rowcount > 0

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE profiles SET password_hash=%s, updated_at=NOW() WHERE id=%s",
                (password_hash, int(user_id)),
            )
            return cur.rowcount > 0

    def list_by_role(self, role: Role) -> Sequence[EmployeeOption]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, full_name FROM profiles WHERE role=%s ORDER BY full_name",
                (role.value,),
            )
            return [EmployeeOption(id=int(r["id"]), full_name=r["full_name"]) for r in fetchall(cur)]

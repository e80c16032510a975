from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.worktrack.worktrack.attendance.model import AttendanceRecord
from src.worktrack.worktrack.container import assemble_container
from src.worktrack.worktrack.core.enums import AttendanceStatus, RequestStatus, Role, TaskPriority, TaskStatus
from src.worktrack.worktrack.core.exceptions import ValidationError
from src.worktrack.worktrack.leave.model import LeaveRequest, LeaveRequestRow
from src.worktrack.worktrack.tasks.model import Task, TaskRow
from src.worktrack.worktrack.users.model import EmployeeOption, Profile


class InMemoryProfiles:
    def __init__(self):
        self._by_id: dict[int, Profile] = {}
        self._id = 0
        self.writes = 0

    def add(self, *, email: str, password: str = "secret123", full_name: str = "Someone", role: Role = Role.EMPLOYEE) -> Profile:
        self._id += 1
        profile = Profile(
            id=self._id,
            email=email,
            full_name=full_name,
            password_hash=generate_password_hash(password),
            role=role,
        )
        self._by_id[profile.id] = profile
        return profile

    def get_by_id(self, user_id: int) -> Optional[Profile]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[Profile]:
        return next((p for p in self._by_id.values() if p.email == email), None)

    def create_profile(self, *, email, password_hash, full_name, phone, role) -> int:
        self.writes += 1
        self._id += 1
        self._by_id[self._id] = Profile(
            id=self._id,
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            role=role,
            phone=phone,
        )
        return self._id

    def update_full_name(self, user_id: int, full_name: str) -> bool:
        p = self._by_id.get(int(user_id))
        if not p:
            return False
        self.writes += 1
        self._by_id[p.id] = replace(p, full_name=full_name)
        return True

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        p = self._by_id.get(int(user_id))
        if not p:
            return False
        self.writes += 1
        self._by_id[p.id] = replace(p, password_hash=password_hash)
        return True

    def list_by_role(self, role: Role):
        return [EmployeeOption(id=p.id, full_name=p.full_name) for p in self._by_id.values() if p.role == role]


class InMemoryAttendance:
    def __init__(self):
        self._by_id: dict[int, AttendanceRecord] = {}
        self._id = 0
        self.writes = 0

    def list_for_user(self, user_id: int):
        items = [r for r in self._by_id.values() if r.user_id == int(user_id)]
        items.sort(key=lambda r: r.check_in, reverse=True)
        return items

    def _open_for(self, user_id: int) -> Optional[AttendanceRecord]:
        return next((r for r in self._by_id.values() if r.user_id == int(user_id) and r.is_open), None)

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        return self._open_for(user_id)

    def create_checkin(self, *, user_id: int, check_in: datetime, status: AttendanceStatus) -> int:
        # Mirrors the unique (user_id, open_marker) key.
        if self._open_for(user_id):
            raise ValidationError("You are already checked in")
        self.writes += 1
        self._id += 1
        self._by_id[self._id] = AttendanceRecord(
            id=self._id,
            user_id=int(user_id),
            check_in=check_in,
            check_out=None,
            total_hours=None,
            status=status,
        )
        return self._id

    def close_record(self, *, attendance_id: int, check_out: datetime, total_hours: float) -> bool:
        rec = self._by_id.get(int(attendance_id))
        if not rec or not rec.is_open:
            return False
        self.writes += 1
        self._by_id[rec.id] = replace(rec, check_out=check_out, total_hours=total_hours)
        return True


class InMemoryLeaves:
    def __init__(self, profiles: InMemoryProfiles):
        self._profiles = profiles
        self._by_id: dict[int, LeaveRequest] = {}
        self._id = 0
        self.writes = 0

    def create(self, *, user_id, type, start_date, end_date, hours, reason) -> int:
        self.writes += 1
        self._id += 1
        self._by_id[self._id] = LeaveRequest(
            id=self._id,
            user_id=int(user_id),
            type=type,
            start_date=start_date,
            end_date=end_date,
            hours=hours,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=datetime(2024, 6, 1, 9, 0),
        )
        return self._id

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        return self._by_id.get(int(request_id))

    def list_for_user(self, user_id: int):
        items = [r for r in self._by_id.values() if r.user_id == int(user_id)]
        items.sort(key=lambda r: r.id, reverse=True)
        return items

    def list_all_with_profiles(self):
        rows = []
        for r in sorted(self._by_id.values(), key=lambda r: r.id, reverse=True):
            p = self._profiles.get_by_id(r.user_id)
            rows.append(LeaveRequestRow(request=r, full_name=p.full_name, email=p.email))
        return rows

    def decide(self, *, request_id, status, rejection_reason=None) -> bool:
        r = self._by_id.get(int(request_id))
        if not r or r.status != RequestStatus.PENDING:
            return False
        self.writes += 1
        self._by_id[r.id] = replace(r, status=status, rejection_reason=rejection_reason)
        return True


class InMemoryTasks:
    def __init__(self, profiles: InMemoryProfiles):
        self._profiles = profiles
        self._by_id: dict[int, Task] = {}
        self._id = 0
        self.calls: list[str] = []

    def _row(self, t: Task) -> TaskRow:
        p = self._profiles.get_by_id(t.user_id)
        return TaskRow(task=t, assignee_name=p.full_name if p else "?", assignee_email=p.email if p else "")

    def list_all_with_profiles(self):
        return [self._row(t) for t in sorted(self._by_id.values(), key=lambda t: t.id, reverse=True)]

    def list_for_assignee(self, user_id: int):
        return [row for row in self.list_all_with_profiles() if row.task.user_id == int(user_id)]

    def get_by_id(self, task_id: int) -> Optional[Task]:
        return self._by_id.get(int(task_id))

    def create(self, *, title, description, due_date, priority, user_id, created_by, expected_hours) -> int:
        self.calls.append("create")
        self._id += 1
        self._by_id[self._id] = Task(
            id=self._id,
            title=title,
            description=description,
            due_date=due_date,
            priority=priority,
            status=TaskStatus.PENDING,
            user_id=int(user_id),
            created_by=created_by,
            expected_hours=expected_hours,
        )
        return self._id

    def update(self, *, task_id, title, description, due_date, priority, user_id, expected_hours) -> bool:
        self.calls.append("update")
        t = self._by_id.get(int(task_id))
        if not t:
            return False
        self._by_id[t.id] = replace(
            t,
            title=title,
            description=description,
            due_date=due_date,
            priority=priority,
            user_id=int(user_id),
            expected_hours=expected_hours,
        )
        return True

    def update_status(self, *, task_id, status) -> bool:
        self.calls.append("update_status")
        t = self._by_id.get(int(task_id))
        if not t:
            return False
        self._by_id[t.id] = replace(t, status=status)
        return True

    def delete(self, task_id: int) -> bool:
        self.calls.append("delete")
        return self._by_id.pop(int(task_id), None) is not None

    def count_completed_for_user(self, user_id: int) -> int:
        return sum(1 for t in self._by_id.values() if t.user_id == int(user_id) and t.status == TaskStatus.COMPLETED)


class RecordingMailer:
    def __init__(self):
        self.sent: list[dict] = []

    def send(self, *, to: str, subject: str, body: str) -> None:
        self.sent.append({"to": to, "subject": subject, "body": body})


@pytest.fixture
def profiles():
    return InMemoryProfiles()


@pytest.fixture
def manager(profiles):
    return profiles.add(email="manager@example.com", password="manager123", full_name="Mona Manager", role=Role.MANAGER)


@pytest.fixture
def employee(profiles):
    return profiles.add(email="emp@example.com", password="employee123", full_name="Omar Employee")


@pytest.fixture
def other_employee(profiles):
    return profiles.add(email="other@example.com", password="other123", full_name="Sara Other")


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def leave_repo(profiles):
    return InMemoryLeaves(profiles)


@pytest.fixture
def tasks_repo(profiles):
    return InMemoryTasks(profiles)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def container(profiles, attendance_repo, leave_repo, tasks_repo, mailer):
    return assemble_container(
        profiles_repo=profiles,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        tasks_repo=tasks_repo,
        mailer=mailer,
        secret_key="test-secret",
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.worktrack.worktrack.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(profile: Profile):
        with client.session_transaction() as sess:
            sess["user_id"] = profile.id
        return client

    return _login


@pytest.fixture
def make_task(tasks_repo, manager):
    def _make(assignee: Profile, title: str = "Write report", status: TaskStatus = TaskStatus.PENDING) -> int:
        task_id = tasks_repo.create(
            title=title,
            description="",
            due_date=datetime(2024, 6, 30, 23, 59, 59, 999000),
            priority=TaskPriority.MEDIUM,
            user_id=assignee.id,
            created_by=manager.id,
            expected_hours=None,
        )
        if status != TaskStatus.PENDING:
            tasks_repo.update_status(task_id=task_id, status=status)
        tasks_repo.calls.clear()
        return task_id

    return _make

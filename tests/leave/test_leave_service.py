from datetime import datetime

import pytest

from src.worktrack.worktrack.core.enums import LeaveType, RequestStatus, Role
from src.worktrack.worktrack.core.exceptions import AuthorizationError, ValidationError
from src.worktrack.worktrack.leave.model import LeaveForm
from src.worktrack.worktrack.leave.service import STATUS_CSS, TYPE_LABELS, LeaveService, day_span

TODAY = datetime(2024, 6, 3, 8, 0)


def _form(**overrides) -> LeaveForm:
    values = dict(
        type="FULL_DAY",
        start_date="2024-06-10T09:00",
        end_date="2024-06-12T09:00",
        hours="",
        reason="Family trip",
    )
    values.update(overrides)
    return LeaveForm(**values)


def test_one_day_leave_drops_end_date_and_spans_one_day(leave_repo, employee):
    service = LeaveService(leave_repo)

    rid = service.submit(
        user_id=employee.id,
        form=_form(type="ONE_DAY", start_date="2024-06-10", end_date="2024-06-15", hours="4"),
        now=TODAY,
    )

    saved = leave_repo.get(rid)
    assert saved.end_date is None
    assert saved.hours == 4.0
    assert saved.status == RequestStatus.PENDING
    assert day_span(saved.type, saved.start_date, saved.end_date) == 1


def test_full_day_forces_eight_hours(leave_repo, employee):
    rid = LeaveService(leave_repo).submit(now=TODAY, user_id=employee.id, form=_form(hours="3"))

    assert leave_repo.get(rid).hours == 8.0


def test_submission_is_pending_even_for_manager(leave_repo, manager):
    rid = LeaveService(leave_repo).submit(now=TODAY, user_id=manager.id, form=_form())

    assert leave_repo.get(rid).status == RequestStatus.PENDING


@pytest.mark.parametrize("hours", ["0", "-1", "24.5", "abc", "nan", "inf"])
def test_hourly_leave_rejects_hours_out_of_range(leave_repo, employee, hours):
    with pytest.raises(ValidationError):
        LeaveService(leave_repo).submit(now=TODAY, user_id=employee.id, form=_form(type="HOURLY", hours=hours))

    assert leave_repo.writes == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"type": "HOURLY", "end_date": "", "hours": "2"},
        {"start_date": ""},
        {"reason": "   "},
        {"type": "SABBATICAL"},
        {"end_date": "2024-06-09T09:00"},
        {"start_date": "2024-06-02T23:00"},
    ],
)
def test_invalid_submission_is_not_stored(leave_repo, employee, overrides):
    with pytest.raises(ValidationError):
        LeaveService(leave_repo).submit(now=TODAY, user_id=employee.id, form=_form(**overrides))

    assert leave_repo.writes == 0


def test_start_earlier_today_is_accepted(leave_repo, employee):
    rid = LeaveService(leave_repo).submit(
        now=TODAY,
        user_id=employee.id,
        form=_form(type="ONE_DAY", start_date="2024-06-03T07:00", end_date=""),
    )

    assert leave_repo.get(rid).start_date == datetime(2024, 6, 3, 7, 0)


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (datetime(2024, 6, 10, 9, 0), datetime(2024, 6, 10, 9, 0), 1),
        (datetime(2024, 6, 10, 9, 0), datetime(2024, 6, 12, 9, 0), 3),
        (datetime(2024, 6, 10, 0, 0), datetime(2024, 6, 12, 17, 0), 4),
        (datetime(2024, 6, 12, 9, 0), datetime(2024, 6, 10, 9, 0), 3),
    ],
)
def test_day_span_counts_both_endpoints(start, end, expected):
    assert day_span(LeaveType.FULL_DAY, start, end) == expected


def test_day_span_without_end_is_unknown_except_for_one_day():
    start = datetime(2024, 6, 10, 9, 0)

    assert day_span(LeaveType.HOURLY, start, None) is None
    assert day_span(LeaveType.ONE_DAY, start, None) == 1


def test_manager_rejection_reason_is_visible_to_employee(leave_repo, employee):
    service = LeaveService(leave_repo)
    rid = service.submit(now=TODAY, user_id=employee.id, form=_form())

    service.set_status(
        current_role=Role.MANAGER,
        request_id=rid,
        new_status=RequestStatus.REJECTED,
        rejection_reason="insufficient notice",
    )

    mine = service.list_mine(employee.id)
    assert mine[0].status == RequestStatus.REJECTED
    assert mine[0].rejection_reason == "insufficient notice"
    assert service.to_ui(mine[0])["rejection_reason"] == "insufficient notice"


@pytest.mark.parametrize("reason", [None, "", "   "])
def test_reject_without_reason_issues_no_write(leave_repo, employee, reason):
    service = LeaveService(leave_repo)
    rid = service.submit(now=TODAY, user_id=employee.id, form=_form())
    writes_before = leave_repo.writes

    with pytest.raises(ValidationError):
        service.reject(current_role=Role.MANAGER, request_id=rid, rejection_reason=reason)

    assert leave_repo.writes == writes_before
    assert leave_repo.get(rid).status == RequestStatus.PENDING


def test_terminal_requests_are_not_changed(leave_repo, employee):
    service = LeaveService(leave_repo)
    rid = service.submit(now=TODAY, user_id=employee.id, form=_form())
    service.approve(current_role=Role.MANAGER, request_id=rid)

    with pytest.raises(ValidationError, match="already processed"):
        service.reject(current_role=Role.MANAGER, request_id=rid, rejection_reason="changed my mind")

    saved = leave_repo.get(rid)
    assert saved.status == RequestStatus.APPROVED
    assert saved.rejection_reason is None


def test_pending_is_not_a_decision(leave_repo, employee):
    service = LeaveService(leave_repo)
    rid = service.submit(now=TODAY, user_id=employee.id, form=_form())

    with pytest.raises(ValidationError):
        service.set_status(current_role=Role.MANAGER, request_id=rid, new_status=RequestStatus.PENDING)


def test_employees_cannot_review_or_list_all(leave_repo, employee):
    service = LeaveService(leave_repo)
    rid = service.submit(now=TODAY, user_id=employee.id, form=_form())

    with pytest.raises(AuthorizationError):
        service.approve(current_role=Role.EMPLOYEE, request_id=rid)
    with pytest.raises(AuthorizationError):
        service.list_all(current_role=Role.EMPLOYEE)


def test_manager_list_joins_owner_profile(leave_repo, employee, other_employee):
    service = LeaveService(leave_repo)
    service.submit(now=TODAY, user_id=employee.id, form=_form())
    service.submit(now=TODAY, user_id=other_employee.id, form=_form(type="ONE_DAY", end_date=""))

    rows = service.list_all(current_role=Role.MANAGER)

    assert {r.email for r in rows} == {employee.email, other_employee.email}
    one_day = next(r for r in rows if r.email == other_employee.email)
    assert service.to_ui(one_day.request)["total_days"] == 1
    assert service.to_ui(one_day.request)["end_date"] == "-"


def test_label_tables_cover_every_member():
    for t in LeaveType:
        assert TYPE_LABELS[t]
    for s in RequestStatus:
        assert STATUS_CSS[s]

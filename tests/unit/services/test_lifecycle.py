"""
Tests for the TicketLifecycleService implementation.

This module walks tickets through every transition of the workflow and
checks the ticket fields and the notifications each one emits.
"""
import re

import pytest

from iot_ticketing.domains import (
    AuthorizationError,
    CollaboratorError,
    NotFoundError,
    NotificationKind,
    Priority,
    Role,
    TicketAction,
    TicketStatus,
    ValidationError,
)


def snapshot(ticket_repository, notification_repository):
    return (
        [t.model_dump() for t in ticket_repository.list_all()],
        [n.model_dump() for n in notification_repository.store.list()],
    )


def all_notifications(notification_repository):
    return notification_repository.store.list()


# ---------------------
# Creation
# ---------------------

def test_create_ticket(lifecycle, ticket_repository):
    ticket = lifecycle.create_ticket(Role.FRONT_SUPPORT, "专线延迟高", "视频卡顿", Priority.LOW)

    assert re.fullmatch(r"TKT-\d{8}-\d{3}", ticket.id)
    assert ticket.status == TicketStatus.PENDING
    assert ticket.creator == Role.FRONT_SUPPORT
    assert ticket_repository.list_all()[0].id == ticket.id


def test_create_ticket_requires_intake_role(lifecycle):
    with pytest.raises(AuthorizationError):
        lifecycle.create_ticket(Role.CRT, "title", "content")


def test_create_ticket_requires_text(lifecycle):
    with pytest.raises(ValidationError):
        lifecycle.create_ticket(Role.FRONT_SUPPORT, "  ", "content")


def test_unknown_ticket_raises(lifecycle):
    with pytest.raises(NotFoundError):
        lifecycle.dispatch("TKT-404", Role.CRT, "J", [Role.CORE_NET])


# ---------------------
# Dispatch and reassignment
# ---------------------

def test_dispatch(lifecycle, pending_ticket, notification_repository):
    ticket = lifecycle.dispatch(pending_ticket.id, Role.CRT, "J", [Role.CORE_NET, Role.TRANS])

    assert ticket.status == TicketStatus.PROCESSING
    assert set(ticket.assigned_teams) == {Role.CORE_NET, Role.TRANS}
    assert ticket.preliminary_judgment == "J"
    assert lifecycle.get_ticket(pending_ticket.id) == ticket

    notifications = all_notifications(notification_repository)
    assert sorted(n.receiver_role.value for n in notifications) == ["core_network", "transport"]
    for n in notifications:
        assert "J" in n.message
        assert n.kind == NotificationKind.INFO
        assert n.ticket_title == pending_ticket.title


@pytest.mark.parametrize(
    "judgment, teams",
    [("", [Role.CORE_NET]), ("J", []), ("J", [Role.CRT]), ("J", ["not_a_team"])],
)
def test_dispatch_validation(
    lifecycle, pending_ticket, ticket_repository, notification_repository, judgment, teams
):
    before = snapshot(ticket_repository, notification_repository)
    with pytest.raises(ValidationError):
        lifecycle.dispatch(pending_ticket.id, Role.CRT, judgment, teams)
    assert snapshot(ticket_repository, notification_repository) == before


def test_reassign_notifies_only_new_teams(lifecycle, pending_ticket, notification_repository):
    lifecycle.dispatch(pending_ticket.id, Role.CRT, "J", [Role.CORE_NET, Role.NET_OPT])
    ticket = lifecycle.reassign_teams(pending_ticket.id, Role.CRT, [Role.NET_OPT, Role.TRANS])

    assert set(ticket.assigned_teams) == {Role.NET_OPT, Role.TRANS}
    assert len(notification_repository.get_for_receiver(Role.TRANS)) == 1
    assert len(notification_repository.get_for_receiver(Role.NET_OPT)) == 1
    assert len(notification_repository.get_for_receiver(Role.CORE_NET)) == 1


def test_reassign_keeps_diagnoses_of_removed_teams(lifecycle, processing_ticket):
    lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "HSS正常")
    ticket = lifecycle.reassign_teams(processing_ticket.id, Role.CRT, [Role.TRANS])

    assert [d.role for d in ticket.diagnoses] == [Role.CORE_NET]


def test_reassign_requires_processing(lifecycle, pending_ticket):
    with pytest.raises(AuthorizationError):
        lifecycle.reassign_teams(pending_ticket.id, Role.CRT, [Role.TRANS])


# ---------------------
# Diagnosis
# ---------------------

def test_submit_diagnosis(lifecycle, processing_ticket, notification_repository):
    before = len(all_notifications(notification_repository))
    ticket = lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "HSS正常")

    assert len(ticket.diagnoses) == 1
    assert ticket.diagnoses[0].role == Role.CORE_NET
    assert ticket.diagnoses[0].content == "HSS正常"

    notifications = all_notifications(notification_repository)
    assert len(notifications) == before + 1
    assert notifications[0].receiver_role == Role.CRT
    assert notifications[0].kind == NotificationKind.SUCCESS
    assert Role.CORE_NET.label in notifications[0].message


def test_supplementary_diagnosis_appends(lifecycle, processing_ticket):
    lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "first")
    ticket = lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "second")
    assert [d.content for d in ticket.diagnoses] == ["first", "second"]


@pytest.mark.parametrize("role", [Role.TRANS, Role.CRT, Role.FRONT_SUPPORT])
def test_diagnosis_from_unassigned_role_rejected(
    lifecycle, processing_ticket, ticket_repository, notification_repository, role
):
    before = snapshot(ticket_repository, notification_repository)
    with pytest.raises(AuthorizationError):
        lifecycle.submit_diagnosis(processing_ticket.id, role, "text")
    assert snapshot(ticket_repository, notification_repository) == before


def test_diagnosis_from_team_reassigned_away_rejected(lifecycle, processing_ticket):
    lifecycle.reassign_teams(processing_ticket.id, Role.CRT, [Role.TRANS])
    with pytest.raises(AuthorizationError):
        lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "late")


def test_empty_diagnosis_rejected(lifecycle, processing_ticket):
    with pytest.raises(ValidationError):
        lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "   ")


# ---------------------
# Analysis draft
# ---------------------

@pytest.mark.asyncio
async def test_generate_analysis(lifecycle, processing_ticket, mock_analysis_service, notification_repository):
    lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "HSS正常")
    before = len(all_notifications(notification_repository))

    ticket = await lifecycle.generate_analysis(processing_ticket.id, Role.CRT)

    assert ticket.ai_analysis == "综合分析报告：DNN参数配置错误。"
    assert ticket.status == TicketStatus.PROCESSING
    analyzed = mock_analysis_service.analyze.call_args[0][0]
    assert analyzed.diagnoses[0].content == "HSS正常"
    assert len(all_notifications(notification_repository)) == before


@pytest.mark.asyncio
async def test_generate_analysis_requires_diagnosis(lifecycle, processing_ticket, mock_analysis_service):
    with pytest.raises(ValidationError):
        await lifecycle.generate_analysis(processing_ticket.id, Role.CRT)
    mock_analysis_service.analyze.assert_not_called()


@pytest.mark.asyncio
async def test_generate_analysis_not_repeated_silently(lifecycle, processing_ticket, mock_analysis_service):
    lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "HSS正常")
    lifecycle.save_analysis_draft(processing_ticket.id, Role.CRT, "hand written")

    with pytest.raises(AuthorizationError):
        await lifecycle.generate_analysis(processing_ticket.id, Role.CRT)
    assert lifecycle.get_ticket(processing_ticket.id).ai_analysis == "hand written"

    ticket = await lifecycle.generate_analysis(processing_ticket.id, Role.CRT, regenerate=True)
    assert ticket.ai_analysis == "综合分析报告：DNN参数配置错误。"


@pytest.mark.asyncio
async def test_generate_analysis_failure_leaves_ticket_unchanged(
    lifecycle, processing_ticket, mock_analysis_service, ticket_repository, notification_repository
):
    lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "HSS正常")
    mock_analysis_service.analyze.side_effect = CollaboratorError("service down")
    before = snapshot(ticket_repository, notification_repository)

    with pytest.raises(CollaboratorError):
        await lifecycle.generate_analysis(processing_ticket.id, Role.CRT)

    assert snapshot(ticket_repository, notification_repository) == before
    assert lifecycle.get_ticket(processing_ticket.id).ai_analysis is None


@pytest.mark.asyncio
async def test_generate_analysis_wrong_role(lifecycle, processing_ticket):
    lifecycle.submit_diagnosis(processing_ticket.id, Role.CORE_NET, "HSS正常")
    with pytest.raises(AuthorizationError):
        await lifecycle.generate_analysis(processing_ticket.id, Role.CORE_NET)


def test_save_analysis_draft_overwrites(lifecycle, processing_ticket):
    lifecycle.save_analysis_draft(processing_ticket.id, Role.CRT, "v1")
    ticket = lifecycle.save_analysis_draft(processing_ticket.id, Role.CRT, "v2")
    assert ticket.ai_analysis == "v2"


# ---------------------
# Closure, archive and return
# ---------------------

def test_submit_for_closure(lifecycle, processing_ticket, notification_repository):
    lifecycle.save_analysis_draft(processing_ticket.id, Role.CRT, "draft")
    ticket = lifecycle.submit_for_closure(processing_ticket.id, Role.CRT)

    assert ticket.status == TicketStatus.PENDING_CLOSURE
    assert ticket.ai_analysis == "draft"
    assert set(ticket.assigned_teams) == {Role.CORE_NET, Role.NET_OPT}

    intake = notification_repository.get_for_receiver(Role.FRONT_SUPPORT)
    assert len(intake) == 1
    assert intake[0].kind == NotificationKind.INFO


def test_submit_for_closure_saves_final_text(lifecycle, processing_ticket):
    ticket = lifecycle.submit_for_closure(processing_ticket.id, Role.CRT, "final")
    assert ticket.ai_analysis == "final"


def test_submit_for_closure_requires_analysis(
    lifecycle, processing_ticket, ticket_repository, notification_repository
):
    before = snapshot(ticket_repository, notification_repository)
    with pytest.raises(ValidationError):
        lifecycle.submit_for_closure(processing_ticket.id, Role.CRT)
    with pytest.raises(ValidationError):
        lifecycle.submit_for_closure(processing_ticket.id, Role.CRT, "  ")
    assert snapshot(ticket_repository, notification_repository) == before


def test_archive(lifecycle, closure_ticket, notification_repository):
    before = len(notification_repository.get_for_receiver(Role.CRT))
    ticket = lifecycle.archive(closure_ticket.id, Role.FRONT_SUPPORT, "N")

    assert ticket.status == TicketStatus.RESOLVED
    assert ticket.resolution == "N"
    assert ticket.resolved_at is not None
    assert ticket.assigned_teams == []

    crt = notification_repository.get_for_receiver(Role.CRT)
    assert len(crt) == before + 1
    assert crt[0].kind == NotificationKind.SUCCESS


def test_return_for_rework(lifecycle, closure_ticket, notification_repository):
    diagnoses_before = len(closure_ticket.diagnoses)
    ticket = lifecycle.return_for_rework(closure_ticket.id, Role.FRONT_SUPPORT, "R")

    assert ticket.status == TicketStatus.PROCESSING
    assert ticket.assigned_teams == []
    assert len(ticket.diagnoses) == diagnoses_before + 1
    assert ticket.diagnoses[-1].role == Role.FRONT_SUPPORT
    assert ticket.diagnoses[-1].content == "【退回排查】 R"

    alert = notification_repository.get_for_receiver(Role.CRT)[0]
    assert alert.kind == NotificationKind.ALERT
    assert "R" in alert.message


def test_returned_ticket_can_be_reworked(lifecycle, closure_ticket):
    lifecycle.return_for_rework(closure_ticket.id, Role.FRONT_SUPPORT, "未恢复")
    lifecycle.reassign_teams(closure_ticket.id, Role.CRT, [Role.TRANS])
    lifecycle.submit_diagnosis(closure_ticket.id, Role.TRANS, "传输链路误码")
    ticket = lifecycle.submit_for_closure(closure_ticket.id, Role.CRT, "更换光模块")

    assert ticket.status == TicketStatus.PENDING_CLOSURE
    assert ticket.preliminary_judgment == "怀疑核心网链路问题"


@pytest.mark.parametrize("note", ["", "   "])
def test_archive_and_return_require_note(lifecycle, closure_ticket, note):
    with pytest.raises(ValidationError):
        lifecycle.archive(closure_ticket.id, Role.FRONT_SUPPORT, note)
    with pytest.raises(ValidationError):
        lifecycle.return_for_rework(closure_ticket.id, Role.FRONT_SUPPORT, note)


@pytest.mark.parametrize("role", [Role.CRT, Role.CORE_NET])
def test_archive_wrong_role(lifecycle, closure_ticket, ticket_repository, notification_repository, role):
    before = snapshot(ticket_repository, notification_repository)
    with pytest.raises(AuthorizationError):
        lifecycle.archive(closure_ticket.id, role, "N")
    with pytest.raises(AuthorizationError):
        lifecycle.return_for_rework(closure_ticket.id, role, "R")
    assert snapshot(ticket_repository, notification_repository) == before


def test_resolved_is_terminal(lifecycle, closure_ticket, ticket_repository, notification_repository):
    lifecycle.archive(closure_ticket.id, Role.FRONT_SUPPORT, "N")
    before = snapshot(ticket_repository, notification_repository)

    with pytest.raises(AuthorizationError):
        lifecycle.return_for_rework(closure_ticket.id, Role.FRONT_SUPPORT, "R")
    with pytest.raises(AuthorizationError):
        lifecycle.dispatch(closure_ticket.id, Role.CRT, "J", [Role.CORE_NET])
    with pytest.raises(AuthorizationError):
        lifecycle.save_analysis_draft(closure_ticket.id, Role.CRT, "x")

    assert snapshot(ticket_repository, notification_repository) == before
    assert lifecycle.available_actions(closure_ticket.id, Role.FRONT_SUPPORT) == []


def test_available_actions(lifecycle, pending_ticket):
    assert lifecycle.available_actions(pending_ticket.id, Role.CRT) == [TicketAction.DISPATCH]
    assert lifecycle.available_actions(pending_ticket.id, Role.FRONT_SUPPORT) == []

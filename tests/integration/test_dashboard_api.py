"""Integration tests for dashboards and the monthly report."""

from datetime import timedelta
from decimal import Decimal

import pytest
from libs.common.datetime_utils import local_today, utc_now
from services.gateway_service.app.main import app
from services.plans_service.models import StudentPlanStatus
from tests.factories import (
    CheckInFactory,
    PlanFactory,
    StudentPlanFactory,
    WorkoutSheetFactory,
)
from tests.helpers import create_admin, create_student, override_auth


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_dashboard_stats(client, db_session):
    admin, _ = await create_admin(db_session)
    _, ana = await create_student(db_session, full_name="Ana Souza")
    _, bruno = await create_student(db_session, full_name="Bruno Alves")
    await create_student(db_session, full_name="Carla Dias")
    plan = PlanFactory.create(name="Mensal")
    retired = PlanFactory.create(name="Antigo", is_active=False)
    db_session.add_all([plan, retired])
    await db_session.flush()

    today = local_today()
    db_session.add_all(
        [
            StudentPlanFactory.create(
                student_id=ana.id,
                plan_id=plan.id,
                start_date=today - timedelta(days=27),
                end_date=today + timedelta(days=3),
            ),
            StudentPlanFactory.create(
                student_id=bruno.id,
                plan_id=plan.id,
                start_date=today - timedelta(days=10),
                end_date=today + timedelta(days=20),
            ),
            CheckInFactory.create(student_id=ana.id, check_in_time=utc_now()),
            CheckInFactory.create(
                student_id=bruno.id, check_in_time=utc_now() - timedelta(days=2)
            ),
        ]
    )
    await db_session.commit()

    with override_auth(app, admin):
        response = await client.get("/api/v1/admin/dashboard-stats")

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["total_students"] == 3
    assert data["students_with_active_plan"] == 2
    assert data["active_plans"] == 1
    assert data["checkins_today"] == 1
    assert [row["full_name"] for row in data["expiring_students"]] == ["Ana Souza"]
    assert data["expiring_students"][0]["days_remaining"] == 3
    assert data["expiring_students"][0]["plan_name"] == "Mensal"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_dashboard_requires_admin(client, db_session):
    user, _ = await create_student(db_session)

    with override_auth(app, user):
        response = await client.get("/api/v1/admin/dashboard-stats")

    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.integration
async def test_student_dashboard(client, db_session):
    _, admin_profile = await create_admin(db_session)
    user, student = await create_student(db_session, full_name="Ana Souza")
    plan = PlanFactory.create()
    db_session.add(plan)
    await db_session.flush()
    today = local_today()
    db_session.add_all(
        [
            StudentPlanFactory.create(
                student_id=student.id,
                plan_id=plan.id,
                start_date=today - timedelta(days=5),
                end_date=today + timedelta(days=25),
            ),
            CheckInFactory.create(student_id=student.id, check_in_time=utc_now()),
            WorkoutSheetFactory.create(
                student_id=student.id, created_by=admin_profile.id
            ),
            WorkoutSheetFactory.create(
                student_id=student.id, created_by=admin_profile.id, is_active=False
            ),
        ]
    )
    await db_session.commit()

    with override_auth(app, user):
        response = await client.get("/api/v1/me/dashboard")

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["profile"]["full_name"] == "Ana Souza"
    assert data["profile"]["email"] == user.email
    assert data["membership"]["status"] == "active"
    assert data["membership"]["days_remaining"] == 25
    assert data["checkins_this_month"] == 1
    assert len(data["recent_checkins"]) == 1
    assert data["active_workout_sheets"] == 1


@pytest.mark.asyncio
@pytest.mark.integration
async def test_monthly_report(client, db_session):
    admin, _ = await create_admin(db_session)
    _, ana = await create_student(db_session)
    _, bruno = await create_student(db_session)
    monthly = PlanFactory.create(name="Mensal", price=Decimal("100.00"))
    yearly = PlanFactory.create(
        name="Anual", price=Decimal("900.00"), duration_months=12
    )
    db_session.add_all([monthly, yearly])
    await db_session.flush()

    month_start = local_today().replace(day=1)
    db_session.add_all(
        [
            StudentPlanFactory.create(
                student_id=ana.id, plan_id=monthly.id, start_date=month_start
            ),
            StudentPlanFactory.create(
                student_id=bruno.id, plan_id=yearly.id, start_date=month_start
            ),
            # Cancelled terms do not count as revenue
            StudentPlanFactory.create(
                student_id=bruno.id,
                plan_id=monthly.id,
                start_date=month_start,
                status=StudentPlanStatus.INACTIVE,
            ),
            CheckInFactory.create(student_id=ana.id, check_in_time=utc_now()),
        ]
    )
    await db_session.commit()

    with override_auth(app, admin):
        response = await client.get(
            "/api/v1/reports/monthly", params={"month": month_start.strftime("%Y-%m")}
        )

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["month"] == month_start.isoformat()
    assert data["revenue"] == 1000.0
    assert data["average_revenue"] == 500.0
    assert data["checkins"] == 1
    assert data["new_students"] == 2
    assert [(s["plan_name"], s["count"]) for s in data["plan_distribution"]] == [
        ("Anual", 1),
        ("Mensal", 1),
    ]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_monthly_report_empty_month(client, db_session):
    admin, _ = await create_admin(db_session)

    with override_auth(app, admin):
        response = await client.get(
            "/api/v1/reports/monthly", params={"month": "2020-02"}
        )

    data = response.json()
    assert data["revenue"] == 0.0
    assert data["average_checkins"] == 0
    assert data["plan_distribution"] == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_monthly_report_rejects_bad_month(client, db_session):
    admin, _ = await create_admin(db_session)

    with override_auth(app, admin):
        response = await client.get(
            "/api/v1/reports/monthly", params={"month": "2024-13"}
        )

    assert response.status_code == 422

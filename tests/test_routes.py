import csv
import io

import pytest
from openpyxl import load_workbook


def test_health_without_database(client):
    res = client.get("/api/health")

    assert res.status_code == 200
    assert res.get_json()["data"] == {"status": "ok", "database": None}


def test_api_requires_login(client):
    res = client.get("/api/projects")

    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_login_and_me(client, login):
    res = login()
    assert res.get_json()["data"]["role"] == "admin"

    me = client.get("/api/auth/me").get_json()["data"]
    assert me["username"] == "admin"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_bad_password_is_401(client):
    res = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})

    assert res.status_code == 401
    assert res.get_json()["message"] == "Invalid username or password"


def test_domain_errors_map_to_status_codes(client, login, site):
    login()

    assert client.get("/api/projects/999").status_code == 404
    assert client.post("/api/projects", json={"name": ""}).status_code == 400
    assert client.post("/api/projects", json={"name": "Tower A"}).status_code == 409


def test_create_project_returns_201(client, login):
    login()

    res = client.post("/api/projects", json={"name": "School C"})

    assert res.status_code == 201
    assert res.get_json()["data"]["name"] == "School C"


def test_staff_cannot_delete(client, login, site):
    login("clerk", "clerk123")

    res = client.delete(f"/api/projects/{site['tower'].project_id}")

    assert res.status_code == 403


def test_admin_deletes_project(client, login, repos, site):
    login()

    res = client.delete(f"/api/projects/{site['villa'].project_id}")

    assert res.status_code == 200
    assert repos.projects.get_by_id(site["villa"].project_id) is None


def test_attendance_post_and_filter(client, login, site):
    login("clerk", "clerk123")
    payload = {
        "project_id": site["tower"].project_id,
        "worker_id": site["ahmad"].worker_id,
        "date": "2025-03-03",
        "paid_amount": "40",
    }

    created = client.post("/api/worker-attendance", json=payload)
    duplicate = client.post("/api/worker-attendance", json=payload)
    listed = client.get(
        "/api/worker-attendance",
        query_string={"worker_id": site["ahmad"].worker_id, "date_from": "2025-03-01", "date_to": "2025-03-31"},
    )

    assert created.status_code == 201
    assert created.get_json()["data"]["remaining_amount"] == "110.00"
    assert duplicate.status_code == 409
    assert listed.get_json()["count"] == 1


def test_unknown_route_is_json_404(client):
    res = client.get("/api/nope")

    assert res.status_code == 404
    assert res.get_json()["success"] is False


@pytest.fixture
def attended(client, login, site):
    login()
    client.post(
        "/api/worker-attendance",
        json={"project_id": site["tower"].project_id, "worker_id": site["ahmad"].worker_id, "date": "2025-03-03", "payment_type": "full"},
    )
    return site


def test_worker_statement_json(client, attended):
    res = client.get("/api/reports/worker-statement", query_string={"worker_id": attended["ahmad"].worker_id})

    body = res.get_json()
    assert res.status_code == 200
    assert body["data"]["totals"]["total_earned"] == "150.00"
    assert body["data"]["totals"]["remaining"] == "0.00"


def test_worker_statement_csv_download(client, attended):
    res = client.get(
        "/api/reports/worker-statement",
        query_string={"worker_id": attended["ahmad"].worker_id, "project_ids": "all", "format": "csv"},
    )

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "attachment; filename=worker_statement_ahmad_" in res.headers["Content-Disposition"]
    rows = list(csv.DictReader(io.StringIO(res.data.decode("utf-8-sig"))))
    assert len(rows) == 1


def test_settlement_xlsx_download(client, attended):
    res = client.get("/api/reports/workers-settlement", query_string={"format": "xlsx"})

    assert res.status_code == 200
    assert res.headers["Content-Disposition"].startswith("attachment;")
    wb = load_workbook(io.BytesIO(res.data))
    assert "Settlement" in wb.sheetnames


def test_print_format_returns_html(client, attended):
    res = client.get(
        "/api/reports/project-summary",
        query_string={"project_id": attended["tower"].project_id, "format": "print", "autoprint": "0"},
    )

    assert res.status_code == 200
    assert res.mimetype == "text/html"
    assert "window.print()" not in res.get_data(as_text=True)


def test_print_format_autoprints_only_when_asked(client, attended):
    url = "/api/reports/project-summary"
    query = {"project_id": attended["tower"].project_id, "format": "print"}

    plain = client.get(url, query_string=query)
    printing = client.get(url, query_string={**query, "autoprint": "1"})

    assert "window.print()" not in plain.get_data(as_text=True)
    assert "window.print()" in printing.get_data(as_text=True)


def test_unknown_report_format_is_400(client, attended):
    res = client.get("/api/reports/project-summary", query_string={"project_id": attended["tower"].project_id, "format": "pdf"})

    assert res.status_code == 400


def test_expense_report_needs_dates(client, attended):
    res = client.get("/api/reports/expenses", query_string={"project_id": attended["tower"].project_id})

    assert res.status_code == 400


def test_daily_expenses_report(client, attended):
    res = client.get(
        f"/api/projects/{attended['tower'].project_id}/daily-expenses",
        query_string={"date_from": "2025-03-01", "date_to": "2025-03-03"},
    )

    assert res.status_code == 200
    days = res.get_json()["data"]
    assert len(days) == 3
    assert days[2]["summary"]["total_worker_wages"] == "150.00"


def test_staff_cannot_recalculate_summaries(client, login, site):
    login("clerk", "clerk123")

    res = client.post(f"/api/projects/{site['tower'].project_id}/daily-summaries/recalculate")

    assert res.status_code == 403


def test_worker_balance_route(client, attended):
    res = client.get(f"/api/workers/{attended['ahmad'].worker_id}/balance/{attended['tower'].project_id}")

    data = res.get_json()["data"]
    assert res.status_code == 200
    assert (data["total_earned"], data["total_paid"], data["current_balance"]) == ("150.00", "150.00", "0.00")


def test_worker_types_list_and_create(client, login):
    login("clerk", "clerk123")

    created = client.post("/api/worker-types", json={"name": "plumber"})
    duplicate = client.post("/api/worker-types", json={"name": "plumber"})
    listed = client.get("/api/worker-types")

    assert created.status_code == 201
    assert duplicate.status_code == 409
    assert [t["name"] for t in listed.get_json()["data"]] == ["plumber"]


def test_projects_with_stats_and_stats_summary(client, attended):
    with_stats = client.get("/api/projects/with-stats").get_json()["data"]
    summary = client.get("/api/stats-summary").get_json()["data"]

    tower = next(item for item in with_stats if item["project"]["name"] == "Tower A")
    assert tower["statistics"]["total_workers"] == 1
    assert tower["statistics"]["total_expenses"] == "150.00"
    assert summary["total_projects"] == 2
    assert summary["total_workers"] == 2
    assert summary["status"] == "operational"


def test_material_purchases_report_csv(client, attended):
    tower = attended["tower"].project_id
    client.post(
        "/api/material-purchases",
        json={
            "project_id": tower,
            "material_name": "Cement",
            "material_unit": "bag",
            "quantity": "10",
            "unit_price": "25",
            "purchase_date": "2025-03-03",
        },
    )

    res = client.get(
        f"/api/reports/material-purchases/{tower}",
        query_string={"date_from": "2025-03-01", "date_to": "2025-03-31", "format": "csv"},
    )

    assert res.status_code == 200
    assert "material_purchases_tower_a_" in res.headers["Content-Disposition"]
    rows = list(csv.DictReader(io.StringIO(res.data.decode("utf-8-sig"))))
    assert rows[0]["material"] == "Cement (bag)"


def test_admin_deletes_worker_and_summary_follows(client, attended, repos, day):
    tower = attended["tower"].project_id

    res = client.delete(f"/api/workers/{attended['ahmad'].worker_id}")

    assert res.status_code == 200
    summary = repos.summaries.get(project_id=tower, summary_date=day(3))
    assert summary.total_worker_wages == 0

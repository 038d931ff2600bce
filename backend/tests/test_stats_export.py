import csv
import io

from app.services import stats_service
from tests.conftest import auth_headers


def test_compute_stats_counts_each_status(db, make_profile):
    for status in ("pending", "pending", "approved", "approved", "approved", "rejected"):
        make_profile(approval_status=status)
    assert stats_service.compute_stats(db) == {"pending": 2, "approved": 3, "rejected": 1, "total": 6}


def test_compute_stats_empty(db):
    assert stats_service.compute_stats(db) == {"pending": 0, "approved": 0, "rejected": 0, "total": 0}


def test_stats_endpoint_follows_decisions(client, seed_users, rajesh_profile, make_profile):
    make_profile(approval_status="approved")
    admin = auth_headers(client, "admin@example.com")
    assert client.get("/api/admin/profiles/stats", headers=admin).json() == {
        "pending": 1,
        "approved": 1,
        "rejected": 0,
        "total": 2,
    }

    client.post(f"/api/admin/profiles/{rajesh_profile.user_id}/reject", json={"reason": "dup"}, headers=admin)
    stats = client.get("/api/admin/profiles/stats", headers=admin).json()
    assert stats["pending"] == 0
    assert stats["rejected"] == 1
    assert stats["total"] == 2


def test_export_csv_lists_approved_members(client, seed_users, rajesh_profile, make_profile):
    make_profile(first_name="Waiting", approval_status="pending")
    admin = auth_headers(client, "admin@example.com")
    client.post(f"/api/admin/profiles/{rajesh_profile.user_id}/approve", headers=admin)

    resp = client.get("/api/admin/profiles/export.csv", headers=admin)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "approved_members.csv" in resp.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0][:3] == ["Name", "Email", "Phone"]
    assert len(rows) == 2
    assert rows[1][0] == "Rajesh Kumar"
    assert rows[1][3] == "Apollo Hospitals"
    assert rows[1][16] == "Operations, Strategy"

"""Directory listing: filters, search, pagination envelope and public visibility."""

import pytest

from app.exceptions import ValidationError
from app.services import directory_query
from tests.conftest import auth_headers


@pytest.fixture
def fifteen_public(make_profile):
    return [make_profile(approval_status="approved", is_public=True) for _ in range(15)]


def test_second_page_of_fifteen(db, fifteen_public):
    items, total = directory_query.query_profiles(db, page=2, limit=10, public_only=True)
    assert total == 15
    assert len(items) == 5
    pagination = directory_query.build_pagination(2, 10, total)
    assert pagination == {
        "page": 2,
        "limit": 10,
        "total": 15,
        "totalPages": 2,
        "hasNextPage": False,
        "hasPreviousPage": True,
    }


def test_pages_do_not_overlap(db, fifteen_public):
    seen = []
    for page in (1, 2, 3):
        items, _ = directory_query.query_profiles(db, page=page, limit=6)
        seen.extend(p.id for p in items)
    assert len(seen) == 15
    assert len(set(seen)) == 15


def test_newest_first(db, make_profile):
    older = make_profile()
    newer = make_profile()
    items, _ = directory_query.query_profiles(db)
    assert [p.id for p in items] == [newer.id, older.id]


def test_search_is_case_insensitive_across_fields(db, make_profile):
    make_profile(first_name="Rajesh", organization="Apollo Hospitals")
    make_profile(first_name="Priya", city="Bengaluru")
    make_profile(first_name="Arjun", bio="Mentor at APOLLO tele-health")

    items, total = directory_query.query_profiles(db, search="apollo")
    assert total == 2
    assert {p.first_name for p in items} == {"Rajesh", "Arjun"}

    items, _ = directory_query.query_profiles(db, search="  bengaluru ")
    assert [p.first_name for p in items] == ["Priya"]


def test_search_treats_wildcards_literally(db, make_profile):
    make_profile(first_name="Percent", bio="Cut costs by 50% in a year")
    make_profile(first_name="Plain", bio="Cut costs by 500 units")
    make_profile(first_name="Under", position="ops_lead")
    make_profile(first_name="Other", position="opsXlead")

    items, _ = directory_query.query_profiles(db, search="50%")
    assert [p.first_name for p in items] == ["Percent"]

    items, _ = directory_query.query_profiles(db, search="ops_lead")
    assert [p.first_name for p in items] == ["Under"]


def test_filters_combine(db, make_profile):
    make_profile(first_name="A", approval_status="approved", experience_level="Senior", organization_type="Startup")
    make_profile(first_name="B", approval_status="approved", experience_level="Junior", organization_type="Startup")
    make_profile(first_name="C", approval_status="pending", experience_level="Senior", organization_type="Startup")

    items, total = directory_query.query_profiles(
        db, status="approved", experience_level="Senior", organization_type="Startup"
    )
    assert total == 1
    assert items[0].first_name == "A"

    _, total = directory_query.query_profiles(db, status="all", experience_level="all")
    assert total == 3


@pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, -5), (1, 101)])
def test_page_bounds_rejected(db, page, limit):
    with pytest.raises(ValidationError):
        directory_query.query_profiles(db, page=page, limit=limit)


def test_page_past_end_is_empty(db, fifteen_public):
    items, total = directory_query.query_profiles(db, page=5, limit=10)
    assert items == []
    assert total == 15


def test_public_directory_hides_private_and_unapproved(client, seed_users, make_profile):
    make_profile(first_name="Visible", approval_status="approved", is_public=True)
    make_profile(first_name="Private", approval_status="approved", is_public=False)
    make_profile(first_name="Waiting", approval_status="pending", is_public=True)

    resp = client.get("/api/directory", headers=auth_headers(client, "priya.sharma@example.com"))
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert [row["first_name"] for row in body["data"]] == ["Visible"]
    assert body["pagination"]["total"] == 1


def test_public_directory_respects_contact_flags(client, seed_users, make_profile):
    make_profile(
        first_name="Hidden",
        approval_status="approved",
        is_public=True,
        phone="+91-1",
        city="Delhi",
        show_contact_info=False,
        show_location=False,
    )
    resp = client.get("/api/directory", headers=auth_headers(client, "priya.sharma@example.com"))
    row = resp.json()["data"][0]
    assert row["email"] is None
    assert row["phone"] is None
    assert row["city"] is None


def test_admin_listing_envelope_and_bad_limit(client, seed_users, fifteen_public):
    admin = auth_headers(client, "admin@example.com")
    resp = client.get("/api/admin/profiles?page=2&limit=10&status=approved", headers=admin)
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["data"]) == 5
    assert body["pagination"]["hasNextPage"] is False
    assert body["pagination"]["hasPreviousPage"] is True

    resp = client.get("/api/admin/profiles?limit=0", headers=admin)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "limit must be greater than 0"}


def test_program_year_and_location_filters(db, make_profile):
    make_profile(first_name="A", program="MBA-PGDBM", graduation_year=2018, city="Mumbai", country="India")
    make_profile(first_name="B", program="MBA-PGDBM", graduation_year=2020, city="Pune", country="India")
    make_profile(first_name="C", program="PGDM", graduation_year=2018, city="Dubai", country="UAE")

    items, _ = directory_query.query_profiles(db, program="MBA-PGDBM")
    assert {p.first_name for p in items} == {"A", "B"}

    items, _ = directory_query.query_profiles(db, graduation_year="2018")
    assert {p.first_name for p in items} == {"A", "C"}

    items, _ = directory_query.query_profiles(db, location="Pune, India")
    assert [p.first_name for p in items] == ["B"]

    items, _ = directory_query.query_profiles(db, location="India")
    assert {p.first_name for p in items} == {"A", "B"}

    items, _ = directory_query.query_profiles(db, program="MBA-PGDBM", graduation_year=2018, location="all")
    assert [p.first_name for p in items] == ["A"]


def test_graduation_year_filter_must_be_numeric(db):
    with pytest.raises(ValidationError):
        directory_query.query_profiles(db, graduation_year="last year")


def test_search_covers_interests(db, make_profile):
    make_profile(first_name="Mentor", interests=["Digital Health", "Mentoring"])
    make_profile(first_name="Other", interests=["Cricket"])
    items, _ = directory_query.query_profiles(db, search="digital health")
    assert [p.first_name for p in items] == ["Mentor"]


def test_filter_options_come_from_listed_members(db, make_profile):
    listed = {"approval_status": "approved", "is_public": True}
    make_profile(program="PGDM", graduation_year=2021, city="Bengaluru", country="India", experience_level="Mid", **listed)
    make_profile(program="MBA-PGDBM", graduation_year=2018, city="Mumbai", country="India", organization_type="Startup", **listed)
    make_profile(program="MBA-PGDBM", graduation_year=2018, city="Pune", country="India", show_location=False, **listed)
    make_profile(program="Hidden Program", graduation_year=1999, city="Delhi", country="India", approval_status="pending")

    options = directory_query.filter_options(db)
    assert options == {
        "programs": ["MBA-PGDBM", "PGDM"],
        "organization_types": ["Startup"],
        "experience_levels": ["Mid"],
        "graduation_years": [2021, 2018],
        "locations": ["Bengaluru, India", "Mumbai, India"],
    }


def test_directory_filters_endpoint(client, seed_users, make_profile):
    make_profile(program="PGDM", graduation_year=2021, city="Bengaluru", country="India", approval_status="approved", is_public=True)
    headers = auth_headers(client, "priya.sharma@example.com")

    resp = client.get("/api/directory/filters", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["locations"] == ["Bengaluru, India"]

    resp = client.get("/api/directory?program=PGDM&graduation_year=2021&location=Bengaluru, India", headers=headers)
    assert resp.json()["pagination"]["total"] == 1
    resp = client.get("/api/directory?graduation_year=2020", headers=headers)
    assert resp.json()["pagination"]["total"] == 0

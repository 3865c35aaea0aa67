import pytest

from aspire.assignments import get_bought_tests
from aspire.errors import NotFound, Unauthenticated
from aspire.models import Test, User

from conftest import bearer


@pytest.fixture
def headers(user_session):
    return bearer(user_session["accessToken"])


@pytest.fixture
def mock_test(db):
    t = Test(test_name="JEE Mock 1", num_questions=3, duration_minutes=30, subject_topic="Physics")
    db.add(t)
    db.commit()
    return t


def _assign(client, admin_headers, user_id, test_id, paid):
    return client.post(
        "/api/user/assigntest",
        json={"userId": user_id, "testId": test_id, "isPaid": paid},
        headers=admin_headers,
    )


# === profile ================================================================
def test_profile_round_trip(client, headers):
    update = {
        "full_name": "Asha R.",
        "school_name": "Kendriya Vidyalaya",
        "dob": "2008-04-17",
        "gender": "female",
        "mobileNumber": "+91 98765 43210",
        "city": "Pune",
        "state": "Maharashtra",
        "country": "India",
    }
    r = client.post("/api/user/details", json=update, headers=headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Profile updated successfully!"

    profile = client.get("/api/user", headers=headers).json()
    assert profile["full_name"] == "Asha R."
    assert profile["school_name"] == "Kendriya Vidyalaya"
    assert profile["dob"] == "2008-04-17"
    assert profile["gender"] == "female"
    assert profile["mobile_number"] == "+91 98765 43210"
    assert (profile["city"], profile["state"], profile["country"]) == ("Pune", "Maharashtra", "India")


def test_profile_blank_dob_is_cleared(client, headers):
    r = client.post("/api/user/details", json={"full_name": "Asha", "dob": ""}, headers=headers)
    assert r.status_code == 200
    assert r.json()["user"]["dob"] is None


def test_profile_rejects_unknown_fields(client, headers):
    r = client.post("/api/user/details", json={"full_name": "Asha", "is_paid": True}, headers=headers)
    assert r.status_code == 400


# === assignment =============================================================
def test_assign_test_is_idempotent(client, admin_headers, user_session, mock_test):
    uid = user_session["user"]["id"]
    first = _assign(client, admin_headers, uid, mock_test.id, True)
    second = _assign(client, admin_headers, uid, mock_test.id, True)

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert first.json()["user"] == {
        "id": uid,
        "full_name": "Asha Rao",
        "assigned_testid": mock_test.id,
        "is_paid": True,
    }


def test_assign_requires_both_ids(client, admin_headers, mock_test):
    r = _assign(client, admin_headers, None, mock_test.id, True)
    assert r.status_code == 400
    assert r.json()["message"] == "User ID and Test ID are required"


def test_assign_unknown_user(client, admin_headers, mock_test):
    r = _assign(client, admin_headers, 999, mock_test.id, True)
    assert r.status_code == 404


def test_assign_unknown_test(client, admin_headers, user_session):
    r = _assign(client, admin_headers, user_session["user"]["id"], 999, True)
    assert r.status_code == 404


def test_assign_is_admin_only(client, headers, user_session, mock_test):
    r = _assign(client, headers, user_session["user"]["id"], mock_test.id, True)
    assert r.status_code == 403


# === bought tests ===========================================================
def test_unpaid_assignment_is_not_bought(client, headers, admin_headers, user_session, mock_test):
    _assign(client, admin_headers, user_session["user"]["id"], mock_test.id, False)
    r = client.get("/api/user/mytests", headers=headers)
    assert r.status_code == 200
    assert r.json() == []


def test_paid_assignment_is_bought(client, headers, admin_headers, user_session, mock_test):
    _assign(client, admin_headers, user_session["user"]["id"], mock_test.id, True)
    r = client.get("/api/user/mytests", headers=headers)
    assert r.json() == [
        {
            "id": mock_test.id,
            "test_name": "JEE Mock 1",
            "subject_topic": "Physics",
            "num_questions": 3,
            "duration_minutes": 30,
        }
    ]


def test_no_assignment_means_nothing_bought(client, headers):
    assert client.get("/api/user/mytests", headers=headers).json() == []


def test_deleting_test_clears_assignment(client, headers, admin_headers, user_session, mock_test, db):
    _assign(client, admin_headers, user_session["user"]["id"], mock_test.id, True)
    assert client.delete(f"/api/tests/{mock_test.id}", headers=admin_headers).status_code == 200

    db.expire_all()
    assert db.get(User, user_session["user"]["id"]).assigned_testid is None
    assert client.get("/api/user/mytests", headers=headers).json() == []


def test_bought_tests_service_edge_cases(db, mock_test):
    with pytest.raises(Unauthenticated):
        get_bought_tests(db, None)
    with pytest.raises(NotFound):
        get_bought_tests(db, 12345)

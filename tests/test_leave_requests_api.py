import pytest

TOKEN = "mock-token-leave"


def submit(client, **overrides):
    body = {
        "employeeName": "Jane Doe",
        "startDate": "2026-11-02",
        "endDate": "2026-11-06",
        "reason": "Family trip",
        "token": TOKEN,
    }
    body.update(overrides)
    return client.post("/leave-requests", json=body)


def test_leave_request_lifecycle(client):
    created = submit(client)
    assert created.status_code == 201
    request = created.json()
    assert request["status"] == "pending"
    assert request["id"] == 1
    assert request["timestamp"].endswith("Z")

    approved = client.put("/leave-requests/1", json={"status": "approved", "token": TOKEN})
    assert approved.status_code == 200
    assert approved.json() == {**request, "status": "approved"}

    back = client.put("/leave-requests/1", json={"status": "pending", "token": TOKEN})
    assert back.status_code == 400
    assert back.json() == {"error": "Invalid status"}
    assert client.get("/leave-requests", params={"token": TOKEN}).json()[0]["status"] == "approved"


def test_decided_requests_are_final(client, store):
    submit(client)
    client.put("/leave-requests/1", json={"status": "rejected", "token": TOKEN})

    response = client.put("/leave-requests/1", json={"status": "approved", "token": TOKEN})
    assert response.status_code == 400
    assert response.json() == {"error": "Leave request is already rejected"}
    assert store.leave_requests.find_one({"id": 1})["status"] == "rejected"


@pytest.mark.parametrize("status", [None, "", "APPROVED", "cancelled", "pending"])
def test_invalid_target_status_changes_nothing(client, store, status):
    submit(client)
    response = client.put("/leave-requests/1", json={"status": status, "token": TOKEN})
    assert response.status_code == 400
    assert store.leave_requests.find_one({"id": 1})["status"] == "pending"


def test_unknown_leave_request(client):
    response = client.put("/leave-requests/99", json={"status": "approved", "token": TOKEN})
    assert response.status_code == 404
    assert response.json() == {"error": "Leave request not found"}


def test_submission_validation(client, store):
    assert submit(client, reason="").json() == {"error": "Missing required fields"}
    assert submit(client, token=None).status_code == 400
    unauthorized = submit(client, token="token-123")
    assert unauthorized.status_code == 401
    assert unauthorized.json() == {"error": "Unauthorized"}
    assert submit(client, status="archived").json() == {"error": "Invalid status"}
    assert store.leave_requests.count() == 0


def test_submitter_may_set_initial_status(client):
    assert submit(client, status="approved").json()["status"] == "approved"


def test_list_and_stats(client):
    for _ in range(4):
        submit(client)
    client.put("/leave-requests/1", json={"status": "approved", "token": TOKEN})
    client.put("/leave-requests/2", json={"status": "approved", "token": TOKEN})
    client.put("/leave-requests/3", json={"status": "rejected", "token": TOKEN})

    listed = client.get("/leave-requests", params={"token": TOKEN}).json()
    assert [r["id"] for r in listed] == [1, 2, 3, 4]
    stats = client.get("/stats", params={"token": TOKEN}).json()
    assert stats == {"total": 4, "approved": 2, "pending": 1, "rejected": 1}


@pytest.mark.parametrize("path", ["/leave-requests", "/stats"])
def test_reads_require_session_token(client, path):
    assert client.get(path).status_code == 401
    assert client.get(path, params={"token": "nope"}).json() == {"error": "Unauthorized"}


def test_update_requires_session_token(client, store):
    submit(client)
    assert client.put("/leave-requests/1", json={"status": "approved", "token": "x"}).status_code == 401
    assert store.leave_requests.find_one({"id": 1})["status"] == "pending"


def test_non_numeric_id_is_not_found(client):
    submit(client)
    response = client.put("/leave-requests/abc", json={"status": "approved", "token": TOKEN})
    assert response.status_code == 404
    assert response.json() == {"error": "Leave request not found"}


def test_non_numeric_id_checks_token_first(client):
    response = client.put("/leave-requests/abc", json={"status": "approved", "token": "x"})
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}

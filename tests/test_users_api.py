import json

from money_transfer_api.app.core.security import TOKEN_PREFIX


def test_register_login_scenario(client, register):
    first = register()
    assert first.status_code == 201
    body = first.json()
    assert body["id"] == 1
    assert body["userType"] == "individual"
    assert body["role"] == "user"
    assert body["address"].startswith("0x")
    assert body["token"].startswith(TOKEN_PREFIX)
    assert "password" not in body

    again = register(name="Someone Else", password="different", country="Kenya")
    assert again.status_code == 400
    assert again.json() == {"error": "Email already registered"}

    wrong = client.post("/login", json={"email": "a@x.com", "password": "nope123"})
    assert wrong.status_code == 401
    assert wrong.json() == {"error": "Invalid credentials"}

    ok = client.post("/login", json={"email": "a@x.com", "password": "secret1"})
    assert ok.status_code == 200
    assert ok.json()["token"] == body["token"]
    assert ok.json()["token"].startswith(TOKEN_PREFIX)


def test_password_is_stored_hashed(user, tmp_path):
    stored = json.loads((tmp_path / "users.json").read_text())[0]
    assert stored["password"] != "secret1"
    assert "$" in stored["password"]


def test_ids_increase_by_one(register):
    ids = [register(email=f"u{i}@x.com").json()["id"] for i in range(3)]
    assert ids == [1, 2, 3]


def test_short_password_is_rejected_before_persisting(register, store, tmp_path):
    response = register(password="12345")
    assert response.status_code == 400
    assert response.json() == {"error": "Password must be at least 6 characters"}
    assert store.users.count() == 0
    assert not (tmp_path / "users.json").exists()


def test_missing_fields(register):
    assert register(name="").json() == {"error": "Missing required fields"}
    assert register(email=None).status_code == 400
    assert register(userType="business").json() == {"error": "Missing required fields"}


def test_unknown_user_type_is_rejected(register, store):
    assert register(userType="government").json() == {"error": "Invalid user type"}
    assert store.users.count() == 0


def test_login_requires_both_fields(client):
    response = client.post("/login", json={"email": "a@x.com"})
    assert response.status_code == 400
    assert response.json() == {"error": "Please enter both email and password"}


def test_login_unknown_email(client):
    assert client.post("/login", json={"email": "ghost@x.com", "password": "secret1"}).status_code == 401


def test_business_fields_are_dropped_for_individuals(register):
    body = register(businessName="Acme", businessDescription="Widgets").json()
    assert body["businessName"] is None
    assert body["businessDescription"] is None


def test_business_registration_notifies_partner(register, partner):
    response = register(userType="business", businessName="Acme", businessDescription="Widgets")
    assert response.status_code == 201
    assert response.json()["businessName"] == "Acme"

    assert len(partner.requests) == 1
    sent = partner.requests[0]
    assert str(sent.url) == "http://partner.test/register-business"
    payload = json.loads(sent.content)
    assert payload["email"] == "a@x.com"
    assert payload["businessName"] == "Acme"
    assert payload["password"] != "secret1"


def test_individual_registration_does_not_notify_partner(register, partner):
    register()
    assert partner.requests == []


def test_partner_failure_does_not_affect_registration(register, partner, store):
    partner.fail = "connect"
    assert register(userType="business", businessName="Acme").status_code == 201
    partner.fail = "status"
    assert register(email="b@x.com", userType="business", businessName="Beta").status_code == 201
    assert store.users.count() == 2
    assert len(partner.requests) == 2


def test_search_user(client, user):
    token = user["token"]
    by_surname = client.get("/search-user", params={"q": "velac", "token": token})
    assert by_surname.status_code == 200
    assert by_surname.json()["email"] == "a@x.com"
    assert "password" not in by_surname.json()

    assert client.get("/search-user", params={"q": "a@x.com", "token": token}).json()["id"] == 1
    assert client.get("/search-user", params={"q": "ADA", "token": token}).json()["id"] == 1
    assert client.get("/search-user", params={"q": "nobody", "token": token}).json() is None


def test_search_user_needs_query_and_token(client, user):
    assert client.get("/search-user", params={"token": user["token"]}).json() == {"error": "Invalid query or token"}
    assert client.get("/search-user", params={"q": "Ada", "token": "abc"}).status_code == 400


def test_search_treats_query_literally(client, user):
    assert client.get("/search-user", params={"q": ".*", "token": user["token"]}).json() is None


def test_update_settings_changes_only_supplied_fields(client, user, store):
    token = user["token"]
    first = client.post(
        "/update-settings",
        json={"email": "a@x.com", "token": token, "receiveMethod": "mobile_money", "receiveDetails": {"phone": "123"}},
    )
    assert first.status_code == 200
    assert first.json()["receiveMethod"] == "mobile_money"

    before = store.users.find_one({"email": "a@x.com"})
    second = client.post("/update-settings", json={"email": "a@x.com", "token": token, "sendMethod": "card"})
    after = store.users.find_one({"email": "a@x.com"})
    assert second.json()["sendMethod"] == "card"
    assert after == {**before, "sendMethod": "card"}


def test_update_settings_errors(client, user):
    token = user["token"]
    missing = client.post("/update-settings", json={"email": "ghost@x.com", "token": token, "sendMethod": "card"})
    assert missing.status_code == 404
    assert missing.json() == {"error": "User not found"}
    assert client.post("/update-settings", json={"email": "a@x.com", "token": "x"}).json() == {"error": "Invalid input"}


def test_update_profile_for_individual_ignores_business_fields(client, user, store):
    before = store.users.find_one({"email": "a@x.com"})
    response = client.post(
        "/update-profile",
        json={
            "email": "a@x.com",
            "token": user["token"],
            "surname": "Byron",
            "businessName": "Acme",
            "businessDescription": "Widgets",
            "profilePic": "data:image/png;base64,AAAA",
        },
    )
    assert response.status_code == 200
    after = store.users.find_one({"email": "a@x.com"})
    assert after == {**before, "surname": "Byron", "profilePic": "data:image/png;base64,AAAA"}


def test_update_profile_for_business_keeps_surname(client, register, store):
    owner = register(email="biz@x.com", surname="Keep", userType="business", businessName="Acme").json()
    response = client.post(
        "/update-profile",
        json={"email": "biz@x.com", "token": owner["token"], "name": "Bea", "surname": "Changed", "businessName": "Acme 2"},
    )
    body = response.json()
    assert body["surname"] == "Keep"
    assert body["name"] == "Bea"
    assert body["businessName"] == "Acme 2"
    assert store.users.find_one({"email": "biz@x.com"})["businessDescription"] is None


def test_update_profile_unknown_user(client, user):
    response = client.post("/update-profile", json={"email": "ghost@x.com", "token": user["token"], "name": "x"})
    assert response.status_code == 404

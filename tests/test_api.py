"""End-to-end checks of the HTTP surface through FastAPI's TestClient."""


def _add(client, passport="1234 567890"):
    return client.post("/users/add", json={"passport_number": passport})


def test_add_user_and_list(client, passport_calls):
    response = _add(client)

    assert response.status_code == 201
    body = response.json()
    assert body["surname"] == "Ivanov"
    assert body["passport_number"] == "1234 567890"
    assert passport_calls == [{"passportSerie": "1234", "passportNumber": "567890"}]

    listed = client.get("/users", params={"surname": "Ivanov"}).json()
    assert [u["id"] for u in listed] == [body["id"]]


def test_add_user_accepts_camel_case_body(client):
    response = client.post("/users/add", json={"passportNumber": "4321 098765"})

    assert response.status_code == 201
    assert response.json()["patronymic"] is None


def test_add_user_rejections(client, passport_calls):
    _add(client)
    passport_calls.clear()

    duplicate = _add(client)
    malformed = _add(client, "1234567890")
    unknown = _add(client, "9999 000000")

    assert duplicate.status_code == 409
    assert "already exists" in duplicate.text
    assert malformed.status_code == 400
    assert malformed.headers["content-type"].startswith("text/plain")
    assert unknown.status_code == 502
    # only the unknown passport reached the passport service
    assert passport_calls == [{"passportSerie": "9999", "passportNumber": "000000"}]


def test_list_users_defaults_bad_pagination(client):
    _add(client)
    _add(client, "4321 098765")

    default = client.get("/users").json()
    junk = client.get("/users", params={"page": "zero", "pageSize": "0"}).json()
    second = client.get("/users", params={"page": "2", "pageSize": "1"}).json()

    assert len(default) == 2
    assert junk == default
    assert [u["id"] for u in second] == [default[1]["id"]]


def test_timer_lifecycle_and_worklog(client):
    user_id = _add(client).json()["id"]

    started = client.post(f"/users/{user_id}/task/start")
    assert started.status_code == 201
    task_id = started.json()["task_id"]
    assert started.json()["end_time"] is None

    again = client.post(f"/users/{user_id}/task/start")
    assert again.status_code == 409

    stopped = client.post(f"/users/task/{task_id}/stop")
    assert stopped.status_code == 200
    assert stopped.json()["end_time"] is not None

    twice = client.post(f"/users/task/{task_id}/stop")
    assert twice.status_code == 409
    assert "already stopped" in twice.text

    report = client.get(f"/users/{user_id}/worklog")
    assert report.status_code == 200
    assert [entry["task_id"] for entry in report.json()] == [task_id]
    assert set(report.json()[0]) == {"user_id", "task_id", "hours", "minutes"}


def test_timer_not_found_cases(client):
    assert client.post("/users/77/task/start").status_code == 404
    assert client.post("/users/task/77/stop").status_code == 404


def test_malformed_ids_are_client_errors(client):
    assert client.post("/users/abc/task/start").status_code == 400
    assert client.post("/users/0/task/start").status_code == 400
    assert client.delete("/users/-1").status_code == 400
    assert client.post("/users/task/x/stop").status_code == 400


def test_worklog_period_validation(client):
    user_id = _add(client).json()["id"]
    url = f"/users/{user_id}/worklog"

    one_bound = client.get(url, params={"startPeriod": "2024-01-01T00:00:00Z"})
    malformed = client.get(url, params={"startPeriod": "soon", "endPeriod": "later"})
    bounded = client.get(
        url,
        params={"startPeriod": "2024-01-01T00:00:00Z", "endPeriod": "2024-01-31T23:59:59Z"},
    )

    assert one_bound.status_code == 400
    assert malformed.status_code == 400
    assert bounded.status_code == 200
    assert bounded.json() == []


def test_update_user_via_query_params(client):
    user_id = _add(client).json()["id"]

    updated = client.put(f"/users/{user_id}", params={"address": "Tver, Sovetskaya 1"})
    missing = client.put("/users/999", params={"name": "Nobody"})

    assert updated.status_code == 200
    assert updated.json()["address"] == "Tver, Sovetskaya 1"
    assert updated.json()["surname"] == "Ivanov"
    assert missing.status_code == 404


def test_delete_user_cascades(client):
    user_id = _add(client).json()["id"]
    task_id = client.post(f"/users/{user_id}/task/start").json()["task_id"]
    client.post(f"/users/task/{task_id}/stop")

    deleted = client.delete(f"/users/{user_id}")

    assert deleted.status_code == 200
    assert deleted.json() == {"status": "deleted"}
    assert client.get("/users").json() == []
    assert client.get(f"/users/{user_id}/worklog").json() == []
    assert client.delete(f"/users/{user_id}").status_code == 404


def test_responses_carry_request_id(client):
    response = client.get("/users", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"


def test_out_of_range_numbers_are_client_errors(client):
    _add(client)
    huge = "99999999999999999999"

    page = client.get("/users", params={"page": huge, "pageSize": huge})
    stop = client.post(f"/users/task/{huge}/stop")
    report = client.get(f"/users/{huge}/worklog")
    start = client.post(f"/users/{2**31}/task/start")

    assert page.status_code == 200
    assert len(page.json()) == 1
    assert stop.status_code == 400
    assert report.status_code == 400
    assert start.status_code == 400
    assert stop.headers["content-type"].startswith("text/plain")


def test_unsafe_request_ids_are_replaced(client):
    response = client.get("/users", headers={"X-Request-ID": "bad id with spaces"})

    assert response.headers["X-Request-ID"] != "bad id with spaces"
    assert len(response.headers["X-Request-ID"]) == 32

import pytest

pytestmark = pytest.mark.web


def test_end_to_end_insert_detail_delete(client):
    response = client.post("/api/insert", json={
        "title": "t", "content": "c", "writer": "w", "password": "p",
    })
    assert response.status_code == 201
    post_id = response.json()["result"]
    assert isinstance(post_id, int)

    response = client.post("/api/detail", json={"id": post_id})
    assert response.status_code == 200
    record = response.json()["result"]
    assert (record["title"], record["content"], record["writer"]) == ("t", "c", "w")
    assert "password" not in record

    response = client.post("/api/delete", json={"id": post_id, "password": "wrong"})
    assert response.status_code == 422
    assert response.json() == {"error": "INVALID_PASSWORD"}

    response = client.post("/api/delete", json={"id": post_id, "password": "p"})
    assert response.status_code == 200
    assert response.json() == {"result": 1}

    response = client.post("/api/detail", json={"id": post_id})
    assert response.status_code == 422
    assert response.json() == {"error": "NOT_FOUND"}


def test_list_pages_and_totals(client, insert_post):
    ids = [insert_post(title=f"post {i}") for i in range(12)]

    first = client.post("/api/list", json={"pageNum": 1, "rowsPerPage": 5}).json()
    third = client.post("/api/list", json={"pageNum": 3, "rowsPerPage": 5}).json()

    assert first["totalCount"] == 12
    assert first["totalPages"] == 3
    assert [r["id"] for r in first["result"]] == sorted(ids, reverse=True)[:5]
    assert [r["id"] for r in third["result"]] == sorted(ids, reverse=True)[10:]
    assert all(set(r) == {"id", "title", "writer", "createdAt", "updatedAt"} for r in first["result"])


def test_list_search(client, insert_post):
    insert_post(title="Python tips")
    insert_post(title="other", writer="pythonista")
    insert_post(title="nothing")

    body = client.post("/api/list", json={"pageNum": 1, "rowsPerPage": 10, "search": "PYTHON"}).json()

    assert body["totalCount"] == 2
    assert body["totalPages"] == 1
    assert {r["title"] for r in body["result"]} == {"Python tips", "other"}


def test_list_empty_board(client):
    body = client.post("/api/list", json={"pageNum": 1, "rowsPerPage": 10}).json()

    assert body == {"result": [], "totalCount": 0, "totalPages": 0}


def test_check_password(client, insert_post):
    post_id = insert_post(password="secret")

    ok = client.post("/api/checkPassword", json={"id": post_id, "password": "secret"})
    bad = client.post("/api/checkPassword", json={"id": post_id, "password": "nope"})
    missing = client.post("/api/checkPassword", json={"id": post_id + 1, "password": "secret"})

    assert (ok.status_code, ok.json()) == (200, {"result": True})
    assert (bad.status_code, bad.json()) == (422, {"result": False})
    assert (missing.status_code, missing.json()) == (422, {"result": False})


def test_update_marks_title_once(client, insert_post):
    post_id = insert_post(title="hello", password="pw")

    response = client.post("/api/update", json={
        "id": post_id, "title": "hello", "content": "edited body", "password": "pw",
    })
    assert response.status_code == 200
    assert response.json() == {"result": 1}

    title = client.post("/api/detail", json={"id": post_id}).json()["result"]["title"]
    assert title == "[edited] hello"

    client.post("/api/update", json={"id": post_id, "title": title, "content": "x", "password": "pw"})
    record = client.post("/api/detail", json={"id": post_id}).json()["result"]
    assert record["title"] == "[edited] hello"
    assert record["content"] == "x"
    assert record["updatedAt"] is not None


def test_update_wrong_password_changes_nothing(client, insert_post):
    post_id = insert_post(title="keep", content="keep", password="pw")

    response = client.post("/api/update", json={
        "id": post_id, "title": "x", "content": "x", "password": "bad",
    })

    assert response.status_code == 422
    assert response.json() == {"error": "INVALID_PASSWORD"}
    record = client.post("/api/detail", json={"id": post_id}).json()["result"]
    assert (record["title"], record["content"]) == ("keep", "keep")


@pytest.mark.parametrize("path,body", [
    ("/api/list", {"pageNum": 1}),
    ("/api/list", {"pageNum": 0, "rowsPerPage": 10}),
    ("/api/detail", {"id": "abc"}),
    ("/api/insert", {"title": "t", "content": "c", "writer": "w"}),
    ("/api/delete", {"id": 1}),
    ("/api/update", {"id": 1, "title": "t", "password": "p"}),
    # 64-bit 정수 범위 밖
    ("/api/detail", {"id": 10**20}),
    ("/api/detail", {"id": -(10**20)}),
    ("/api/delete", {"id": 10**20, "password": "p"}),
    ("/api/checkPassword", {"id": 2**63, "password": "p"}),
    ("/api/update", {"id": 2**63, "title": "t", "content": "c", "password": "p"}),
    ("/api/list", {"pageNum": 10**19, "rowsPerPage": 10}),
    ("/api/list", {"pageNum": 1, "rowsPerPage": 2**63}),
    ("/api/list", {"pageNum": 2**40, "rowsPerPage": 2**40}),
])
def test_invalid_bodies_are_400(client, path, body):
    response = client.post(path, json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload["statusCode"] == 400
    assert payload["error"] == "Bad Request"
    assert payload["message"] == "Validation failed"
    assert payload["details"]


def test_malformed_json_is_400(client):
    response = client.post("/api/detail", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400


def test_largest_id_is_a_plain_miss(client):
    response = client.post("/api/detail", json={"id": 2**63 - 1})

    assert response.status_code == 422
    assert response.json() == {"error": "NOT_FOUND"}

"""Todo API tests."""

from datetime import datetime

from src.config import Settings, get_settings
from src.main import app


def create_todo(client, headers, title="buy milk"):
    response = client.post("/todos", headers=headers, json={"title": title})
    assert response.status_code == 201
    return response.json()


def test_create_todo(client, auth_headers):
    """Test creating a todo."""
    response = client.post("/todos", headers=auth_headers, json={"title": "buy milk"})
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "buy milk"
    assert data["completed"] is False
    assert data["user_id"] == auth_headers.user_id
    assert data["id"] > 0
    assert data["created_at"]
    assert data["updated_at"]


def test_create_todo_ignores_client_owner(client, auth_headers, other_auth_headers):
    response = client.post(
        "/todos",
        headers=auth_headers,
        json={"title": "mine", "user_id": other_auth_headers.user_id},
    )
    assert response.status_code == 201
    assert response.json()["user_id"] == auth_headers.user_id


def test_create_todo_requires_title(client, auth_headers):
    response = client.post("/todos", headers=auth_headers, json={})
    assert response.status_code == 400
    assert response.json() == {"error": "Title is required"}

    response = client.post("/todos", headers=auth_headers, json={"title": ""})
    assert response.status_code == 400
    assert response.json() == {"error": "Title is required"}

    assert client.get("/todos", headers=auth_headers).json() == []


def test_create_todo_invalid_json(client, auth_headers):
    response = client.post(
        "/todos",
        headers={**auth_headers, "Content-Type": "application/json"},
        content="{not json",
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body"}


def test_get_todos(client, auth_headers):
    """Test getting all todos."""
    create_todo(client, auth_headers, "first")
    create_todo(client, auth_headers, "second")

    response = client.get("/todos", headers=auth_headers)
    assert response.status_code == 200
    assert [todo["title"] for todo in response.json()] == ["first", "second"]


def test_get_todo(client, auth_headers):
    todo = create_todo(client, auth_headers)

    response = client.get(f"/todos/{todo['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == todo


def test_get_todo_not_found(client, auth_headers):
    response = client.get("/todos/99999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Todo not found"}


def test_non_numeric_todo_id_is_not_found(client, auth_headers):
    for raw_id in ("abc", "1.5", "-1", "0", "99999999999999999999"):
        response = client.get(f"/todos/{raw_id}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Todo not found"}

    response = client.put("/todos/abc", headers=auth_headers, json={"title": "x"})
    assert response.status_code == 404
    response = client.delete("/todos/abc", headers=auth_headers)
    assert response.status_code == 404


def test_update_todo(client, auth_headers):
    """Test updating title and completion."""
    todo = create_todo(client, auth_headers)

    response = client.put(
        f"/todos/{todo['id']}", headers=auth_headers, json={"completed": True}
    )
    assert response.status_code == 200
    assert response.json()["completed"] is True
    assert response.json()["title"] == "buy milk"

    response = client.put(
        f"/todos/{todo['id']}", headers=auth_headers, json={"title": "buy oat milk"}
    )
    assert response.status_code == 200
    assert response.json()["title"] == "buy oat milk"
    assert response.json()["completed"] is True


def test_update_todo_empty_body_only_touches_updated_at(client, auth_headers):
    todo = create_todo(client, auth_headers)

    response = client.put(f"/todos/{todo['id']}", headers=auth_headers, json={})
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == todo["title"]
    assert data["completed"] == todo["completed"]
    assert data["created_at"] == todo["created_at"]
    assert datetime.fromisoformat(data["updated_at"]) > datetime.fromisoformat(
        todo["updated_at"]
    )


def test_update_todo_null_fields_keep_values(client, auth_headers):
    todo = create_todo(client, auth_headers)

    response = client.put(
        f"/todos/{todo['id']}", headers=auth_headers, json={"title": None, "completed": None}
    )
    assert response.status_code == 200
    assert response.json()["title"] == "buy milk"
    assert response.json()["completed"] is False


def test_update_todo_rejects_empty_title(client, auth_headers):
    todo = create_todo(client, auth_headers)

    response = client.put(f"/todos/{todo['id']}", headers=auth_headers, json={"title": ""})
    assert response.status_code == 400
    assert client.get(f"/todos/{todo['id']}", headers=auth_headers).json()["title"] == "buy milk"


def test_delete_todo(client, auth_headers):
    todo = create_todo(client, auth_headers)

    response = client.delete(f"/todos/{todo['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Deleted successfully"}

    assert client.get(f"/todos/{todo['id']}", headers=auth_headers).status_code == 404
    assert client.delete(f"/todos/{todo['id']}", headers=auth_headers).status_code == 404


def test_todos_are_isolated_between_users(client, auth_headers, other_auth_headers):
    """Another user can neither see nor change someone else's todo."""
    todo = create_todo(client, auth_headers)
    todo_url = f"/todos/{todo['id']}"

    assert client.get("/todos", headers=other_auth_headers).json() == []
    assert client.get(todo_url, headers=other_auth_headers).status_code == 404

    response = client.put(todo_url, headers=other_auth_headers, json={"title": "hijacked"})
    assert response.status_code == 404
    assert response.json() == {"error": "Todo not found"}

    response = client.delete(todo_url, headers=other_auth_headers)
    assert response.status_code == 404

    assert client.get(todo_url, headers=auth_headers).json()["title"] == "buy milk"


def test_single_tenant_mode_serves_todos_without_session(client):
    app.dependency_overrides[get_settings] = lambda: Settings(auth_enabled=False)

    response = client.post("/todos", json={"title": "no account needed"})
    assert response.status_code == 201
    todo = response.json()
    assert todo["user_id"] is None

    assert [t["id"] for t in client.get("/todos").json()] == [todo["id"]]
    response = client.put(f"/todos/{todo['id']}", json={"completed": True})
    assert response.json()["completed"] is True
    assert client.delete(f"/todos/{todo['id']}").status_code == 200

    # Decks stay behind the identity gate
    assert client.get("/decks").status_code == 401


def test_single_tenant_mode_hides_owned_todos(client, auth_headers):
    create_todo(client, auth_headers, "private")
    app.dependency_overrides[get_settings] = lambda: Settings(auth_enabled=False)

    assert client.get("/todos").json() == []
    assert client.get("/health").json()["auth_enabled"] is False


def test_anonymous_write_with_malformed_body_is_unauthorized(client):
    response = client.post(
        "/todos", headers={"Content-Type": "application/json"}, content="{not json"
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}

    response = client.put("/todos/1", json={"title": ""})
    assert response.status_code == 401

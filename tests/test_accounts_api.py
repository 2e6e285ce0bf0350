import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from userauth.infrastructure.db import get_db
from userauth.infrastructure.security import get_credential_store

# Импортируем app
from userauth.main import app


def create_override_get_db(session):
    """Создает функцию переопределения get_db для тестов"""
    def _get_db():
        yield session
    return _get_db


@pytest.fixture
def client(db_session, store):
    """Фикстура для тестового клиента на in-memory SQLite"""
    app.dependency_overrides[get_db] = create_override_get_db(db_session)
    app.dependency_overrides[get_credential_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db():
    """Мок сессии БД"""
    db = MagicMock()
    db.query = MagicMock()
    return db


@pytest.fixture
def mock_client(mock_db, store):
    app.dependency_overrides[get_db] = create_override_get_db(mock_db)
    app.dependency_overrides[get_credential_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def register_payload(**overrides):
    payload = {
        "name": "Example User",
        "email": "user@example.com",
        "password": "foobar",
        "password_confirmation": "foobar",
    }
    payload.update(overrides)
    return payload


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_register_success(client):
    """Тест успешной регистрации"""
    response = client.post("/api/accounts", json=register_payload(email="User@Example.com"))
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Example User"
    assert data["email"] == "User@Example.com"
    assert "id" in data
    assert "password" not in data
    assert "password_digest" not in data


def test_register_reports_every_violation(client):
    """Форма получает все нарушения сразу"""
    response = client.post(
        "/api/accounts",
        json=register_payload(name="", email="user@foo,com", password="aaaaa", password_confirmation="bbbbb"),
    )
    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "Validation failed"
    codes = [v["code"] for v in body["violations"]]
    assert codes == ["name_blank", "email_invalid_format", "password_too_short", "password_confirmation_mismatch"]
    fields = {v["field"] for v in body["violations"]}
    assert fields == {"name", "email", "password", "password_confirmation"}


def test_register_without_confirmation(client):
    payload = register_payload()
    del payload["password_confirmation"]
    response = client.post("/api/accounts", json=payload)
    assert response.status_code == 422
    assert [v["code"] for v in response.json()["violations"]] == ["password_confirmation_mismatch"]


def test_register_duplicate_email_case_insensitive(client):
    assert client.post("/api/accounts", json=register_payload(email="user@foo.com")).status_code == 201
    response = client.post("/api/accounts", json=register_payload(email="USER@FOO.com"))
    assert response.status_code == 422
    assert [v["code"] for v in response.json()["violations"]] == ["email_taken"]


def test_register_duplicate_with_mocked_db(mock_client, mock_db):
    """Тест регистрации с существующим email (мок БД)"""
    mock_query = MagicMock()
    mock_query.filter.return_value = mock_query
    mock_query.first.return_value = (1,)
    mock_db.query.return_value = mock_query

    response = mock_client.post("/api/accounts", json=register_payload())
    assert response.status_code == 422
    mock_db.add.assert_not_called()
    mock_db.commit.assert_not_called()


def test_register_null_and_missing_fields_report_violations(client):
    """Пустые и отсутствующие поля формы дают список нарушений, а не ошибку схемы"""
    response = client.post(
        "/api/accounts",
        json={"name": "", "email": "", "password": None, "password_confirmation": None},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "Validation failed"
    assert [v["code"] for v in body["violations"]] == [
        "name_blank",
        "email_blank",
        "password_blank",
        "password_too_short",
        "password_confirmation_mismatch",
    ]

    response = client.post("/api/accounts", json={"email": "user@example.com", "password": "foobar"})
    assert response.status_code == 422
    assert [v["code"] for v in response.json()["violations"]] == ["name_blank", "password_confirmation_mismatch"]


def test_login_success(client):
    """Тест успешного входа"""
    account_id = client.post("/api/accounts", json=register_payload()).json()["id"]
    response = client.post("/api/accounts/login", json={"email": "USER@example.com", "password": "foobar"})
    assert response.status_code == 200
    assert response.json()["id"] == account_id


def test_login_wrong_password(client):
    client.post("/api/accounts", json=register_payload())
    response = client.post("/api/accounts/login", json={"email": "user@example.com", "password": "invalid"})
    assert response.status_code == 401
    assert "Invalid credentials" in response.json()["detail"]


def test_login_nonexistent_user(mock_client, mock_db):
    """Несуществующий email неотличим от неверного пароля"""
    mock_query = MagicMock()
    mock_query.filter.return_value = mock_query
    mock_query.first.return_value = None
    mock_db.query.return_value = mock_query

    response = mock_client.post("/api/accounts/login", json={"email": "nobody@example.com", "password": "foobar"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid credentials"}


def test_get_account(client):
    created = client.post("/api/accounts", json=register_payload()).json()
    response = client.get(f"/api/accounts/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_get_account_not_found(client):
    assert client.get("/api/accounts/999").status_code == 404


def test_change_password(client):
    account_id = client.post("/api/accounts", json=register_payload()).json()["id"]
    response = client.put(
        f"/api/accounts/{account_id}/password",
        json={"password": "newsecret", "password_confirmation": "newsecret"},
    )
    assert response.status_code == 200
    assert response.json()["id"] == account_id

    old = client.post("/api/accounts/login", json={"email": "user@example.com", "password": "foobar"})
    new = client.post("/api/accounts/login", json={"email": "user@example.com", "password": "newsecret"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_change_password_mismatch(client):
    account_id = client.post("/api/accounts", json=register_payload()).json()["id"]
    response = client.put(
        f"/api/accounts/{account_id}/password",
        json={"password": "newsecret", "password_confirmation": "other"},
    )
    assert response.status_code == 422
    assert [v["code"] for v in response.json()["violations"]] == ["password_confirmation_mismatch"]


def test_change_password_unknown_account(client):
    response = client.put(
        "/api/accounts/999/password",
        json={"password": "newsecret", "password_confirmation": "newsecret"},
    )
    assert response.status_code == 404


def test_metrics_endpoint(client):
    client.post("/api/accounts", json=register_payload())
    client.post("/api/accounts/login", json={"email": "user@example.com", "password": "wrong"})
    response = client.get("/metrics")
    assert response.status_code == 200
    body = response.text
    assert "account_registrations_total" in body
    assert "account_authentications_total" in body
    assert "http_requests_total" in body


def test_change_password_null_password(client):
    account_id = client.post("/api/accounts", json=register_payload()).json()["id"]
    response = client.put(f"/api/accounts/{account_id}/password", json={"password": None})
    assert response.status_code == 422
    codes = [v["code"] for v in response.json()["violations"]]
    assert "password_blank" in codes
    assert "password_confirmation_mismatch" in codes


def test_metrics_use_route_template(client):
    """Метрики группируются по шаблону маршрута, а не по id"""
    client.get("/api/accounts/12345")
    body = client.get("/metrics").text
    assert "/api/accounts/12345" not in body

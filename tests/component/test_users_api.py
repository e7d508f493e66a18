"""
Component tests for registration, login, products and health endpoints
"""
from fastapi.testclient import TestClient
from sqlalchemy import select

from app.data.models.user import UserModel


def _register(client: TestClient, **overrides):
    body = {"name": "Ann", "email": "ann@example.com", "password": "secret1"}
    body.update(overrides)
    return client.post("/users", json=body)


class TestRegister:

    def test_register_user(self, test_client: TestClient):
        response = _register(test_client)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Ann"
        assert data["email"] == "ann@example.com"
        assert "password" not in data
        assert response.headers["location"].endswith(f"/users/{data['id']}")

    def test_password_is_stored_hashed(self, test_client: TestClient, db):
        _register(test_client)

        stored = db.execute(select(UserModel)).scalar_one()
        assert stored.password != "secret1"
        assert stored.password.startswith("$argon2id$")

    def test_invalid_fields_return_400_per_field(self, test_client: TestClient):
        response = test_client.post("/users", json={"email": "nope", "password": "1"})

        assert response.status_code == 400
        assert response.json() == {
            "name": "Name is required",
            "email": "Email must be valid",
            "password": "Password must be between 6 to 25 characters long",
        }

    def test_duplicate_email_returns_400(self, test_client: TestClient):
        _register(test_client)

        response = _register(test_client, name="Other", email="ANN@example.com")

        assert response.status_code == 400
        assert response.json() == {"email": "Email is already registered"}


class TestGetUser:

    def test_get_user(self, test_client: TestClient):
        user_id = _register(test_client).json()["id"]

        response = test_client.get(f"/users/{user_id}")

        assert response.status_code == 200
        assert response.json() == {"id": user_id, "name": "Ann", "email": "ann@example.com"}

    def test_unknown_user_returns_404(self, test_client: TestClient):
        assert test_client.get("/users/12345").status_code == 404

    def test_oversized_user_id_returns_400(self, test_client: TestClient):
        assert test_client.get(f"/users/{10**20}").status_code == 400


class TestLogin:

    def test_login_success(self, test_client: TestClient):
        _register(test_client)

        response = test_client.post("/auth/login", json={"email": "Ann@example.com", "password": "secret1"})

        assert response.status_code == 200
        assert response.json() == {"message": "Login successful"}

    def test_wrong_password_returns_401(self, test_client: TestClient):
        _register(test_client)

        response = test_client.post("/auth/login", json={"email": "ann@example.com", "password": "wrong-pass"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}

    def test_unknown_email_returns_401(self, test_client: TestClient):
        response = test_client.post("/auth/login", json={"email": "ghost@example.com", "password": "secret1"})

        assert response.status_code == 401


class TestProductsAndHealth:

    def test_list_products(self, test_client: TestClient, products):
        response = test_client.get("/products")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == sorted(products)

    def test_get_product(self, test_client: TestClient):
        response = test_client.get("/products/2")

        assert response.json() == {"id": 2, "name": "Mouse", "price": "49.50"}

    def test_unknown_product_returns_404(self, test_client: TestClient):
        assert test_client.get("/products/999").status_code == 404

    def test_oversized_product_id_returns_400(self, test_client: TestClient):
        response = test_client.get(f"/products/{10**20}")

        assert response.status_code == 400
        assert "product_id" in response.json()

    def test_health(self, test_client: TestClient):
        assert test_client.get("/health").json() == {"status": "ok"}

import pytest

from academy.models import AppUser, Role
from academy.tokens import verify_token


@pytest.mark.django_db
def test_register_then_login_as_student(api_client):
    r = api_client.post("/api/auth/register", {"username": "ali1", "password": "pw123"}, format="json")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    r = api_client.post("/api/auth/login", {"username": "ali1", "password": "pw123"}, format="json")
    assert r.status_code == 200
    body = r.json()
    assert body["username"] == "ali1"
    assert body["role"] == "student"

    user = AppUser.objects.get(username="ali1")
    claim = verify_token(body["token"])
    assert (claim.user_id, claim.username, claim.role) == (user.id, "ali1", "student")


@pytest.mark.django_db
def test_register_stores_profile_and_hash_only(api_client):
    payload = {
        "username": "fatima",
        "password": "pw123",
        "email": "fatima@example.com",
        "firstName": "Fatima",
        "phone": "+44 20 0000",
        "country": "UK",
        "city": "London",
        "program": "Hifz",
        "preferredDays": "Mon,Wed",
    }
    assert api_client.post("/api/auth/register", payload, format="json").status_code == 200

    user = AppUser.objects.get(username="fatima")
    assert user.first_name == "Fatima"
    assert user.preferred_days == "Mon,Wed"
    assert user.password_hash != "pw123"
    assert "pw123" not in user.password_hash


@pytest.mark.django_db
def test_register_ignores_requested_role(api_client):
    payload = {"username": "sneaky", "password": "pw123", "role": "admin"}
    assert api_client.post("/api/auth/register", payload, format="json").status_code == 200
    assert AppUser.objects.get(username="sneaky").role == Role.STUDENT


@pytest.mark.django_db
def test_duplicate_registration_is_rejected(api_client):
    payload = {"username": "ali1", "password": "pw123"}
    assert api_client.post("/api/auth/register", payload, format="json").status_code == 200

    r = api_client.post("/api/auth/register", dict(payload, password="other"), format="json")
    assert r.status_code == 409
    assert r.json() == {"error": "Username already exists"}
    assert AppUser.objects.filter(username="ali1").count() == 1


@pytest.mark.django_db
@pytest.mark.parametrize("payload", [{}, {"username": "ali1"}, {"password": "pw123"}])
def test_register_requires_username_and_password(api_client, payload):
    r = api_client.post("/api/auth/register", payload, format="json")
    assert r.status_code == 400
    assert r.json()["error"] == "Username and password required"


@pytest.mark.django_db
@pytest.mark.parametrize("username,password", [("student1", "wrong"), ("nobody", "pw123"), ("", "")])
def test_login_rejects_bad_credentials(api_client, student, username, password):
    r = api_client.post("/api/auth/login", {"username": username, "password": password}, format="json")
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}


@pytest.mark.django_db
def test_me_returns_current_user(as_user, teacher):
    r = as_user(teacher).get("/api/auth/me")
    assert r.status_code == 200
    assert r.json()["username"] == "teacher1"
    assert r.json()["role"] == "teacher"


@pytest.mark.django_db
def test_me_requires_token(api_client):
    assert api_client.get("/api/auth/me").status_code == 401


@pytest.mark.django_db
def test_token_of_deleted_user_cannot_load_profile(as_user, student):
    client = as_user(student)
    student.delete()
    assert client.get("/api/auth/me").status_code == 401


@pytest.mark.django_db
def test_register_reports_malformed_email_per_field(api_client):
    r = api_client.post(
        "/api/auth/register",
        {"username": "ali1", "password": "pw123", "email": "not-an-email"},
        format="json",
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid data"
    assert "email" in r.json()["issues"]
    assert not AppUser.objects.filter(username="ali1").exists()

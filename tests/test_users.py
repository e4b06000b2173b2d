from conftest import TEST_PASSWORD


def test_get_profile(client, test_user, auth_headers):
    response = client.get("/api/user/profile", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["email"] == test_user.email
    assert body["role"] == "USER"
    assert "password_hash" not in body


def test_get_profile_by_email(client, other_user, auth_headers):
    response = client.get(f"/api/user/profile/{other_user.email}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "other"

    assert client.get("/api/user/profile/nobody@example.com", headers=auth_headers).status_code == 404


def test_update_profile(client, auth_headers):
    response = client.put("/api/user/profile", headers=auth_headers, json={
        "username": "renamed", "profile_image": "https://example.com/me.png",
    })
    assert response.status_code == 200
    assert response.json()["username"] == "renamed"
    assert response.json()["profile_image"] == "https://example.com/me.png"


def test_update_profile_blank_username_is_ignored(client, test_user, auth_headers):
    response = client.put("/api/user/profile", headers=auth_headers, json={"username": "   "})
    assert response.status_code == 200
    assert response.json()["username"] == test_user.username


def test_update_profile_username_taken(client, other_user, auth_headers):
    response = client.put("/api/user/profile", headers=auth_headers, json={"username": other_user.username})
    assert response.status_code == 409


def test_change_password(client, test_user, auth_headers):
    response = client.post("/api/user/change-password", headers=auth_headers, json={
        "current_password": "wrong-one", "new_password": "another1",
    })
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Current password is incorrect"

    response = client.post("/api/user/change-password", headers=auth_headers, json={
        "current_password": TEST_PASSWORD, "new_password": "abc",
    })
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "New password must be at least 6 characters"

    response = client.post("/api/user/change-password", headers=auth_headers, json={
        "current_password": TEST_PASSWORD, "new_password": "another1",
    })
    assert response.status_code == 200

    response = client.post("/api/auth/login", json={"email": test_user.email, "password": "another1"})
    assert response.status_code == 200

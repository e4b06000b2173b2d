from conftest import make_product


def add(client, headers, product_id):
    return client.post("/api/favorites/", headers=headers, json={"product_id": product_id})


def test_add_and_duplicate(client, auth_headers, product):
    response = add(client, auth_headers, product.id)
    assert response.status_code == 201
    assert response.json()["favorite"]["product"]["id"] == product.id

    response = add(client, auth_headers, product.id)
    assert response.status_code == 409
    assert response.json()["error"]["message"] == "Product is already in your favorites"

    assert add(client, auth_headers, 999).status_code == 404


def test_remove(client, auth_headers, product):
    response = client.delete(f"/api/favorites/{product.id}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Product is not in your favorites"

    add(client, auth_headers, product.id)
    assert client.delete(f"/api/favorites/{product.id}", headers=auth_headers).status_code == 200
    assert client.get("/api/favorites/count", headers=auth_headers).json()["count"] == 0


def test_check_count_and_list(client, db_session, auth_headers, product):
    second = make_product(db_session, name="Second")
    add(client, auth_headers, product.id)
    add(client, auth_headers, second.id)

    check = client.get(f"/api/favorites/check/{product.id}", headers=auth_headers).json()
    assert check == {"product_id": product.id, "is_favorited": True}
    assert client.get("/api/favorites/count", headers=auth_headers).json()["count"] == 2

    listed = client.get("/api/favorites/", headers=auth_headers).json()
    assert [f["product"]["id"] for f in listed] == [second.id, product.id]


def test_user_favorites_by_id(client, test_user, other_user, auth_headers, other_headers, product):
    add(client, other_headers, product.id)
    listed = client.get(f"/api/favorites/user/{other_user.id}", headers=auth_headers).json()
    assert listed[0]["user_email"] == other_user.email
    assert client.get("/api/favorites/user/999", headers=auth_headers).status_code == 404


def test_clear(client, auth_headers, product):
    response = client.delete("/api/favorites/", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "You have no favorites to clear"

    add(client, auth_headers, product.id)
    assert client.delete("/api/favorites/", headers=auth_headers).status_code == 200
    assert client.get("/api/favorites/", headers=auth_headers).json() == []


def test_detail_is_owner_only(client, auth_headers, other_headers, product):
    favorite_id = add(client, auth_headers, product.id).json()["favorite"]["id"]
    assert client.get(f"/api/favorites/detail/{favorite_id}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/favorites/detail/{favorite_id}", headers=other_headers).status_code == 403
    assert client.get("/api/favorites/detail/999", headers=auth_headers).status_code == 404


def test_toggle(client, auth_headers, product):
    response = client.post(f"/api/favorites/toggle/{product.id}", headers=auth_headers)
    assert response.json()["favorited"] is True
    assert response.json()["favorite"]["product"]["id"] == product.id

    response = client.post(f"/api/favorites/toggle/{product.id}", headers=auth_headers)
    assert response.json() == {"message": "Product removed from favorites", "favorited": False, "favorite": None}

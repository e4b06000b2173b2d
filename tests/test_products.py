from shopapp.database.seed import SAMPLE_PRODUCTS, seed_sample_products
from shopapp.entities import CartItem, Cart, Favorite, Product, Review
from conftest import make_order, make_product


def test_public_catalog_queries(client, db_session):
    make_product(db_session, name="Desk Lamp", category="Home")
    make_product(db_session, name="Floor Lamp", category="Home")
    make_product(db_session, name="USB Cable", category="Electronics")

    assert len(client.get("/api/products/").json()) == 3
    assert len(client.get("/api/products/category/Home").json()) == 2

    names = [p["name"] for p in client.get("/api/products/search", params={"keyword": "LAMP"}).json()]
    assert names == ["Desk Lamp", "Floor Lamp"]


def test_search_treats_wildcards_literally(client, db_session):
    make_product(db_session, name="Desk Lamp")
    make_product(db_session, name="100% Cotton Tee")
    make_product(db_session, name="USB_C Cable")

    def search(keyword):
        return [p["name"] for p in client.get("/api/products/search", params={"keyword": keyword}).json()]

    assert search("%") == ["100% Cotton Tee"]
    assert search("_") == ["USB_C Cable"]


def test_get_missing_product(client):
    response = client.get("/api/products/999")
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Product not found with id: 999"


def test_admin_create_product(client, admin_headers):
    response = client.post("/api/admin/products", headers=admin_headers, json={
        "name": "Gadget", "price": 19.99, "stock": 5, "category": "Misc",
    })
    assert response.status_code == 201
    product = response.json()["product"]
    assert product["rating"] == 0.0
    assert product["stock"] == 5


def test_admin_create_product_validation(client, admin_headers):
    cases = [
        ({"price": 10, "stock": 1}, "Product name is required"),
        ({"name": "X", "price": 0, "stock": 1}, "Product price must be greater than 0"),
        ({"name": "X", "price": 10, "stock": -1}, "Product stock cannot be negative"),
    ]
    for payload, message in cases:
        response = client.post("/api/admin/products", headers=admin_headers, json=payload)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == message


def test_admin_partial_update(client, admin_headers, product):
    response = client.put(f"/api/admin/products/{product.id}", headers=admin_headers, json={
        "name": "  ", "price": 30.0,
    })
    assert response.status_code == 200
    body = response.json()["product"]
    assert body["name"] == "Desk Lamp"
    assert body["price"] == 30.0


def test_customer_cannot_manage_catalog(client, auth_headers):
    response = client.post("/api/admin/products", headers=auth_headers, json={"name": "X", "price": 1, "stock": 1})
    assert response.status_code == 403


def test_delete_product_removes_dependents(client, db_session, admin_headers, product, test_user):
    cart = Cart(user_id=test_user.id)
    cart.items.append(CartItem(product_id=product.id, quantity=1))
    db_session.add_all([cart, Favorite(user_id=test_user.id, product_id=product.id)])
    db_session.commit()

    response = client.delete(f"/api/admin/products/{product.id}", headers=admin_headers)
    assert response.status_code == 200
    db_session.expire_all()
    assert db_session.query(Product).count() == 0
    assert db_session.query(CartItem).count() == 0
    assert db_session.query(Favorite).count() == 0


def test_delete_ordered_product_conflicts(client, db_session, admin_headers, product, test_user):
    make_order(db_session, test_user, product)
    response = client.delete(f"/api/admin/products/{product.id}", headers=admin_headers)
    assert response.status_code == 409
    assert db_session.query(Product).count() == 1


def test_delete_missing_product(client, admin_headers):
    assert client.delete("/api/admin/products/42", headers=admin_headers).status_code == 404


def test_seed_only_runs_on_empty_catalog(db_session):
    assert seed_sample_products(db_session) == len(SAMPLE_PRODUCTS)
    assert seed_sample_products(db_session) == 0
    names = {p.name for p in db_session.query(Product).all()}
    assert "Mechanical Keyboard" in names
    assert db_session.query(Review).count() == 0

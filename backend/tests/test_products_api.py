import uuid

from conftest import auth_headers

SHIRT = {
    "title": "Shirt",
    "price": 20,
    "sizes": ["M", "L"],
    "gender": "men",
    "images": ["a.png", "b.png"],
}


def _create(client, headers, **overrides):
    res = client.post("/api/products", json={**SHIRT, **overrides}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def test_create_requires_admin(client):
    res = client.post("/api/products", json=SHIRT)
    assert res.status_code == 401

    user_headers = auth_headers(client, "plain@example.com", roles=("user",))
    res = client.post("/api/products", json=SHIRT, headers=user_headers)
    assert res.status_code == 403


def test_create_and_fetch_by_id_and_slug(client, admin_headers):
    body = _create(client, admin_headers)
    assert body["slug"] == "shirt"
    assert sorted(body["images"]) == ["a.png", "b.png"]

    by_id = client.get(f"/api/products/{body['id']}").json()
    by_slug = client.get("/api/products/shirt").json()
    assert by_id == by_slug


def test_list_products_paginates(client, admin_headers):
    for i in range(3):
        _create(client, admin_headers, title=f"Shirt {i}", images=[])

    res = client.get("/api/products", params={"limit": 2, "offset": 0})
    assert res.status_code == 200
    assert [p["title"] for p in res.json()] == ["Shirt 0", "Shirt 1"]

    res = client.get("/api/products", params={"limit": 0})
    assert res.status_code == 422


def test_unknown_product_is_404(client, admin_headers):
    assert client.get("/api/products/nothing-here").status_code == 404
    missing = str(uuid.uuid4())
    assert client.get(f"/api/products/{missing}").status_code == 404
    res = client.patch(f"/api/products/{missing}", json={"title": "x"}, headers=admin_headers)
    assert res.status_code == 404
    assert client.delete(f"/api/products/{missing}", headers=admin_headers).status_code == 404


def test_patch_replaces_images_and_keeps_them_on_scalar_patch(client, admin_headers):
    pid = _create(client, admin_headers)["id"]

    res = client.patch(f"/api/products/{pid}", json={"images": ["c.png"]}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["images"] == ["c.png"]

    res = client.patch(f"/api/products/{pid}", json={"title": "Shirt V2"}, headers=admin_headers)
    assert res.status_code == 200

    body = client.get(f"/api/products/{pid}").json()
    assert body["title"] == "Shirt V2"
    assert body["images"] == ["c.png"]


def test_duplicate_title_is_400(client, admin_headers):
    _create(client, admin_headers)
    res = client.post("/api/products", json={**SHIRT, "slug": "other"}, headers=admin_headers)
    assert res.status_code == 400
    assert "title" in res.json()["detail"]


def test_invalid_gender_is_422(client, admin_headers):
    res = client.post("/api/products", json={**SHIRT, "gender": "robot"}, headers=admin_headers)
    assert res.status_code == 422


def test_delete_product(client, admin_headers):
    pid = _create(client, admin_headers)["id"]
    res = client.delete(f"/api/products/{pid}", headers=admin_headers)
    assert res.status_code == 204
    assert client.get(f"/api/products/{pid}").status_code == 404


def test_blank_slug_or_title_is_422(client, admin_headers):
    pid = _create(client, admin_headers)["id"]

    for slug in ("", "   ", "'"):
        res = client.patch(f"/api/products/{pid}", json={"slug": slug}, headers=admin_headers)
        assert res.status_code == 422
    assert client.get(f"/api/products/{pid}").json()["slug"] == "shirt"

    res = client.post("/api/products", json={**SHIRT, "title": "   "}, headers=admin_headers)
    assert res.status_code == 422
    res = client.patch(f"/api/products/{pid}", json={"title": "  "}, headers=admin_headers)
    assert res.status_code == 422

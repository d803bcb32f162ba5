from conftest import make_ingredient, make_recipe


def test_create_ingredient(client, auth_headers):
    res = client.post("/api/ingredients", json={"data": {"name": "flour"}}, headers=auth_headers)
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["documentId"] == f"ingredient_{data['id']}"
    assert data["attributes"] == {"name": "flour"}


def test_legacy_nom_field_is_accepted(client, auth_headers):
    res = client.post("/api/ingredients", json={"data": {"nom": "farine"}}, headers=auth_headers)
    assert res.status_code == 201
    assert res.json()["data"]["attributes"]["name"] == "farine"


def test_name_wins_over_nom(client, auth_headers):
    res = client.post(
        "/api/ingredients",
        json={"data": {"name": "sugar", "nom": "sucre"}},
        headers=auth_headers,
    )
    assert res.status_code == 201
    assert res.json()["data"]["attributes"]["name"] == "sugar"


def test_create_without_name_is_400(client, auth_headers):
    assert client.post("/api/ingredients", json={"data": {}}, headers=auth_headers).status_code == 400
    assert client.post("/api/ingredients", json={"data": {"name": ""}}, headers=auth_headers).status_code == 400
    assert client.post("/api/ingredients", json={}, headers=auth_headers).status_code == 400


def test_get_by_id_and_document_id(client, auth_headers):
    created = make_ingredient(client, auth_headers, "salt")
    by_id = client.get(f"/api/ingredients/{created['id']}", headers=auth_headers)
    by_doc = client.get(f"/api/ingredients/{created['documentId']}", headers=auth_headers)
    assert by_id.json() == by_doc.json() == {"data": created}
    assert client.get("/api/ingredients/ingredient_404", headers=auth_headers).status_code == 404


def test_update_with_either_field_name(client, auth_headers):
    created = make_ingredient(client, auth_headers, "salt")

    res = client.put(f"/api/ingredients/{created['id']}", json={"data": {"nom": "sel"}}, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["data"]["attributes"]["name"] == "sel"

    res = client.put(f"/api/ingredients/{created['documentId']}", json={"data": {}}, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["data"]["attributes"]["name"] == "sel"

    assert client.put("/api/ingredients/77", json={"data": {"name": "x"}}, headers=auth_headers).status_code == 404


def test_list_pagination_and_name_filter(client, auth_headers):
    for name in ("egg", "milk", "egg"):
        make_ingredient(client, auth_headers, name)

    page = client.get("/api/ingredients?page=1&pageSize=2", headers=auth_headers).json()
    assert len(page["data"]) == 2
    assert page["meta"]["pagination"] == {"page": 1, "pageSize": 2, "pageCount": 2, "total": 3}

    eggs = client.get("/api/ingredients", params={"filters[name][$eq]": "egg"}, headers=auth_headers).json()
    assert [i["attributes"]["name"] for i in eggs["data"]] == ["egg", "egg"]
    assert eggs["meta"]["pagination"]["total"] == 2


def test_populate_recipes(client, auth_headers):
    recipe = make_recipe(client, auth_headers, title="Omelette", budget=5)
    egg = make_ingredient(client, auth_headers, "egg")
    client.post(f"/api/recipe-ingredients/recipe/{recipe['id']}/ingredient/{egg['id']}", headers=auth_headers)

    res = client.get(f"/api/ingredients/{egg['id']}?populate=recipes", headers=auth_headers)
    linked = res.json()["data"]["attributes"]["recipes"]["data"]
    assert linked == [recipe]

    listing = client.get("/api/ingredients?populate=*", headers=auth_headers).json()
    assert listing["data"][0]["attributes"]["recipes"]["data"] == [recipe]


def test_delete_ingredient_cascades_links(client, auth_headers):
    recipe = make_recipe(client, auth_headers)
    egg = make_ingredient(client, auth_headers, "egg")
    client.post(f"/api/recipe-ingredients/recipe/{recipe['id']}/ingredient/{egg['id']}", headers=auth_headers)

    assert client.delete(f"/api/ingredients/{egg['documentId']}", headers=auth_headers).status_code == 204
    assert client.delete(f"/api/ingredients/{egg['id']}", headers=auth_headers).status_code == 404

    res = client.get(f"/api/recipe-ingredients/recipe/{recipe['id']}/ingredients", headers=auth_headers)
    assert res.json() == []


def test_ingredients_require_token(client):
    assert client.get("/api/ingredients").status_code == 401


def test_unusual_identifiers_are_404(client, auth_headers):
    make_ingredient(client, auth_headers, "salt")
    for identifier in ("²", "9" * 25):
        assert client.get(f"/api/ingredients/{identifier}", headers=auth_headers).status_code == 404
        assert client.delete(f"/api/ingredients/{identifier}", headers=auth_headers).status_code == 404


def test_name_is_stored_as_sent(client, auth_headers):
    created = make_ingredient(client, auth_headers, " salt ")
    assert created["attributes"]["name"] == " salt "

    res = client.put(f"/api/ingredients/{created['id']}", json={"data": {"name": "pepper "}}, headers=auth_headers)
    assert res.json()["data"]["attributes"]["name"] == "pepper "

    res = client.post("/api/ingredients", json={"data": {"name": "   "}}, headers=auth_headers)
    assert res.status_code == 400

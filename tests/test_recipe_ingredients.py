from conftest import make_ingredient, make_recipe


def _link(client, headers, recipe_id, ingredient_id):
    return client.post(f"/api/recipe-ingredients/recipe/{recipe_id}/ingredient/{ingredient_id}", headers=headers)


def _ingredients_of(client, headers, recipe_id):
    res = client.get(f"/api/recipe-ingredients/recipe/{recipe_id}/ingredients", headers=headers)
    assert res.status_code == 200
    return res.json()


def test_link_twice_conflicts(client, auth_headers):
    recipe = make_recipe(client, auth_headers)
    flour = make_ingredient(client, auth_headers, "flour")

    first = _link(client, auth_headers, recipe["id"], flour["id"])
    assert first.status_code == 201
    assert first.json()["recipeId"] == recipe["id"]
    assert first.json()["ingredientId"] == flour["id"]

    second = _link(client, auth_headers, recipe["id"], flour["id"])
    assert second.status_code == 400
    assert second.json()["detail"] == "This ingredient is already associated with this recipe"


def test_list_both_directions(client, auth_headers):
    recipe = make_recipe(client, auth_headers, title="Bread")
    flour = make_ingredient(client, auth_headers, "flour")
    link = _link(client, auth_headers, recipe["id"], flour["id"]).json()

    assert _ingredients_of(client, auth_headers, recipe["id"]) == [
        {"id": flour["id"], "name": "flour", "recipeIngredientId": link["id"]}
    ]

    res = client.get(f"/api/recipe-ingredients/ingredient/{flour['id']}/recipes", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == [{"id": recipe["id"], **recipe["attributes"]}]


def test_deleting_recipe_cascades(client, auth_headers):
    recipe = make_recipe(client, auth_headers)
    flour = make_ingredient(client, auth_headers, "flour")
    _link(client, auth_headers, recipe["id"], flour["id"])

    assert client.delete(f"/api/recipes/{recipe['id']}", headers=auth_headers).status_code == 204
    assert _ingredients_of(client, auth_headers, recipe["id"]) == []

    res = client.get(f"/api/recipe-ingredients/ingredient/{flour['id']}/recipes", headers=auth_headers)
    assert res.json() == []


def test_link_many(client, auth_headers):
    recipe = make_recipe(client, auth_headers)
    ids = [make_ingredient(client, auth_headers, n)["id"] for n in ("a", "b", "c")]

    res = client.post(
        f"/api/recipe-ingredients/recipe/{recipe['id']}/ingredients",
        json={"ingredientIds": ids},
        headers=auth_headers,
    )
    assert res.status_code == 201
    assert res.json() == {
        "message": "3 ingredients added to recipe successfully",
        "recipeId": recipe["id"],
        "addedIngredientIds": ids,
    }
    assert sorted(i["id"] for i in _ingredients_of(client, auth_headers, recipe["id"])) == sorted(ids)


def test_link_many_rejects_non_array(client, auth_headers):
    recipe = make_recipe(client, auth_headers)
    url = f"/api/recipe-ingredients/recipe/{recipe['id']}/ingredients"

    res = client.post(url, json={"ingredientIds": 3}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["detail"] == "ingredientIds must be an array"

    assert client.post(url, json={}, headers=auth_headers).status_code == 400
    assert client.post(url, json={"ingredientIds": ["x"]}, headers=auth_headers).status_code == 400

    for bad in ([1.9], [1.0], [True], ["²"], [None]):
        res = client.post(url, json={"ingredientIds": bad}, headers=auth_headers)
        assert res.status_code == 400
        assert res.json()["detail"] == "ingredientIds must contain integers"
    assert _ingredients_of(client, auth_headers, recipe["id"]) == []


def test_link_many_conflict_is_not_atomic(client, auth_headers):
    recipe = make_recipe(client, auth_headers)
    old = make_ingredient(client, auth_headers, "old")
    new = make_ingredient(client, auth_headers, "new")
    _link(client, auth_headers, recipe["id"], old["id"])

    res = client.post(
        f"/api/recipe-ingredients/recipe/{recipe['id']}/ingredients",
        json={"ingredientIds": [old["id"], new["id"]]},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "One or more ingredients are already associated with this recipe"

    # The non-conflicting insert still landed.
    linked = {i["id"] for i in _ingredients_of(client, auth_headers, recipe["id"])}
    assert linked == {old["id"], new["id"]}


def test_link_to_missing_recipe_is_500(client, auth_headers):
    flour = make_ingredient(client, auth_headers, "flour")
    res = _link(client, auth_headers, 12345, flour["id"])
    assert res.status_code == 500
    assert res.json()["detail"] == "Internal server error"


def test_unlink_is_idempotent(client, auth_headers):
    recipe = make_recipe(client, auth_headers)
    flour = make_ingredient(client, auth_headers, "flour")
    egg = make_ingredient(client, auth_headers, "egg")
    _link(client, auth_headers, recipe["id"], flour["id"])
    _link(client, auth_headers, recipe["id"], egg["id"])

    url = f"/api/recipe-ingredients/recipe/{recipe['id']}/ingredient/{flour['id']}"
    assert client.delete(url, headers=auth_headers).status_code == 204
    assert client.delete(url, headers=auth_headers).status_code == 204
    assert [i["id"] for i in _ingredients_of(client, auth_headers, recipe["id"])] == [egg["id"]]


def test_unlink_all(client, auth_headers):
    recipe = make_recipe(client, auth_headers)
    ids = [make_ingredient(client, auth_headers, n)["id"] for n in ("a", "b")]
    client.post(
        f"/api/recipe-ingredients/recipe/{recipe['id']}/ingredients",
        json={"ingredientIds": ids},
        headers=auth_headers,
    )

    url = f"/api/recipe-ingredients/recipe/{recipe['id']}/ingredients"
    assert client.delete(url, headers=auth_headers).status_code == 204
    assert client.delete(url, headers=auth_headers).status_code == 204
    assert _ingredients_of(client, auth_headers, recipe["id"]) == []

    # Ingredients themselves survive.
    assert client.get(f"/api/ingredients/{ids[0]}", headers=auth_headers).status_code == 200


def test_relationships_require_token(client):
    assert client.get("/api/recipe-ingredients/recipe/1/ingredients").status_code == 401
    assert client.post("/api/recipe-ingredients/recipe/1/ingredient/1").status_code == 401


def test_link_many_accepts_numeric_strings(client, auth_headers):
    recipe = make_recipe(client, auth_headers)
    flour = make_ingredient(client, auth_headers, "flour")
    res = client.post(
        f"/api/recipe-ingredients/recipe/{recipe['id']}/ingredients",
        json={"ingredientIds": [str(flour["id"])]},
        headers=auth_headers,
    )
    assert res.status_code == 201
    assert res.json()["addedIngredientIds"] == [flour["id"]]


def test_out_of_range_ids_are_500(client, auth_headers):
    huge = 10**25
    requests = [
        ("get", f"/api/recipe-ingredients/recipe/{huge}/ingredients", None),
        ("get", f"/api/recipe-ingredients/ingredient/{huge}/recipes", None),
        ("post", f"/api/recipe-ingredients/recipe/{huge}/ingredient/1", None),
        ("post", "/api/recipe-ingredients/recipe/1/ingredients", {"ingredientIds": [huge]}),
        ("delete", f"/api/recipe-ingredients/recipe/{huge}/ingredient/1", None),
        ("delete", f"/api/recipe-ingredients/recipe/{huge}/ingredients", None),
    ]
    for method, url, body in requests:
        res = client.request(method, url, json=body, headers=auth_headers)
        assert res.status_code == 500, url
        assert res.json() == {"detail": "Internal server error"}

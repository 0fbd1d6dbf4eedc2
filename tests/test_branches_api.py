BASE = "/api/v1/branches"


def _main_branch(client, headers):
    branches = client.get(BASE, headers=headers).json()["branches"]
    return next(b for b in branches if b["name"] == "Main Branch")


def test_list_active_branches(client, employee_headers):
    response = client.get(BASE, headers=employee_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert set(body["branches"][0]) == {
        "id", "name", "description", "address", "phone", "email",
        "isActive", "createdAt", "updatedAt",
    }


def test_list_requires_authentication(client):
    assert client.get(BASE).status_code == 401
    assert client.get(f"{BASE}/all").status_code == 401


def test_create_branch(client, admin_headers):
    response = client.post(
        BASE,
        json={"name": "Airport Branch", "email": "airport@restaurant.com", "phone": ""},
        headers=admin_headers,
    )

    assert response.status_code == 201
    branch = response.json()["branch"]
    assert branch["email"] == "airport@restaurant.com"
    assert branch["phone"] is None
    assert branch["isActive"] is True
    assert response.json()["message"] == "Branch created successfully"


def test_create_duplicate_name_case_insensitive(client, admin_headers):
    response = client.post(BASE, json={"name": "main branch"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Branch name already exists"


def test_create_invalid_email(client, admin_headers):
    response = client.post(
        BASE, json={"name": "Airport", "email": "not-an-email"}, headers=admin_headers
    )

    assert response.status_code == 400
    assert [error["field"] for error in response.json()["errors"]] == ["email"]


def test_employee_cannot_create(client, employee_headers):
    response = client.post(BASE, json={"name": "Airport"}, headers=employee_headers)
    assert response.status_code == 403


def test_update_branch_invalid_email(client, admin_headers):
    branch = _main_branch(client, admin_headers)

    response = client.put(
        f"{BASE}/{branch['id']}", json={"email": "not-an-email"}, headers=admin_headers
    )

    assert response.status_code == 400


def test_update_branch_partial(client, admin_headers):
    branch = _main_branch(client, admin_headers)

    response = client.put(
        f"{BASE}/{branch['id']}",
        json={"address": "789 New Road, Seoul", "email": None},
        headers=admin_headers,
    )

    assert response.status_code == 200
    updated = response.json()["branch"]
    assert updated["address"] == "789 New Road, Seoul"
    assert updated["email"] is None
    assert updated["phone"] == branch["phone"]
    assert updated["name"] == branch["name"]
    assert response.json()["message"] == "Branch updated successfully"


def test_update_rename_to_existing(client, admin_headers):
    branch = _main_branch(client, admin_headers)

    response = client.put(
        f"{BASE}/{branch['id']}", json={"name": "DOWNTOWN BRANCH"}, headers=admin_headers
    )

    assert response.status_code == 400


def test_toggle_and_list_all(client, admin_headers):
    branch = _main_branch(client, admin_headers)

    response = client.patch(f"{BASE}/{branch['id']}/toggle-status", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Branch deactivated successfully"
    assert client.get(BASE, headers=admin_headers).json()["total"] == 1
    assert client.get(f"{BASE}/all", headers=admin_headers).json()["total"] == 2
    # Still addressable while inactive.
    assert client.get(f"{BASE}/{branch['id']}", headers=admin_headers).status_code == 200


def test_delete_branch(client, admin_headers):
    branch = _main_branch(client, admin_headers)
    url = f"{BASE}/{branch['id']}"

    assert client.delete(url, headers=admin_headers).json() == {"message": "Branch deleted successfully"}
    assert client.get(url, headers=admin_headers).status_code == 404
    assert client.patch(f"{url}/toggle-status", headers=admin_headers).status_code == 404

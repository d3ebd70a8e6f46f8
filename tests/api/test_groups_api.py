"""Tests for the drug group endpoints and their role gates."""

API = "/api/v1"


def test_list_groups(client):
    body = client.get(f"{API}/groups").json()

    assert body["total"] == 9
    assert body["limit"] == 10
    assert body["items"][0]["id"] == "251"


def test_list_groups_with_filters(client):
    body = client.get(f"{API}/groups", params={"name": "Amoxicillin", "limit": 2}).json()

    assert body["total"] == 3
    assert [g["id"] for g in body["items"]] == ["2001", "2005"]


def test_group_detail_marks_main_member(client):
    body = client.get(f"{API}/groups/2001").json()

    assert [m["id"] for m in body["members"]] == ["2001", "2002"]
    assert [m["is_main"] for m in body["members"]] == [True, False]


def test_business_cannot_delete(client, business):
    response = client.delete(f"{API}/groups/2001", params={"confirm": True}, headers=business)

    assert response.status_code == 403
    assert response.json()["code"] == "PERMISSION_DENIED"


def test_delete_needs_confirmation(client, compliance):
    response = client.delete(f"{API}/groups/2001", headers=compliance)

    assert response.status_code == 428
    assert response.json()["code"] == "CONFIRMATION_REQUIRED"


def test_compliance_deletes_group(client, compliance):
    response = client.delete(f"{API}/groups/2001", params={"confirm": True}, headers=compliance)

    assert response.status_code == 200
    assert client.get(f"{API}/groups/2001").status_code == 404


def test_business_cannot_edit(client, business):
    response = client.patch(f"{API}/groups/2001", json={"name": "x"}, headers=business)

    assert response.status_code == 403


def test_compliance_edits_group(client, compliance):
    response = client.patch(
        f"{API}/groups/2001",
        json={"product_ids": "2001 2002 4001", "main_id": "4001"},
        headers=compliance,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "4001"
    assert [m["is_main"] for m in body["members"]] == [False, False, True]

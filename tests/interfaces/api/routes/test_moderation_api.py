"""API tests for reports, bulk moderation and the featured shelf."""


def _approved_template(client, page_snapshot, name="Bakery Landing"):
    response = client.post(
        "/templates/",
        json={
            "name": name,
            "category": "landing",
            "content": page_snapshot("Text"),
            "created_by": "creator-1",
        },
    )
    assert response.status_code == 201, response.text
    template_id = response.json()["id"]
    response = client.post(
        f"/templates/{template_id}/moderation",
        json={"status": "approved", "moderator_id": "mod"},
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_report_and_dismiss_flow(client, page_snapshot):
    template = _approved_template(client, page_snapshot)

    response = client.post(
        f"/templates/{template['id']}/reports",
        json={"reporter_id": "ana", "reason": "Spam"},
    )
    assert response.status_code == 201, response.text
    report = response.json()
    assert report["status"] == "open"
    assert client.get(f"/templates/{template['id']}").json()["status"] == "flagged"

    duplicate = client.post(
        f"/templates/{template['id']}/reports",
        json={"reporter_id": "ana", "reason": "Spam"},
    )
    assert duplicate.status_code == 400

    queue = client.get("/moderation/reports").json()
    assert [item["id"] for item in queue["items"]] == [report["id"]]

    response = client.post(
        f"/moderation/reports/{report['id']}/resolve",
        json={"resolution": "dismiss", "moderator_id": "mod"},
    )
    assert response.status_code == 200, response.text
    assert response.json()["status"] == "dismissed"
    assert client.get(f"/templates/{template['id']}").json()["status"] == "approved"
    assert client.get("/moderation/reports").json()["items"] == []
    assert len(client.get("/moderation/reports", params={"status": "all"}).json()["items"]) == 1


def test_report_errors_map_to_http_statuses(client, page_snapshot):
    template = _approved_template(client, page_snapshot)

    assert (
        client.post(
            "/templates/999/reports", json={"reporter_id": "ana", "reason": "Spam"}
        ).status_code
        == 404
    )
    assert (
        client.post(
            "/moderation/reports/999/resolve",
            json={"resolution": "uphold", "moderator_id": "mod"},
        ).status_code
        == 404
    )
    report = client.post(
        f"/templates/{template['id']}/reports",
        json={"reporter_id": "ana", "reason": "Spam"},
    ).json()
    assert (
        client.post(
            f"/moderation/reports/{report['id']}/resolve",
            json={"resolution": "ignore", "moderator_id": "mod"},
        ).status_code
        == 400
    )
    assert client.get("/moderation/reports", params={"status": "closed"}).status_code == 400


def test_bulk_moderation_and_stats(client, page_snapshot):
    first = client.post(
        "/templates/",
        json={
            "name": "One",
            "category": "landing",
            "content": page_snapshot("Text"),
            "created_by": "creator-1",
        },
    ).json()

    response = client.post(
        "/moderation/bulk",
        json={"template_ids": [first["id"], 999], "status": "rejected", "moderator_id": "mod"},
    )

    assert response.status_code == 200, response.text
    results = response.json()
    assert results[0] == {
        "template_id": first["id"],
        "success": True,
        "status": "rejected",
        "error": None,
    }
    assert results[1]["success"] is False
    assert "not found" in results[1]["error"]
    assert (
        client.post(
            "/moderation/bulk",
            json={"template_ids": [], "status": "rejected", "moderator_id": "mod"},
        ).status_code
        == 400
    )

    stats = client.get("/moderation/stats", params={"days": 7}).json()
    assert stats["total_actions"] == 1
    assert stats["rejected"] == 1
    assert stats["top_moderators"] == [{"moderator_id": "mod", "actions": 1}]
    assert client.get("/moderation/stats", params={"days": 0}).status_code == 400


def test_featured_shelf(client, page_snapshot):
    template = _approved_template(client, page_snapshot)

    response = client.put(f"/templates/{template['id']}/featured", json={"featured": True})
    assert response.status_code == 200, response.text
    assert response.json()["manually_featured"] is True
    assert response.json()["featured_at"] is not None

    shelf = client.get("/templates/featured").json()
    assert [item["id"] for item in shelf] == [template["id"]]

    response = client.put(f"/templates/{template['id']}/featured", json={"featured": False})
    assert response.json()["manually_featured"] is False
    assert client.get("/templates/featured").json() == []
    assert client.put("/templates/999/featured", json={"featured": True}).status_code == 404

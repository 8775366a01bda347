"""API tests for template, rating and comment endpoints."""

from decimal import Decimal


def _submit(client, page_snapshot, **overrides):
    payload = {
        "name": "Bakery Landing",
        "category": "landing",
        "content": page_snapshot("Text", "Image"),
        "created_by": "creator-1",
        "tags": ["Food"],
    }
    payload.update(overrides)
    response = client.post("/templates/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _approve(client, template_id):
    response = client.post(
        f"/templates/{template_id}/moderation",
        json={"status": "approved", "moderator_id": "mod"},
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_submit_and_read_template(client, page_snapshot):
    created = _submit(client, page_snapshot, price=None)

    assert created["status"] == "pending"
    assert created["visibility"] == "unlisted"
    assert created["current_version"] == "1.0.0"
    assert created["tags"] == ["food"]
    assert created["ai_metadata"]["has_images"] is True
    assert Decimal(str(created["price"])) == Decimal("0")

    response = client.get(f"/templates/{created['id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Bakery Landing"


def test_invalid_submission_returns_400(client, page_snapshot):
    response = client.post(
        "/templates/",
        json={
            "name": "Shop",
            "category": "games",
            "content": page_snapshot("Text"),
            "created_by": "creator-1",
        },
    )

    assert response.status_code == 400
    assert "category" in response.json()["detail"]


def test_unknown_template_returns_404(client):
    assert client.get("/templates/999").status_code == 404
    assert client.delete("/templates/999").status_code == 404


def test_moderation_queue_and_listing(client, page_snapshot):
    pending = _submit(client, page_snapshot)
    approved = _approve(client, _submit(client, page_snapshot, name="Other")["id"])

    queue = client.get("/templates/moderation", params={"status": "pending"}).json()
    assert [item["id"] for item in queue["items"]] == [pending["id"]]

    listing = client.patch(
        f"/templates/{approved['id']}/listing",
        json={"template_type": "paid", "price": "15.00"},
    )
    assert listing.status_code == 200
    assert Decimal(str(listing.json()["price"])) == Decimal("15.00")

    rejected = client.patch(f"/templates/{approved['id']}/listing", json={"unknown": 1})
    assert rejected.status_code == 422


def test_list_templates_paginates(client, page_snapshot):
    for index in range(3):
        _approve(client, _submit(client, page_snapshot, name=f"T{index}")["id"])

    first = client.get("/templates/", params={"limit": 2}).json()
    second = client.get(
        "/templates/", params={"limit": 2, "cursor": first["next_cursor"]}
    ).json()

    assert [item["name"] for item in first["items"]] == ["T2", "T1"]
    assert [item["name"] for item in second["items"]] == ["T0"]
    assert second["next_cursor"] is None
    assert client.get("/templates/", params={"cursor": "???"}).status_code == 400


def test_ratings_flow(client, page_snapshot):
    template = _approve(client, _submit(client, page_snapshot)["id"])
    url = f"/templates/{template['id']}/ratings"

    for index, score in enumerate([5, 5, 5, 4, 5, 5, 5, 5, 4, 5]):
        response = client.post(url, json={"user_id": f"user-{index}", "score": score})
        assert response.status_code == 200, response.text

    quality = response.json()
    assert quality == {
        "average": 4.8,
        "wilson_lower_bound": 3.34,
        "total_ratings": 10,
        "is_quality_for_ai": True,
        "is_featured": False,
    }
    assert len(client.get(url).json()) == 10
    assert client.post(f"{url}/recompute").json() == quality
    assert client.post(url, json={"user_id": "late", "score": 9}).status_code == 400

    ai_ready = client.get("/templates/ai-quality").json()
    assert [item["id"] for item in ai_ready] == [template["id"]]


def test_usage_growth_and_stats(client, page_snapshot):
    template = _approve(
        client,
        _submit(client, page_snapshot, template_type="paid", price="10.00")["id"],
    )
    template_url = f"/templates/{template['id']}"

    assert client.post(f"{template_url}/usage", json={"action": "download"}).status_code == 204
    assert client.post(f"{template_url}/usage", json={"action": "share"}).status_code == 400
    assert client.put(f"{template_url}/growth-rate", json={"growth_rate": 2.5}).status_code == 204

    refreshed = client.get(template_url).json()
    assert refreshed["download_count"] == 1
    assert refreshed["growth_rate"] == 2.5

    stats = client.get("/templates/stats").json()
    assert stats["total_templates"] == 1
    assert stats["approved"] == 1
    assert stats["total_downloads"] == 1
    assert Decimal(str(stats["total_revenue"])) == Decimal("10.00")


def test_content_update_creates_a_version(client, page_snapshot):
    template = _submit(client, page_snapshot)

    response = client.put(
        f"/templates/{template['id']}/content",
        json={"content": page_snapshot("Text", "CraftButton"), "author_id": "editor"},
    )

    assert response.status_code == 200
    assert response.json()["version"] == "1.1.0"
    assert client.get(f"/templates/{template['id']}").json()["version_count"] == 1


def test_comments_and_delete(client, page_snapshot):
    template = _submit(client, page_snapshot)
    url = f"/templates/{template['id']}/comments"

    created = client.post(url, json={"user_id": "ana", "comment": "Lovely"})
    assert created.status_code == 201
    assert client.post(url, json={"user_id": "ana", "comment": " "}).status_code == 400
    assert [comment["comment"] for comment in client.get(url).json()] == ["Lovely"]

    assert client.delete(f"/templates/{template['id']}").status_code == 204
    assert client.get(url).status_code == 404

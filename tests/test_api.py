"""HTTP tests for the directory API."""

import uuid

from app.schemas.platform import Pricing
from app.schemas.review import ReviewCreate

SUBMISSION = {
    "name": "Canvasly",
    "description": "Canvasly turns short prompts into illustrations and product photos.",
    "url": "https://canvasly.example.com",
    "tags": ["Image Generation"],
    "custom_tags": "Design",
    "features": "Text to image\nBackground removal",
    "api_available": True,
    "pricing": {"has_free": True, "free_description": "25 images a month"},
}

REVIEW = {"user_name": "Jordan", "rating": 5, "comment": "Quick results and a clean API."}


def test_health(client) -> None:
    assert client.get("/").json() == {"status": "ok"}


class TestSubmissionFlow:
    """Submit -> approve -> visible."""

    def test_submitted_platform_waits_for_approval(self, client, admin_headers) -> None:
        r = client.post("/platforms", json=SUBMISSION)
        assert r.status_code == 201
        created = r.json()
        assert created["approved"] is False
        assert created["tags"] == ["Image Generation", "Design"]
        assert created["pricing"]["hasFree"] is True

        assert client.get("/platforms").json()["total"] == 0
        assert client.get(f"/platforms/{created['id']}").status_code == 404

        pending = client.get("/admin/platforms/pending", headers=admin_headers).json()
        assert [p["id"] for p in pending] == [created["id"]]

        r = client.post(f"/admin/platforms/{created['id']}/approve", headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["state"] == "APPROVED"
        # approving again is a no-op
        assert client.post(f"/admin/platforms/{created['id']}/approve", headers=admin_headers).status_code == 200

        listed = client.get("/platforms").json()
        assert [p["id"] for p in listed["items"]] == [created["id"]]

    def test_invalid_submission(self, client) -> None:
        r = client.post("/platforms", json={**SUBMISSION, "description": "short"})
        assert r.status_code == 422


class TestDirectory:
    """Listing, filtering, search and compare."""

    def test_search_tag_and_pagination(self, client, add_platform) -> None:
        add_platform("Ledger", tags=["Finance"])
        add_platform("Pixel Forge", tags=["Image Generation", "API"], api_available=True, pricing=Pricing(has_free=True))
        add_platform("Sketchbook", tags=["Image Generation"])

        body = client.get("/platforms", params={"q": "free api image generation"}).json()
        assert [p["name"] for p in body["items"]] == ["Pixel Forge", "Sketchbook"]
        assert body["total"] == 2

        body = client.get("/platforms", params={"tag": "Finance"}).json()
        assert [p["name"] for p in body["items"]] == ["Ledger"]

        body = client.get("/platforms", params={"page": 2, "page_size": 2}).json()
        assert body["total"] == 3
        assert len(body["items"]) == 1

    def test_search_endpoint_returns_scores(self, client, add_platform) -> None:
        add_platform("Pixel Forge", tags=["Image Generation", "API"], api_available=True, pricing=Pricing(has_free=True))
        add_platform("Ledger", tags=["Finance"])

        hits = client.get("/search", params={"q": "free api image generation"}).json()
        assert [(h["platform"]["name"], h["score"]) for h in hits] == [("Pixel Forge", 30)]

        everything = client.get("/search", params={"q": "  "}).json()
        assert len(everything) == 2
        assert {h["score"] for h in everything} == {0}

    def test_compare_skips_missing(self, client, add_platform) -> None:
        a = add_platform("Alpha")
        b = add_platform("Beta")
        r = client.get("/platforms/compare", params=[("id", str(a.id)), ("id", str(uuid.uuid4())), ("id", str(b.id))])
        assert [p["name"] for p in r.json()] == ["Alpha", "Beta"]

    def test_tags(self, client, add_platform, store) -> None:
        add_platform("Alpha", tags=["NLP", "API"])
        store.add_predefined_tag("Writing")
        assert client.get("/tags").json() == ["API", "NLP"]
        assert client.get("/tags/predefined").json() == ["Writing"]


class TestReviews:
    """Public review endpoints."""

    def test_review_updates_rating(self, client, add_platform) -> None:
        p = add_platform()
        for stars in (5, 4, 3):
            r = client.post(f"/platforms/{p.id}/reviews", json={**REVIEW, "rating": stars})
            assert r.status_code == 201

        detail = client.get(f"/platforms/{p.id}").json()
        assert (detail["rating"], detail["review_count"]) == (4.0, 3)

    def test_review_validation(self, client, add_platform) -> None:
        p = add_platform()
        assert client.post(f"/platforms/{p.id}/reviews", json={**REVIEW, "rating": 6}).status_code == 422
        assert client.post(f"/platforms/{p.id}/reviews", json={**REVIEW, "comment": "meh"}).status_code == 422

    def test_review_for_missing_platform(self, client) -> None:
        assert client.post(f"/platforms/{uuid.uuid4()}/reviews", json=REVIEW).status_code == 404

    def test_flagged_review_is_hidden_but_counted(self, client, add_platform) -> None:
        p = add_platform()
        bad = client.post(f"/platforms/{p.id}/reviews", json={**REVIEW, "rating": 1}).json()
        client.post(f"/platforms/{p.id}/reviews", json=REVIEW)

        assert client.post(f"/reviews/{bad['id']}/flag").status_code == 200
        assert client.post(f"/reviews/{bad['id']}/flag").status_code == 200

        visible = client.get(f"/platforms/{p.id}/reviews").json()
        assert [r["rating"] for r in visible] == [5]
        detail = client.get(f"/platforms/{p.id}").json()
        assert (detail["rating"], detail["review_count"]) == (3.0, 2)

    def test_flag_missing_review(self, client) -> None:
        assert client.post(f"/reviews/{uuid.uuid4()}/flag").status_code == 404


class TestAdmin:
    """Admin endpoints."""

    def test_requires_token(self, client, admin_headers) -> None:
        assert client.get("/admin/reviews/flagged").status_code == 401
        assert client.get("/admin/reviews/flagged", headers={"X-Admin-Token": "nope"}).status_code == 403
        bearer = {"Authorization": f"Bearer {admin_headers['X-Admin-Token']}"}
        assert client.get("/admin/reviews/flagged", headers=bearer).status_code == 200

    def test_resolve_flagged_reviews(self, client, admin_headers, add_platform, store) -> None:
        p = add_platform()
        keep = store.insert_review(p.id, ReviewCreate(**REVIEW))
        drop = store.insert_review(p.id, ReviewCreate(**REVIEW))
        client.post(f"/reviews/{keep.id}/flag")
        client.post(f"/reviews/{drop.id}/flag")

        flagged = client.get("/admin/reviews/flagged", headers=admin_headers).json()
        assert {r["id"] for r in flagged} == {str(keep.id), str(drop.id)}

        assert client.post(f"/admin/reviews/{keep.id}/approve", headers=admin_headers).json()["state"] == "APPROVED"
        assert client.post(f"/admin/reviews/{drop.id}/reject", headers=admin_headers).json()["state"] == "REJECTED"
        assert client.post(f"/admin/reviews/{drop.id}/approve", headers=admin_headers).status_code == 409

        assert client.get("/admin/reviews/flagged", headers=admin_headers).json() == []
        visible = client.get(f"/platforms/{p.id}/reviews").json()
        assert [r["id"] for r in visible] == [str(keep.id)]

    def test_unflagged_review_conflict(self, client, admin_headers, add_platform, store) -> None:
        p = add_platform()
        r = store.insert_review(p.id, ReviewCreate(**REVIEW))
        assert client.post(f"/admin/reviews/{r.id}/reject", headers=admin_headers).status_code == 409
        assert client.post(f"/admin/reviews/{uuid.uuid4()}/reject", headers=admin_headers).status_code == 404

    def test_delete_platform(self, client, admin_headers, add_platform, store) -> None:
        p = add_platform()
        store.insert_review(p.id, ReviewCreate(**REVIEW))

        r = client.delete(f"/admin/platforms/{p.id}", headers=admin_headers)
        assert r.json()["state"] == "DELETED"
        assert client.get(f"/platforms/{p.id}").status_code == 404
        assert store.fetch_reviews_for_platform(p.id) == []
        assert client.delete(f"/admin/platforms/{p.id}", headers=admin_headers).status_code == 404

    def test_bulk_approve(self, client, admin_headers, add_platform) -> None:
        a = add_platform("A", approved=False)
        b = add_platform("B", approved=True)
        missing = uuid.uuid4()
        r = client.post(
            "/admin/platforms/approve",
            json={"platform_ids": [str(a.id), str(b.id), str(missing)]},
            headers=admin_headers,
        )
        body = r.json()
        assert body["approved"] == 2
        assert body["skipped_items"] == [{"id": str(missing), "state": None, "reason": "Platform not found"}]

    def test_edit_platform(self, client, admin_headers, add_platform) -> None:
        p = add_platform()
        r = client.patch(
            f"/platforms/{p.id}",
            json={"features": ["Batch mode"], "pricing": {"hasFree": True}},
            headers=admin_headers,
        )
        assert r.status_code == 200
        assert r.json()["features"] == ["Batch mode"]
        assert r.json()["pricing"]["hasFree"] is True

        assert client.patch(f"/platforms/{p.id}", json={"name": "X2"}).status_code == 401
        assert client.patch(f"/platforms/{uuid.uuid4()}", json={"name": "Ghost"}, headers=admin_headers).status_code == 404

    def test_add_predefined_tag(self, client, admin_headers) -> None:
        r = client.post("/admin/tags", json={"name": "Robotics"}, headers=admin_headers)
        assert r.status_code == 201
        assert client.get("/tags/predefined").json() == ["Robotics"]

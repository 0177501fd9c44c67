"""Tests for the feedback and comments HTTP API."""

from fastapi.testclient import TestClient

from cli.config_models import FeedbackConfig, ServerConfig, StorageConfig, SupportConfig
from web.deps import get_feedback_store
from web.feedback_store import FeedbackStore


class BrokenStore(FeedbackStore):
    def get_aggregate(self, resource_id):
        raise RuntimeError("disk on fire")


class TestFeedbackRoutes:
    def test_fetch_one_defaults(self, client, visitor_headers):
        resp = client.get("/feedback/mind", headers=visitor_headers)
        assert resp.status_code == 200
        assert resp.json() == {"resourceId": "mind", "likes": 0, "dislikes": 0, "userVote": None, "commentCount": 0}

    def test_vote_toggle(self, client, visitor_headers):
        resp = client.post("/feedback/mind/vote", json={"vote": "like"}, headers=visitor_headers)
        assert resp.status_code == 200
        assert resp.json()["likes"] == 1
        assert resp.json()["userVote"] == "like"

        resp = client.post("/feedback/mind/vote", json={"vote": "like"}, headers=visitor_headers)
        assert resp.json()["likes"] == 0
        assert resp.json()["userVote"] is None

    def test_switch_vote(self, client, visitor_headers):
        client.post("/feedback/mind/vote", json={"vote": "like"}, headers=visitor_headers)
        body = client.post("/feedback/mind/vote", json={"vote": "dislike"}, headers=visitor_headers).json()
        assert (body["likes"], body["dislikes"], body["userVote"]) == (0, 1, "dislike")

    def test_null_vote_retracts(self, client, visitor_headers):
        client.post("/feedback/mind/vote", json={"vote": "dislike"}, headers=visitor_headers)
        body = client.post("/feedback/mind/vote", json={"vote": None}, headers=visitor_headers).json()
        assert (body["dislikes"], body["userVote"]) == (0, None)

    def test_user_vote_is_per_visitor(self, client, visitor_headers):
        client.post("/feedback/mind/vote", json={"vote": "like"}, headers=visitor_headers)
        other = client.get("/feedback/mind", headers={"X-Visitor-Id": "v_2_other"}).json()
        assert other["likes"] == 1
        assert other["userVote"] is None

    def test_missing_visitor_header_is_anonymous(self, client, feedback_store):
        client.post("/feedback/mind/vote", json={"vote": "like"})
        assert feedback_store.get_vote("anonymous", "mind") == "like"

    def test_invalid_vote_is_400(self, client, visitor_headers):
        resp = client.post("/feedback/mind/vote", json={"vote": "love"}, headers=visitor_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": 'Invalid vote. Must be "like", "dislike", or null'}
        assert client.get("/feedback/mind", headers=visitor_headers).json()["likes"] == 0

    def test_missing_vote_key_is_400_and_keeps_vote(self, client, feedback_store, visitor_headers):
        client.post("/feedback/mind/vote", json={"vote": "like"}, headers=visitor_headers)
        resp = client.post("/feedback/mind/vote", json={}, headers=visitor_headers)
        assert resp.status_code == 400
        assert "error" in resp.json()
        assert feedback_store.get_vote("v_1700000000000_abc123def", "mind") == "like"
        assert client.get("/feedback/mind", headers=visitor_headers).json()["likes"] == 1

    def test_wrong_type_vote_is_400(self, client, visitor_headers):
        resp = client.post("/feedback/mind/vote", json={"vote": 1}, headers=visitor_headers)
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_malformed_body_is_400(self, client, visitor_headers):
        resp = client.post(
            "/feedback/mind/vote",
            content="not json",
            headers={**visitor_headers, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400

    def test_fetch_all(self, client, visitor_headers):
        client.post("/feedback/mind/vote", json={"vote": "like"}, headers=visitor_headers)
        client.post("/comments/cruse", json={"text": "Helped me"}, headers=visitor_headers)
        body = client.get("/feedback").json()
        assert body == {
            "feedback": {
                "mind": {"likes": 1, "dislikes": 0, "commentCount": 0},
                "cruse": {"likes": 0, "dislikes": 0, "commentCount": 1},
            }
        }

    def test_resource_id_with_encoded_characters(self, client, visitor_headers):
        client.post("/feedback/what-s%20your%20grief/vote", json={"vote": "like"}, headers=visitor_headers)
        assert client.get("/feedback/what-s%20your%20grief").json()["resourceId"] == "what-s your grief"


class TestCommentRoutes:
    def test_add_comment_201(self, client, visitor_headers):
        resp = client.post("/comments/mind", json={"text": "  Very kind staff  "}, headers=visitor_headers)
        assert resp.status_code == 201
        body = resp.json()
        assert set(body) == {"id", "text", "timestamp", "helpful"}
        assert body["text"] == "Very kind staff"
        assert body["helpful"] == 0

    def test_list_newest_first(self, client, visitor_headers):
        client.post("/comments/mind", json={"text": "first"}, headers=visitor_headers)
        client.post("/comments/mind", json={"text": "second"}, headers=visitor_headers)
        body = client.get("/comments/mind").json()
        assert body["resourceId"] == "mind"
        assert [c["text"] for c in body["comments"]] == ["second", "first"]
        assert all("visitor_hash" not in c for c in body["comments"])

    def test_comment_count_in_feedback(self, client, visitor_headers):
        client.post("/comments/mind", json={"text": "ok"}, headers=visitor_headers)
        assert client.get("/feedback/mind").json()["commentCount"] == 1

    def test_too_long_is_400(self, client, visitor_headers):
        resp = client.post("/comments/mind", json={"text": "x" * 501}, headers=visitor_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Comment must be 500 characters or less"}
        assert client.get("/comments/mind").json()["comments"] == []

    def test_blank_is_400(self, client, visitor_headers):
        for body in ({"text": "   "}, {}):
            resp = client.post("/comments/mind", json=body, headers=visitor_headers)
            assert resp.status_code == 400
            assert resp.json() == {"error": "Comment text is required"}

    def test_empty_list(self, client):
        assert client.get("/comments/unknown").json() == {"resourceId": "unknown", "comments": []}


class TestErrors:
    def test_unknown_route_404(self, client):
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Not found"}

    def test_unhandled_error_500(self, app, tmp_path):
        app.dependency_overrides[get_feedback_store] = lambda: BrokenStore(tmp_path / "broken.db")
        try:
            resp = TestClient(app).get("/feedback/mind", headers={"Origin": "https://example.org"})
        finally:
            app.dependency_overrides.clear()
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error", "message": "disk on fire"}
        assert resp.headers["access-control-allow-origin"] == "*"


class TestCors:
    def test_simple_request_has_origin_header(self, client):
        resp = client.get("/feedback", headers={"Origin": "https://example.org"})
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_preflight_allows_visitor_header(self, client):
        resp = client.options(
            "/feedback/mind/vote",
            headers={
                "Origin": "https://example.org",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type,x-visitor-id",
            },
        )
        assert resp.status_code == 200
        assert "x-visitor-id" in resp.headers["access-control-allow-headers"].lower()
        assert "POST" in resp.headers["access-control-allow-methods"]


class TestHealth:
    def test_health_reports_metrics(self, client, visitor_headers):
        client.post("/feedback/mind/vote", json={"vote": "like"}, headers=visitor_headers)
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["metrics"]["counters"]["votes.submitted"] == 1

    def test_lifespan_purges_expired_votes(self, app, feedback_store):
        feedback_store.compare_and_set_vote("v1", "mind", None, "like", retention_days=0)
        app.dependency_overrides[get_feedback_store] = lambda: feedback_store
        try:
            with TestClient(app) as c:
                assert c.get("/health").status_code == 200
        finally:
            app.dependency_overrides.clear()
        assert feedback_store.purge_expired_votes() == 0


class TestAppConfig:
    def test_given_config_reaches_routes(self, tmp_path):
        from web.app import create_app

        config = SupportConfig(
            server=ServerConfig(allowed_origin="https://support.example.org"),
            storage=StorageConfig(db_path=tmp_path / "custom.db", local_state=tmp_path / "state.json"),
            feedback=FeedbackConfig(max_comment_length=10),
        )
        with TestClient(create_app(config)) as c:
            resp = c.post("/comments/mind", json={"text": "x" * 11}, headers={"Origin": "https://support.example.org"})
            assert resp.status_code == 400
            assert resp.headers["access-control-allow-origin"] == "https://support.example.org"
            assert c.post("/feedback/mind/vote", json={"vote": "like"}).status_code == 200

        assert FeedbackStore(tmp_path / "custom.db").get_aggregate("mind").likes == 1

import httpx
import pytest

from studio_eighty7.components.content import ContentFetcher


class TestContentFallback:
    def test_albums_fall_back_with_camel_case_keys(self, client) -> None:
        response = client.get("/api/content/albums")

        assert response.status_code == 200
        body = response.json()
        assert body["provenance"] == "fallback"
        assert [a["title"] for a in body["data"]] == [
            "Katana Dreams",
            "Blade Runner",
            "Ronin Mode",
            "Shadow Warrior",
        ]
        assert {"trackCount", "purchaseUrl"} <= set(body["data"][0])

    def test_tracks_expose_audio_url(self, client) -> None:
        body = client.get("/api/content/tracks").json()

        assert len(body["data"]) == 5
        assert body["data"][0]["audioUrl"] == ""

    def test_about_is_a_single_item(self, client) -> None:
        body = client.get("/api/content/about").json()

        assert len(body["data"]) == 1
        assert set(body["data"][0]) == {"title", "content", "excerpt"}

    def test_unknown_resource(self, client) -> None:
        response = client.get("/api/content/mixtapes")

        assert response.status_code == 400
        assert response.json()["field"] == "resource"


class TestContentLive:
    def test_live_services(self, app, client, rules, clock) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=[{"id": 3, "title": {"rendered": "Mastering"}, "excerpt": {"rendered": "<p>Loud.</p>"}}],
            )

        app.state.content_source = ContentFetcher(
            httpx.AsyncClient(transport=httpx.MockTransport(handler)),
            rules=rules.content,
            time_port=clock,
        )

        body = client.get("/api/content/services").json()

        assert body == {
            "data": [{"id": "3", "title": "Mastering", "description": "Loud.", "icon": "music"}],
            "provenance": "live",
        }


@pytest.mark.parametrize("resource", ["tracks", "albums", "services", "about"])
def test_content_is_not_rate_limited(client, resource) -> None:
    for _ in range(10):
        assert client.get(f"/api/content/{resource}").status_code == 200

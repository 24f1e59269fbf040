"""Tests for playlist activation, item mutations and version bumps."""

import pytest

from helpers import add_item, create_media, create_playlist, create_tenant, device_playlist, pair_device
from signage_lite.models.playlist import Playlist


@pytest.fixture
def setup(client, tenant_id, paired):
    media_ids = [create_media(client, tenant_id, filename=f"{name}.jpg") for name in ("a", "b", "c")]
    playlist = create_playlist(client, paired["playerId"], name="Main", designWidth=1920, designHeight=1080)
    return {"paired": paired, "media_ids": media_ids, "playlist": playlist, "tenant_id": tenant_id}


def _version(client, headers) -> int:
    return device_playlist(client, headers)["version"]


class TestActivePlaylistPayload:
    def test_new_playlist_starts_at_version_one(self, client, setup):
        playlist = setup["playlist"]
        assert playlist["version"] == 1
        assert playlist["isActive"] is True
        assert playlist["fitMode"] == "CONTAIN"

    def test_payload_lists_items_in_sort_order(self, client, setup):
        playlist_id = setup["playlist"]["id"]
        a, b, c = setup["media_ids"]
        first = add_item(client, playlist_id, a)
        second = add_item(client, playlist_id, b, durationSec=25)
        third = add_item(client, playlist_id, c)

        payload = device_playlist(client, setup["paired"]["headers"])

        assert payload["playerId"] == setup["paired"]["playerId"]
        assert payload["playerName"] == "Lobby"
        assert payload["playlistName"] == "Main"
        assert payload["designWidth"] == 1920
        assert payload["designHeight"] == 1080
        assert [item["id"] for item in payload["items"]] == [first["id"], second["id"], third["id"]]
        assert payload["items"][1] == {
            "id": second["id"],
            "type": "IMAGE",
            "url": "https://cdn.example.com/b.jpg",
            "durationSec": 25,
            "transitionType": "NONE",
            "transitionDurationMs": 0,
        }
        assert payload["items"][0]["durationSec"] == 10

    def test_items_are_appended_after_highest_sort_order(self, client, setup):
        playlist_id = setup["playlist"]["id"]
        a, b, _ = setup["media_ids"]
        first = add_item(client, playlist_id, a)
        client.put(f"/api/admin/playlists/{playlist_id}/reorder", json={"order": [{"id": first["id"], "sortOrder": 40}]})
        second = add_item(client, playlist_id, b)
        assert second["sortOrder"] == 41

    def test_media_from_another_tenant_is_rejected(self, client, setup):
        other_tenant = create_tenant(client, "Other")
        foreign_media = create_media(client, other_tenant, filename="x.jpg")
        response = client.post(
            f"/api/admin/playlists/{setup['playlist']['id']}/items",
            json={"mediaId": foreign_media},
        )
        assert response.status_code == 400
        assert _version(client, setup["paired"]["headers"]) == 1

    def test_unknown_media(self, client, setup):
        response = client.post(f"/api/admin/playlists/{setup['playlist']['id']}/items", json={"mediaId": 9999})
        assert response.status_code == 404


class TestVersionBumps:
    def test_add_item_bumps_once(self, client, setup):
        headers = setup["paired"]["headers"]
        before = _version(client, headers)
        add_item(client, setup["playlist"]["id"], setup["media_ids"][0])
        assert _version(client, headers) == before + 1

    def test_delete_item_bumps_once(self, client, setup):
        headers = setup["paired"]["headers"]
        item = add_item(client, setup["playlist"]["id"], setup["media_ids"][0])
        before = _version(client, headers)

        response = client.delete(f"/api/admin/playlist-items/{item['id']}")

        assert response.json() == {"ok": True}
        payload = device_playlist(client, headers)
        assert payload["version"] == before + 1
        assert payload["items"] == []

    def test_delete_unknown_item(self, client, setup):
        assert client.delete("/api/admin/playlist-items/9999").status_code == 404

    def test_reorder_bumps_once_for_whole_batch(self, client, setup):
        headers = setup["paired"]["headers"]
        playlist_id = setup["playlist"]["id"]
        items = [add_item(client, playlist_id, media_id) for media_id in setup["media_ids"]]
        before = _version(client, headers)

        response = client.put(
            f"/api/admin/playlists/{playlist_id}/reorder",
            json={
                "order": [
                    {"id": items[0]["id"], "sortOrder": 30},
                    {"id": items[1]["id"], "sortOrder": 10},
                    {"id": items[2]["id"], "sortOrder": 20},
                ]
            },
        )

        assert response.json() == {"ok": True}
        payload = device_playlist(client, headers)
        assert payload["version"] == before + 1
        assert [item["id"] for item in payload["items"]] == [items[1]["id"], items[2]["id"], items[0]["id"]]

    def test_reorder_with_ties_is_stable(self, client, setup):
        headers = setup["paired"]["headers"]
        playlist_id = setup["playlist"]["id"]
        items = [add_item(client, playlist_id, media_id) for media_id in setup["media_ids"]]
        client.put(
            f"/api/admin/playlists/{playlist_id}/reorder",
            json={"order": [{"id": item["id"], "sortOrder": 5} for item in items]},
        )
        first = [item["id"] for item in device_playlist(client, headers)["items"]]
        second = [item["id"] for item in device_playlist(client, headers)["items"]]
        assert first == second

    def test_reorder_rejects_non_array(self, client, setup):
        response = client.put(f"/api/admin/playlists/{setup['playlist']['id']}/reorder", json={"order": "nope"})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_reorder_rejects_foreign_items_atomically(self, client, setup):
        headers = setup["paired"]["headers"]
        playlist_id = setup["playlist"]["id"]
        item = add_item(client, playlist_id, setup["media_ids"][0])
        before = _version(client, headers)

        response = client.put(
            f"/api/admin/playlists/{playlist_id}/reorder",
            json={"order": [{"id": item["id"], "sortOrder": 99}, {"id": 9999, "sortOrder": 1}]},
        )

        assert response.status_code == 400
        payload = device_playlist(client, headers)
        assert payload["version"] == before
        items = client.get(f"/api/admin/playlists/{playlist_id}/items").json()
        assert items[0]["sortOrder"] == item["sortOrder"]

    def test_empty_or_unchanged_reorder_does_not_bump(self, client, setup):
        headers = setup["paired"]["headers"]
        playlist_id = setup["playlist"]["id"]
        item = add_item(client, playlist_id, setup["media_ids"][0])
        before = _version(client, headers)

        client.put(f"/api/admin/playlists/{playlist_id}/reorder", json={"order": []})
        client.put(
            f"/api/admin/playlists/{playlist_id}/reorder",
            json={"order": [{"id": item["id"], "sortOrder": item["sortOrder"]}]},
        )

        assert _version(client, headers) == before

    def test_reorder_unknown_playlist(self, client):
        response = client.put("/api/admin/playlists/9999/reorder", json={"order": []})
        assert response.status_code == 404

    def test_transition_update_bumps_and_normalizes(self, client, setup):
        headers = setup["paired"]["headers"]
        item = add_item(client, setup["playlist"]["id"], setup["media_ids"][0])
        before = _version(client, headers)

        response = client.post(
            f"/api/admin/playlist-items/{item['id']}/transition",
            json={"transitionType": "fade", "transitionDurationMs": 25000},
        )

        assert response.status_code == 200
        assert response.json()["transitionType"] == "FADE"
        assert response.json()["transitionDurationMs"] == 10000
        payload = device_playlist(client, headers)
        assert payload["version"] == before + 1
        assert payload["items"][0]["transitionType"] == "FADE"
        assert payload["items"][0]["transitionDurationMs"] == 10000

    def test_transition_with_bogus_type_resets_to_none(self, client, setup):
        item = add_item(client, setup["playlist"]["id"], setup["media_ids"][0])
        client.post(f"/api/admin/playlist-items/{item['id']}/transition", json={"transitionType": "FADE"})

        response = client.post(
            f"/api/admin/playlist-items/{item['id']}/transition",
            json={"transitionType": "wipe", "transitionDurationMs": 800},
        )

        assert response.json()["transitionType"] == "NONE"
        assert response.json()["transitionDurationMs"] == 0

    def test_transition_unknown_item(self, client):
        response = client.post("/api/admin/playlist-items/9999/transition", json={"transitionType": "FADE"})
        assert response.status_code == 404

    def test_fit_mode_change_bumps(self, client, setup):
        headers = setup["paired"]["headers"]
        before = _version(client, headers)

        response = client.post(f"/api/admin/playlists/{setup['playlist']['id']}/fit-mode", json={"fitMode": "cover"})

        assert response.status_code == 200
        assert response.json()["fitMode"] == "COVER"
        assert response.json()["version"] == before + 1
        assert device_playlist(client, headers)["fitMode"] == "COVER"

    def test_unchanged_fit_mode_does_not_bump(self, client, setup):
        headers = setup["paired"]["headers"]
        before = _version(client, headers)
        response = client.post(f"/api/admin/playlists/{setup['playlist']['id']}/fit-mode", json={"fitMode": "bogus"})
        assert response.json()["fitMode"] == "CONTAIN"
        assert _version(client, headers) == before

    def test_fit_mode_unknown_playlist(self, client):
        response = client.post("/api/admin/playlists/9999/fit-mode", json={"fitMode": "COVER"})
        assert response.status_code == 404


class TestActivation:
    def test_activating_switches_the_single_active_playlist(self, client, db, setup):
        player_id = setup["paired"]["playerId"]
        first = setup["playlist"]
        second = create_playlist(client, player_id, name="Evening")
        assert second["isActive"] is False

        response = client.post(f"/api/admin/playlists/{second['id']}/activate")

        assert response.json() == {"ok": True}
        rows = db.query(Playlist).filter(Playlist.player_id == player_id).all()
        active = [row.id for row in rows if row.is_active]
        assert active == [second["id"]]
        assert db.get(Playlist, first["id"]).is_active is False
        assert db.get(Playlist, second["id"]).version == 2

        payload = device_playlist(client, setup["paired"]["headers"])
        assert payload["playlistName"] == "Evening"
        assert payload["version"] == 2

    def test_activation_does_not_touch_other_players(self, client, setup):
        other = pair_device(client, setup["tenant_id"], player_name="Other")
        other_playlist = create_playlist(client, other["playerId"], name="Other main")
        second = create_playlist(client, setup["paired"]["playerId"], name="Evening")

        client.post(f"/api/admin/playlists/{second['id']}/activate")

        assert device_playlist(client, other["headers"])["playlistName"] == other_playlist["name"]

    def test_activate_unknown_playlist(self, client):
        response = client.post("/api/admin/playlists/9999/activate")
        assert response.status_code == 404
        assert response.json() == {"error": "Playlist not found"}

    def test_deleting_active_playlist_returns_empty_payload(self, client, setup):
        add_item(client, setup["playlist"]["id"], setup["media_ids"][0])
        client.delete(f"/api/admin/playlists/{setup['playlist']['id']}")

        payload = device_playlist(client, setup["paired"]["headers"])
        assert payload["version"] == 0
        assert payload["items"] == []


class TestScreenReport:
    def test_screen_size_is_stored_on_player(self, client, tenant_id, paired):
        response = client.post(
            "/api/device/screen",
            json={"screenWidth": 1920, "screenHeight": 1080.0},
            headers=paired["headers"],
        )
        assert response.json() == {"ok": True}

        players = client.get(f"/api/admin/tenants/{tenant_id}/players").json()
        assert players[0]["screenWidth"] == 1920
        assert players[0]["screenHeight"] == 1080

    @pytest.mark.parametrize(
        "body",
        [
            {"screenWidth": "1920", "screenHeight": 1080},
            {"screenWidth": 1920},
            {"screenWidth": None, "screenHeight": 1080},
            {"screenWidth": 1e20, "screenHeight": 1080},
            {"screenWidth": 1920, "screenHeight": -1},
        ],
    )
    def test_screen_size_must_be_numbers(self, client, paired, body):
        response = client.post("/api/device/screen", json=body, headers=paired["headers"])
        assert response.status_code == 400

    def test_screen_requires_token(self, client):
        response = client.post("/api/device/screen", json={"screenWidth": 1, "screenHeight": 1})
        assert response.status_code == 401

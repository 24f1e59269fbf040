"""HTTP helpers shared by the integration tests."""


def create_tenant(client, name: str = "Acme") -> int:
    response = client.post("/api/admin/tenants", json={"name": name})
    assert response.status_code == 201
    return response.json()["id"]


def register_device(client, platform: str = "android", device_name: str | None = "Lobby TV") -> dict:
    response = client.post("/api/devices/register", json={"platform": platform, "deviceName": device_name})
    assert response.status_code == 201
    return response.json()


def pair_device(client, tenant_id: int, player_name: str = "Lobby") -> dict:
    registration = register_device(client)
    response = client.post(
        "/api/players/pair",
        json={
            "pairingCode": registration["pairingCode"],
            "playerName": player_name,
            "tenantId": tenant_id,
        },
    )
    assert response.status_code == 201
    body = response.json()
    body["headers"] = {"Authorization": f"Bearer {body['deviceToken']}"}
    return body


def create_media(client, tenant_id: int, filename: str = "a.jpg", media_type: str = "IMAGE") -> int:
    response = client.post(
        f"/api/admin/tenants/{tenant_id}/media",
        json={
            "filename": filename,
            "url": f"https://cdn.example.com/{filename}",
            "mimeType": "image/jpeg" if media_type == "IMAGE" else "video/mp4",
            "mediaType": media_type,
            "sizeBytes": 2048,
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


def create_playlist(client, player_id: int, name: str = "Main", **extra) -> dict:
    response = client.post(f"/api/admin/players/{player_id}/playlists", json={"name": name, **extra})
    assert response.status_code == 201
    return response.json()


def add_item(client, playlist_id: int, media_id: int, **extra) -> dict:
    response = client.post(f"/api/admin/playlists/{playlist_id}/items", json={"mediaId": media_id, **extra})
    assert response.status_code == 201
    return response.json()


def device_playlist(client, headers: dict) -> dict:
    response = client.get("/api/device/playlist", headers=headers)
    assert response.status_code == 200
    return response.json()

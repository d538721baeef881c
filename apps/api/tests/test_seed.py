from app.seed import DEFAULT_POSITIONS, seed


def test_seed_creates_admin_once_and_allows_login(client, store):
    first = seed(store, "root@example.com", "s3cret")
    again = seed(store, "root@example.com", "s3cret")

    assert first == {"user_created": True, "positions_created": len(DEFAULT_POSITIONS)}
    assert again == {"user_created": False, "positions_created": 0}

    r = client.post("/login", json={"email": "root@example.com", "password": "s3cret"})
    assert r.status_code == 200
    assert r.json()["user"]["role"] == "admin"

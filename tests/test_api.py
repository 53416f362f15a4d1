"""
API endpoint tests.

Payloads and responses use camelCase field names.
"""


def _register(client, username):
    response = client.post("/api/users", json={"username": username})
    assert response.status_code == 200
    return response.json()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_register_user(client):
    user = _register(client, "alice")

    assert user["username"] == "alice"
    assert user["isOnline"] is True
    assert "lastSeen" in user


def test_register_duplicate_username(client):
    _register(client, "alice")

    response = client.post("/api/users", json={"username": "alice"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Username already taken"


def test_read_user(client):
    alice = _register(client, "alice")

    assert client.get(f"/api/users/{alice['id']}").json()["username"] == "alice"
    assert client.get("/api/users/999").status_code == 404


def test_presence_heartbeat(client):
    alice = _register(client, "alice")
    bob = _register(client, "bob")

    response = client.put(f"/api/users/{alice['id']}/status", json={"isOnline": False})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    online = client.get("/api/users/online").json()
    assert [u["id"] for u in online] == [bob["id"]]


def test_heartbeat_for_unknown_user_is_acknowledged(client):
    response = client.put("/api/users/999/status", json={"isOnline": True})

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_direct_chat_and_messages(client):
    alice = _register(client, "alice")
    bob = _register(client, "bob")

    response = client.post(
        "/api/chats/direct", json={"userId1": alice["id"], "userId2": bob["id"]}
    )
    assert response.status_code == 200
    chat = response.json()
    assert chat["type"] == "direct"
    assert chat["unreadCount"] == 0
    assert {m["userId"] for m in chat["members"]} == {alice["id"], bob["id"]}

    again = client.post(
        "/api/chats/direct", json={"userId1": bob["id"], "userId2": alice["id"]}
    ).json()
    assert again["id"] == chat["id"]

    for sender, content in [(alice, "hi"), (bob, "hey")]:
        response = client.post(
            "/api/messages",
            json={"chatId": chat["id"], "senderId": sender["id"], "content": content},
        )
        assert response.status_code == 200
        assert response.json()["content"] == content

    messages = client.get(f"/api/chats/{chat['id']}/messages").json()
    assert [(m["content"], m["sender"]["username"]) for m in messages] == [
        ("hi", "alice"),
        ("hey", "bob"),
    ]

    latest = client.get(f"/api/chats/{chat['id']}/messages", params={"limit": 1}).json()
    assert [m["content"] for m in latest] == ["hey"]

    chats = client.get(f"/api/users/{alice['id']}/chats").json()
    assert [c["id"] for c in chats] == [chat["id"]]
    assert chats[0]["lastMessage"]["content"] == "hey"


def test_self_direct_chat_is_rejected(client):
    alice = _register(client, "alice")

    response = client.post(
        "/api/chats/direct", json={"userId1": alice["id"], "userId2": alice["id"]}
    )

    assert response.status_code == 400


def test_create_group_chat(client):
    alice = _register(client, "alice")
    bob = _register(client, "bob")
    carol = _register(client, "carol")

    response = client.post(
        "/api/chats",
        json={
            "name": "Team",
            "type": "group",
            "createdBy": alice["id"],
            "memberIds": [bob["id"], carol["id"]],
        },
    )

    assert response.status_code == 200
    chat = response.json()
    assert chat["type"] == "group"
    assert chat["name"] == "Team"
    assert [m["userId"] for m in chat["members"]] == [alice["id"], bob["id"], carol["id"]]
    assert client.get(f"/api/chats/{chat['id']}").json()["id"] == chat["id"]


def test_create_group_chat_without_name(client):
    alice = _register(client, "alice")

    response = client.post("/api/chats", json={"type": "group", "createdBy": alice["id"]})

    assert response.status_code == 400


def test_read_unknown_chat(client):
    assert client.get("/api/chats/999").status_code == 404


def test_add_member_and_playback(client):
    alice = _register(client, "alice")
    bob = _register(client, "bob")
    chat = client.post(
        "/api/chats", json={"name": "Music", "type": "group", "createdBy": alice["id"]}
    ).json()

    response = client.post(f"/api/chats/{chat['id']}/members", json={"userId": bob["id"]})
    assert response.status_code == 200
    assert len(response.json()["members"]) == 2

    response = client.put(
        f"/api/chats/{chat['id']}/playback",
        json={"currentSong": "YouTube Song", "songUrl": "https://youtu.be/x", "isPlaying": True},
    )
    assert response.status_code == 200
    assert response.json()["currentSong"] == "YouTube Song"
    assert response.json()["isPlaying"] is True

    assert client.put("/api/chats/999/playback", json={"isPlaying": True}).status_code == 404
    assert client.post("/api/chats/999/members", json={"userId": bob["id"]}).status_code == 404


def test_empty_message_is_rejected(client):
    alice = _register(client, "alice")
    chat = client.post(
        "/api/chats", json={"name": "Team", "type": "group", "createdBy": alice["id"]}
    ).json()

    response = client.post(
        "/api/messages",
        json={"chatId": chat["id"], "senderId": alice["id"], "content": "   "},
    )

    assert response.status_code == 400
    assert client.get(f"/api/chats/{chat['id']}/messages").json() == []


def test_read_message(client):
    alice = _register(client, "alice")
    chat = client.post(
        "/api/chats", json={"name": "Team", "type": "group", "createdBy": alice["id"]}
    ).json()
    message = client.post(
        "/api/messages",
        json={"chatId": chat["id"], "senderId": alice["id"], "content": "hello"},
    ).json()

    assert client.get(f"/api/messages/{message['id']}").json()["content"] == "hello"
    assert client.get("/api/messages/999").status_code == 404


def test_invalid_message_limit(client):
    alice = _register(client, "alice")
    chat = client.post(
        "/api/chats", json={"name": "Team", "type": "group", "createdBy": alice["id"]}
    ).json()

    response = client.get(f"/api/chats/{chat['id']}/messages", params={"limit": 0})

    assert response.status_code == 400

"""Integration tests for post, reply, like and origin endpoints."""

from sqlalchemy import select

from xeoos.db.models import TASK_FAIL, TASK_PENDING, Like, Notice, Post, Reply, Task


class TestCreatePost:
    def test_publish_creates_task_and_dispatches(self, client, db, fakes, make_user, topic, auth_headers):
        user = make_user("alice")

        response = client.post(
            "/api/post/create",
            headers=auth_headers(user),
            json={"title": "Hello", "content": "World", "topic": "python", "lang": "fr-FR"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True

        post = db.get(Post, data["id"])
        assert post.published is True
        assert post.origin == "World"
        assert post.origin_lang == "fr-FR"
        assert [item.name for item in post.topics] == ["python"]

        task = db.get(Task, data["message"])
        assert task.status == TASK_PENDING
        assert task.post_id == post.id
        assert fakes.dispatcher.dispatched == [task.id]

    def test_draft_skips_translation(self, client, db, fakes, make_user, topic, auth_headers):
        user = make_user("alice")

        response = client.post(
            "/api/post/create",
            headers=auth_headers(user),
            json={"title": "Hello", "content": "World", "topic": "python", "draft": True},
        )

        data = response.json()
        assert data["message"] == "Draft saved"
        assert db.get(Post, data["id"]).published is False
        assert db.scalars(select(Task)).all() == []
        assert fakes.dispatcher.dispatched == []

    def test_dispatch_failure_keeps_post_and_fails_task(self, client, db, fakes, make_user, topic, auth_headers):
        fakes.dispatcher.fail = True
        user = make_user("alice")

        response = client.post(
            "/api/post/create",
            headers=auth_headers(user),
            json={"title": "Hello", "content": "World", "topic": "python"},
        )

        assert response.status_code == 200
        db.expire_all()
        assert db.get(Task, response.json()["message"]).status == TASK_FAIL

    def test_missing_fields(self, client, make_user, topic, auth_headers):
        user = make_user("alice")

        response = client.post("/api/post/create", headers=auth_headers(user), json={"title": "Hello"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "missing_fields"

    def test_unknown_topic(self, client, make_user, topic, auth_headers):
        user = make_user("alice")

        response = client.post(
            "/api/post/create",
            headers=auth_headers(user),
            json={"title": "Hello", "content": "World", "topic": "cooking"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "topic_not_found"

    def test_requires_login(self, client):
        response = client.post("/api/post/create", json={"title": "Hello", "content": "World"})

        assert response.status_code == 401

    def test_rate_limit_only_counts_successes(self, client, make_user, topic, auth_headers, monkeypatch):
        from xeoos.core.config import settings

        monkeypatch.setattr(settings.app, "rate_limit_requests", 2)
        headers = auth_headers(make_user("alice"))
        body = {"title": "Hello", "content": "World", "topic": "python"}

        # Failed attempts are free
        for _ in range(3):
            assert client.post("/api/post/create", headers=headers, json={"title": "x"}).status_code == 400

        assert client.post("/api/post/create", headers=headers, json=body).status_code == 200
        assert client.post("/api/post/create", headers=headers, json=body).status_code == 200

        blocked = client.post("/api/post/create", headers=headers, json=body)
        assert blocked.status_code == 429
        assert blocked.json()["error"]["code"] == "rate_limit_exceeded"
        assert int(blocked.headers["Retry-After"]) > 0
        assert blocked.headers["X-RateLimit-Limit"] == "2"


class TestUpdatePost:
    def test_author_updates_fields(self, client, db, make_user, make_post, auth_headers):
        user = make_user("alice")
        post = make_post(user, title="Old")

        response = client.post(
            "/api/post/update",
            headers=auth_headers(user),
            json={"id": post.id, "title": "New", "content": "Body"},
        )

        assert response.status_code == 200
        assert response.json()["taskId"] is None
        db.expire_all()
        stored = db.get(Post, post.id)
        assert stored.title == "New"
        assert stored.origin == "Body"

    def test_publishing_draft_creates_task(self, client, fakes, make_user, make_post, auth_headers):
        user = make_user("alice")
        post = make_post(user, published=False)

        response = client.post(
            "/api/post/update", headers=auth_headers(user), json={"id": post.id, "published": True}
        )

        task_id = response.json()["taskId"]
        assert task_id is not None
        assert fakes.dispatcher.dispatched == [task_id]

    def test_admin_may_update_any_post(self, client, make_user, make_post, auth_headers):
        author = make_user("alice")
        admin = make_user("root", role="ADMIN")
        post = make_post(author)

        response = client.post("/api/post/update", headers=auth_headers(admin), json={"id": post.id, "title": "Moderated"})

        assert response.status_code == 200

    def test_other_user_is_forbidden(self, client, make_user, make_post, auth_headers):
        post = make_post(make_user("alice"))
        intruder = make_user("mallory")

        response = client.post("/api/post/update", headers=auth_headers(intruder), json={"id": post.id, "title": "x"})

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "post_update_forbidden"

    def test_unknown_post(self, client, make_user, auth_headers):
        response = client.post("/api/post/update", headers=auth_headers(make_user("alice")), json={"id": 999})

        assert response.status_code == 404

    def test_missing_id(self, client, make_user, auth_headers):
        response = client.post("/api/post/update", headers=auth_headers(make_user("alice")), json={})

        assert response.json()["error"]["code"] == "missing_id"


class TestDeletePost:
    def test_author_deletes_and_unindexes(self, client, db, fakes, make_user, make_post, auth_headers):
        user = make_user("alice")
        post = make_post(user)
        post_id = post.id

        response = client.post("/api/post/delete", headers=auth_headers(user), json={"id": post_id})

        assert response.status_code == 200
        assert fakes.search.deleted == [post_id]
        db.expire_all()
        assert db.get(Post, post_id) is None

    def test_admin_may_not_delete(self, client, make_user, make_post, auth_headers):
        post = make_post(make_user("alice"))
        admin = make_user("root", role="ADMIN")

        response = client.post("/api/post/delete", headers=auth_headers(admin), json={"id": post.id})

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "post_delete_forbidden"


class TestOrigin:
    def test_post_origin(self, client, make_user, make_post):
        post = make_post(make_user("alice"), title="Bonjour", content="Le monde", origin_lang="fr-FR")

        response = client.get("/api/origin", params={"type": "post", "id": post.id})

        assert response.json() == {"ok": True, "content": "Le monde", "title": "Bonjour", "originLang": "fr-FR"}

    def test_reply_origin(self, client, db, make_user, make_post):
        user = make_user("alice")
        post = make_post(user)
        reply = Reply(content="Hola", origin_lang="es-ES", user_uid=user.uid, post_uid=post.id, belong_post_id=post.id, belong_reply=1)
        db.add(reply)
        db.commit()

        response = client.get("/api/origin", params={"type": "reply", "id": reply.id})

        assert response.json()["content"] == "Hola"

    def test_invalid_type(self, client):
        response = client.get("/api/origin", params={"type": "user", "id": "1"})

        assert response.json()["error"]["code"] == "invalid_type"

    def test_missing_parameters(self, client):
        response = client.get("/api/origin", params={"type": "post"})

        assert response.json()["error"]["code"] == "missing_parameters"


class TestReplies:
    def test_top_level_reply_numbers_threads_and_notifies_author(
        self, client, db, fakes, make_user, make_post, auth_headers
    ):
        author = make_user("alice", email_notice_lang="de-DE")
        post = make_post(author)
        replier = make_user("bob")

        first = client.post(
            "/api/reply/create", headers=auth_headers(replier), json={"content": "First!", "postid": post.id}
        )
        second = client.post(
            "/api/reply/create", headers=auth_headers(replier), json={"content": "Second", "postid": str(post.id)}
        )

        assert first.status_code == 200
        first_id = first.json()["data"]["id"]
        second_id = second.json()["data"]["id"]
        assert db.get(Reply, first_id).belong_reply == 1
        assert db.get(Reply, second_id).belong_reply == 2

        notices = db.scalars(select(Notice).where(Notice.user_id == author.uid)).all()
        assert len(notices) == 2
        assert notices[0].link == f"https://xeoos.net/de-DE/post/{post.id}"
        # Author is offline, so delivery falls back to email
        assert [message.to for message in fakes.email.sent] == ["alice@example.com", "alice@example.com"]

        task = db.get(Task, first.json()["data"]["taskId"])
        assert task.reply_id == first_id

    def test_nested_reply_notifies_parent_author_over_socket(
        self, client, db, fakes, make_user, make_post, auth_headers
    ):
        author = make_user("alice")
        post = make_post(author)
        bob = make_user("bob")
        carol = make_user("carol")
        fakes.realtime.online.add(bob.uid)

        parent = client.post(
            "/api/reply/create", headers=auth_headers(bob), json={"content": "Top", "postid": post.id}
        ).json()["data"]["id"]
        fakes.email.sent.clear()

        child = client.post(
            "/api/reply/create", headers=auth_headers(carol), json={"content": "Nested", "replyid": parent}
        )

        assert child.status_code == 200
        stored = db.get(Reply, child.json()["data"]["id"])
        assert stored.is_child is True
        assert stored.comment_uid == parent
        assert stored.belong_reply == 1
        assert stored.post_uid is None

        channel, event, payload = fakes.realtime.published[-1]
        assert channel == f"user-{bob.uid}"
        assert event == "new-message"
        assert payload["message"]["content"] == "Nested"
        assert fakes.email.sent == []

    def test_reply_to_own_post_does_not_notify(self, client, db, fakes, make_user, make_post, auth_headers):
        author = make_user("alice")
        post = make_post(author)

        client.post("/api/reply/create", headers=auth_headers(author), json={"content": "Bump", "postid": post.id})

        assert db.scalars(select(Notice)).all() == []
        assert fakes.email.sent == []

    def test_bumps_last_reply_at(self, client, db, make_user, make_post, auth_headers):
        post = make_post(make_user("alice"))
        before = post.last_reply_at

        client.post("/api/reply/create", headers=auth_headers(make_user("bob")), json={"content": "Hi", "postid": post.id})

        db.expire_all()
        after = db.get(Post, post.id).last_reply_at
        assert after.replace(tzinfo=None) >= before.replace(tzinfo=None)

    def test_requires_target(self, client, make_user, auth_headers):
        response = client.post("/api/reply/create", headers=auth_headers(make_user("bob")), json={"content": "Hi"})

        assert response.json()["error"]["code"] == "reply_target_required"

    def test_unknown_parent(self, client, make_user, auth_headers):
        response = client.post(
            "/api/reply/create", headers=auth_headers(make_user("bob")), json={"content": "Hi", "replyid": "nope"}
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "reply_not_found"

    def test_draft_post_cannot_be_replied_to(self, client, make_user, make_post, auth_headers):
        post = make_post(make_user("alice"), published=False)

        response = client.post(
            "/api/reply/create", headers=auth_headers(make_user("bob")), json={"content": "Hi", "postid": post.id}
        )

        assert response.status_code == 404

    def test_only_owner_deletes_reply(self, client, db, make_user, make_post, auth_headers):
        post = make_post(make_user("alice"))
        bob = make_user("bob")
        reply_id = client.post(
            "/api/reply/create", headers=auth_headers(bob), json={"content": "Hi", "postid": post.id}
        ).json()["data"]["id"]

        forbidden = client.post("/api/reply/delete", headers=auth_headers(make_user("eve")), json={"id": reply_id})
        allowed = client.post("/api/reply/delete", headers=auth_headers(bob), json={"id": reply_id})

        assert forbidden.status_code == 403
        assert forbidden.json()["error"]["code"] == "reply_delete_forbidden"
        assert allowed.status_code == 200
        db.expire_all()
        assert db.get(Reply, reply_id) is None


class TestLikes:
    def test_like_and_unlike_post(self, client, db, make_user, make_post, auth_headers):
        user = make_user("bob")
        headers = auth_headers(user)
        post = make_post(make_user("alice"))

        liked = client.post("/api/like", headers=headers, json={"action": True, "postId": post.id})
        again = client.post("/api/like", headers=headers, json={"action": True, "postId": post.id})

        assert liked.json() == {"ok": True, "message": {"ok": True}}
        assert again.json()["error"]["code"] == "already_liked"
        assert len(db.scalars(select(Like)).all()) == 1

        unliked = client.post("/api/like", headers=headers, json={"action": False, "postId": post.id})
        not_liked = client.post("/api/like", headers=headers, json={"action": False, "postId": post.id})

        assert unliked.status_code == 200
        assert not_liked.json()["error"]["code"] == "not_liked"

    def test_action_must_be_boolean(self, client, make_user, make_post, auth_headers):
        post = make_post(make_user("alice"))
        headers = auth_headers(make_user("bob"))

        for action in ("true", 1, "yes"):
            response = client.post("/api/like", headers=headers, json={"action": action, "postId": post.id})
            assert response.json()["error"]["code"] == "invalid_action"

    def test_missing_target(self, client, make_user, auth_headers):
        response = client.post("/api/like", headers=auth_headers(make_user("bob")), json={"action": True})

        assert response.json()["error"]["code"] == "missing_id"

    def test_unknown_post(self, client, make_user, auth_headers):
        response = client.post("/api/like", headers=auth_headers(make_user("bob")), json={"action": True, "postId": 404})

        assert response.status_code == 404

    def test_status_and_check(self, client, db, make_user, make_post, auth_headers):
        alice = make_user("alice")
        bob = make_user("bob")
        post = make_post(alice)
        replies = [
            Reply(content=text, user_uid=alice.uid, post_uid=post.id, belong_post_id=post.id, belong_reply=index)
            for index, text in enumerate(("one", "two"), start=1)
        ]
        db.add_all(replies)
        db.commit()
        headers = auth_headers(bob)

        client.post("/api/like", headers=headers, json={"action": True, "postId": post.id})
        client.post("/api/like", headers=headers, json={"action": True, "replyId": replies[0].id})

        status = client.get("/api/like/status", headers=headers, params={"postId": post.id}).json()
        assert status["data"] == {"postLiked": True, "replyLikes": {replies[0].id: True}}

        check = client.post("/api/like/check", headers=headers, json={"postId": str(post.id)}).json()
        assert check["data"]["postId"] == post.id
        assert check["data"]["replyLikes"] == {replies[0].id: True, replies[1].id: False}

    def test_check_validates_post_id(self, client, make_user, auth_headers):
        headers = auth_headers(make_user("bob"))

        assert client.post("/api/like/check", headers=headers, json={}).json()["error"]["code"] == "missing_post_id"
        assert client.post("/api/like/check", headers=headers, json={"postId": "abc"}).json()["error"]["code"] == "invalid_post_id"
        assert client.post("/api/like/check", headers=headers, json={"postId": 404}).status_code == 404

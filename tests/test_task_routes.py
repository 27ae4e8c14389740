"""Integration tests for translation task and inbox endpoints."""

from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from xeoos.db.models import TASK_DONE, TASK_FAIL, TASK_PENDING, Notice, Reply, Task


def _task(db, user, *, status=TASK_PENDING, post=None, reply=None, age_minutes=0):
    task = Task(
        status=status,
        user_uid=user.uid,
        post_id=post.id if post else None,
        reply_id=reply.id if reply else None,
        created_at=datetime.now(timezone.utc) - timedelta(minutes=age_minutes),
    )
    db.add(task)
    db.commit()
    return task


class TestTaskList:
    def test_unfinished_tasks_come_first(self, client, db, make_user, make_post, auth_headers):
        user = make_user("alice")
        post = make_post(user, title="Translated")
        done_new = _task(db, user, status=TASK_DONE, post=post, age_minutes=1)
        failed_old = _task(db, user, status=TASK_FAIL, post=post, age_minutes=30)
        pending_mid = _task(db, user, status=TASK_PENDING, post=post, age_minutes=10)
        _task(db, make_user("bob"), post=post)

        response = client.post("/api/task/get", headers=auth_headers(user), json={"page": 1})

        data = response.json()
        assert [item["id"] for item in data["tasks"]] == [pending_mid.id, failed_old.id, done_new.id]
        assert data["total"] == 3
        assert data["hasMore"] is False
        assert data["tasks"][0]["post"] == {"id": post.id, "title": "Translated"}

    def test_reply_task_shows_snippet(self, client, db, make_user, make_post, auth_headers):
        user = make_user("alice")
        post = make_post(user)
        reply = Reply(
            content="A very long reply that keeps going",
            user_uid=user.uid,
            post_uid=post.id,
            belong_post_id=post.id,
            belong_reply=1,
        )
        db.add(reply)
        db.commit()
        _task(db, user, reply=reply)

        item = client.post("/api/task/get", headers=auth_headers(user), json={}).json()["tasks"][0]

        assert item["reply"] == {"content": "A very long reply th", "postUid": post.id}
        assert item["post"] is None


class TestTaskRetry:
    def test_retry_failed_task(self, client, db, fakes, make_user, make_post, auth_headers):
        user = make_user("alice")
        task = _task(db, user, status=TASK_FAIL, post=make_post(user))

        response = client.post("/api/task/retry", headers=auth_headers(user), json={"id": task.id})

        assert response.json() == {"ok": True}
        assert fakes.dispatcher.dispatched == [task.id]
        db.expire_all()
        assert db.get(Task, task.id).status == TASK_PENDING

    def test_retry_fails_again_when_worker_down(self, client, db, fakes, make_user, make_post, auth_headers):
        fakes.dispatcher.fail = True
        user = make_user("alice")
        task = _task(db, user, status=TASK_FAIL, post=make_post(user))

        client.post("/api/task/retry", headers=auth_headers(user), json={"id": task.id})

        db.expire_all()
        assert db.get(Task, task.id).status == TASK_FAIL

    def test_pending_task_is_not_retryable(self, client, db, make_user, auth_headers):
        user = make_user("alice")
        task = _task(db, user)

        response = client.post("/api/task/retry", headers=auth_headers(user), json={"id": task.id})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "task_not_retryable"

    def test_other_users_task(self, client, db, make_user, auth_headers):
        task = _task(db, make_user("alice"), status=TASK_FAIL)

        response = client.post("/api/task/retry", headers=auth_headers(make_user("bob")), json={"id": task.id})

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "task_forbidden"


class TestTaskReport:
    def test_done_reindexes_post_and_broadcasts(self, client, db, fakes, make_user, make_post):
        user = make_user("alice")
        post = make_post(user, title="Hello")
        post.title_zhcn = "你好"
        db.commit()
        task = _task(db, user, post=post)

        response = client.post(
            "/api/task/report",
            json={"password": "worker-secret", "taskUuid": task.id, "status": "DONE"},
        )

        assert response.json() == {"ok": True}
        db.expire_all()
        assert db.get(Task, task.id).status == TASK_DONE

        document = fakes.search.documents[post.id]
        assert document["title"] == "Hello"
        assert document["titleZHCN"] == "你好"
        assert document["topics"] == ["python"]

        channel, event, payload = fakes.realtime.published[-1]
        assert channel == "broadcast"
        assert event == "new-message"
        assert payload["message"]["type"] == "task"
        assert payload["message"]["content"] == {"uuid": task.id, "status": "DONE"}

    def test_fail_report_does_not_index(self, client, db, fakes, make_user, make_post):
        user = make_user("alice")
        task = _task(db, user, post=make_post(user))

        client.post("/api/task/report", json={"password": "worker-secret", "taskUuid": task.id, "status": "FAIL"})

        assert fakes.search.documents == {}

    def test_wrong_password(self, client, db, make_user):
        task = _task(db, make_user("alice"))

        response = client.post("/api/task/report", json={"password": "guess", "taskUuid": task.id, "status": "DONE"})

        assert response.status_code == 401

    def test_non_ascii_password(self, client, db, make_user):
        task = _task(db, make_user("alice"))

        response = client.post("/api/task/report", json={"password": "wörker", "taskUuid": task.id, "status": "DONE"})

        assert response.status_code == 401

    def test_invalid_status(self, client, db, make_user):
        task = _task(db, make_user("alice"))

        response = client.post(
            "/api/task/report", json={"password": "worker-secret", "taskUuid": task.id, "status": "MAYBE"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_request"

    def test_unknown_task(self, client):
        response = client.post(
            "/api/task/report", json={"password": "worker-secret", "taskUuid": "missing", "status": "DONE"}
        )

        assert response.status_code == 404

    def test_missing_parameters(self, client):
        response = client.post("/api/task/report", json={"password": "worker-secret", "status": "DONE"})

        assert response.json()["error"]["code"] == "missing_parameters"


class TestMessages:
    def _notices(self, db, user, count, read=0):
        for index in range(count):
            db.add(
                Notice(
                    user_id=user.uid,
                    content=f"notice {index}",
                    link="https://xeoos.net",
                    is_read=index < read,
                    created_at=datetime.now(timezone.utc) - timedelta(minutes=index),
                )
            )
        db.commit()

    def test_list_is_newest_first_with_unread_count(self, client, db, make_user, auth_headers):
        user = make_user("alice")
        self._notices(db, user, 3, read=1)
        self._notices(db, make_user("bob"), 2)

        data = client.post("/api/message/get", headers=auth_headers(user), json={"page": 1}).json()

        assert [item["content"] for item in data["messages"]] == ["notice 0", "notice 1", "notice 2"]
        assert data["total"] == 3
        assert data["unreadCount"] == 2
        assert data["messages"][0]["isRead"] is True

    def test_mark_read_and_read_all(self, client, db, make_user, auth_headers):
        user = make_user("alice")
        self._notices(db, user, 3)
        headers = auth_headers(user)
        first = client.post("/api/message/get", headers=headers, json={}).json()["messages"][0]["id"]

        assert client.post("/api/message/read", headers=headers, json={"id": first}).json() == {"ok": True}
        assert client.get("/api/message/unread-count", headers=headers).json() == {"ok": True, "unreadCount": 2}

        assert client.post("/api/message/read-all", headers=headers).json() == {"ok": True, "updated": 2}
        assert client.get("/api/message/unread-count", headers=headers).json()["unreadCount"] == 0

    def test_cannot_read_someone_elses_notice(self, client, db, make_user, auth_headers):
        owner = make_user("alice")
        self._notices(db, owner, 1)
        notice_id = db.scalar(select(Notice)).id

        response = client.post("/api/message/read", headers=auth_headers(make_user("bob")), json={"id": notice_id})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "notice_not_found"

    def test_realtime_token(self, client, fakes, make_user, auth_headers):
        user = make_user("alice")

        response = client.post("/api/message/auth", headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["clientId"] == str(user.uid)
        [request] = fakes.realtime.token_requests
        assert request["ttl_ms"] == 2 * 60 * 60 * 1000
        assert request["capability"] == {"broadcast": ["subscribe"], f"user-{user.uid}": ["subscribe"]}

    def test_requires_login(self, client):
        assert client.post("/api/message/get", json={}).status_code == 401

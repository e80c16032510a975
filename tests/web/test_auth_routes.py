def test_root_redirects_to_login(client):
    resp = client.get("/")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


def test_protected_page_without_session_redirects_to_login(client):
    resp = client.get("/dashboard/attendance", follow_redirects=True)

    assert resp.request.path == "/login"
    assert b"Please sign in to continue" in resp.data


def test_stale_session_is_cleared(client):
    with client.session_transaction() as sess:
        sess["user_id"] = 404

    resp = client.get("/dashboard")

    assert resp.headers["Location"].endswith("/login")
    with client.session_transaction() as sess:
        assert "user_id" not in sess


def test_login_and_logout(client, employee):
    resp = client.post("/login", data={"email": employee.email, "password": "employee123"}, follow_redirects=True)

    assert resp.request.path == "/dashboard"
    assert b"Omar Employee" in resp.data

    resp = client.post("/logout", follow_redirects=True)
    assert resp.request.path == "/login"
    assert client.get("/dashboard").status_code == 302


def test_login_with_bad_password_shows_error(client, employee):
    resp = client.post("/login", data={"email": employee.email, "password": "nope"})

    assert resp.status_code == 200
    assert b"Invalid login credentials" in resp.data


def test_register_rejects_mismatched_passwords(client, profiles):
    resp = client.post(
        "/register",
        data={
            "full_name": "New Person",
            "email": "new@example.com",
            "phone": "+12025550123",
            "password": "abcdef",
            "confirm_password": "abcdeg",
        },
    )

    assert b"Passwords do not match" in resp.data
    assert profiles.writes == 0


def test_register_then_sign_in(client, profiles):
    resp = client.post(
        "/register",
        data={
            "full_name": "New Person",
            "email": "new@example.com",
            "phone": "+12025550123",
            "password": "abcdef",
            "confirm_password": "abcdef",
        },
        follow_redirects=True,
    )

    assert resp.request.path == "/login"
    assert profiles.get_by_email("new@example.com") is not None


def test_password_reset_flow(client, mailer, employee):
    client.post("/login/forgot", data={"email": employee.email})
    link = mailer.sent[0]["body"].split("\n")[3]
    token = link.split("token=")[1]

    resp = client.get(f"/reset-password?token={token}")
    assert resp.status_code == 302
    assert client.get("/reset-password").status_code == 200

    resp = client.post(
        "/reset-password",
        data={"password": "brandnew", "confirm_password": "brandnew"},
        follow_redirects=True,
    )
    assert resp.request.path == "/login"

    resp = client.post("/login", data={"email": employee.email, "password": "brandnew"})
    assert resp.headers["Location"].endswith("/dashboard")

    resp = client.get(f"/reset-password?token={token}", follow_redirects=True)
    assert resp.request.path == "/login"
    assert b"Password reset link is invalid" in resp.data


def test_reset_password_without_token_redirects(client):
    resp = client.get("/reset-password", follow_redirects=True)

    assert resp.request.path == "/login"
    assert b"Password reset link is invalid" in resp.data


def test_forgot_password_for_unknown_email_looks_the_same(client, mailer):
    resp = client.post("/login/forgot", data={"email": "ghost@example.com"}, follow_redirects=True)

    assert b"reset link is on its way" in resp.data
    assert mailer.sent == []

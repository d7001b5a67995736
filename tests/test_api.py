"""
HTTP surface: auth, preferences and the plan endpoint.
"""
import math


# ── auth ─────────────────────────────────────────────────────────────
def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_init_demo_is_idempotent(client):
    first = client.post("/api/v1/auth/init-demo")
    second = client.post("/api/v1/auth/init-demo")

    assert first.status_code == 201
    assert first.json()["message"] == "Demo user created successfully"
    assert second.status_code == 200
    assert second.json()["message"] == "Demo user already exists"
    assert first.json()["user"]["id"] == second.json()["user"]["id"]


def test_login_rejects_bad_password(client):
    client.post("/api/v1/auth/init-demo")
    r = client.post("/api/v1/auth/login", json={"username": "demo", "password": "wrong-one"})
    assert r.status_code == 401


def test_register_lowercases_and_rejects_duplicates(client):
    r = client.post("/api/v1/auth/register", json={"username": "  Alice ", "password": "secret1"})
    assert r.status_code == 201
    assert r.json()["username"] == "alice"

    dup = client.post("/api/v1/auth/register", json={"username": "ALICE", "password": "secret1"})
    assert dup.status_code == 409

    login = client.post("/api/v1/auth/login", json={"username": "alice", "password": "secret1"})
    assert login.status_code == 200


def test_me_requires_token(client):
    assert client.get("/api/v1/auth/me").status_code == 401
    bad = {"Authorization": "Bearer not-a-jwt"}
    assert client.get("/api/v1/auth/me", headers=bad).status_code == 401


def test_me_returns_default_preferences(client, auth_headers):
    body = client.get("/api/v1/auth/me", headers=auth_headers).json()
    assert body["username"] == "demo"
    assert body["preferences"]["theme"] == "dark"
    assert body["preferences"]["accent_color"] == "green"


# ── preferences ──────────────────────────────────────────────────────
def test_preferences_partial_update(client, auth_headers):
    r = client.put(
        "/api/v1/users/me/preferences",
        headers=auth_headers,
        json={"theme": "light", "weight_unit": "lb"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["theme"] == "light"
    assert body["weight_unit"] == "lb"
    assert body["length_unit"] == "m"

    again = client.get("/api/v1/users/me/preferences", headers=auth_headers).json()
    assert again["theme"] == "light"


def test_preferences_goals_stored_metric(client, auth_headers):
    body = client.put(
        "/api/v1/users/me/preferences",
        headers=auth_headers,
        json={
            "weight_goal": 100, "weight_goal_unit": "lb",
            "water_goal": 64, "water_goal_unit": "fl oz",
            "steps_goal": 10000,
        },
    ).json()
    assert math.isclose(body["weight_goal"], 45.3592)
    assert math.isclose(body["water_goal"], 1892.704)
    assert body["steps_goal"] == 10000


def test_preferences_reject_invalid_theme(client, auth_headers):
    r = client.put("/api/v1/users/me/preferences", headers=auth_headers, json={"theme": "neon"})
    assert r.status_code == 422


# ── plan ─────────────────────────────────────────────────────────────
def test_plan_requires_auth(client):
    r = client.post("/api/v1/plan", json={"age": 30, "sex": "male", "height": 180, "weight": 80})
    assert r.status_code == 401


def test_plan_from_onboarding_answers(client, auth_headers):
    r = client.post(
        "/api/v1/plan",
        headers=auth_headers,
        json={
            "age": 30,
            "sex": "male",
            "height": 180,
            "height_unit": "cm",
            "weight": 80,
            "activity_level": "moderately-active",
            "goal": "maintain-health",
        },
    )
    assert r.status_code == 200
    plan = r.json()
    assert plan["bmr"] == 1780
    assert plan["tdee"] == 2759
    assert plan["target_calories"] == 2759
    assert plan["macros"]["protein"]["grams"] == 112
    assert plan["macros"]["fats"]["percentage"] == 30.0
    assert plan["macros"]["carbs"]["grams"] == 371
    assert plan["notes"][0] == "Calories set to maintenance level"


def test_plan_rejects_non_positive_weight(client, auth_headers):
    r = client.post(
        "/api/v1/plan",
        headers=auth_headers,
        json={"age": 30, "sex": "male", "height": 180, "weight": 0},
    )
    assert r.status_code == 422


def test_plan_rejects_absurd_height(client, auth_headers):
    r = client.post(
        "/api/v1/plan",
        headers=auth_headers,
        json={"age": 30, "sex": "male", "height": 1e308, "weight": 80},
    )
    assert r.status_code == 422


def test_plan_rejects_age_and_weight_above_ceiling(client, auth_headers):
    base = {"sex": "male", "height": 180}
    r_age = client.post("/api/v1/plan", headers=auth_headers, json={**base, "age": 500, "weight": 80})
    r_weight = client.post("/api/v1/plan", headers=auth_headers, json={**base, "age": 30, "weight": 1e9})
    assert r_age.status_code == 422
    assert r_weight.status_code == 422


def test_plan_height_in_wrong_unit_is_422(client, auth_headers):
    # 250 ft passes the schema ceiling but is no human height
    r = client.post(
        "/api/v1/plan",
        headers=auth_headers,
        json={"age": 30, "sex": "male", "height": 250, "height_unit": "ft", "weight": 80},
    )
    assert r.status_code == 422


# ── auth edge cases ──────────────────────────────────────────────────
def test_register_rejects_password_over_72_bytes(client):
    r = client.post("/api/v1/auth/register", json={"username": "bob", "password": "é" * 40})
    assert r.status_code == 422


def test_register_lost_race_returns_409(client, monkeypatch):
    import api.v1.auth as auth_api

    assert client.post("/api/v1/auth/register", json={"username": "carol", "password": "secret1"}).status_code == 201

    async def _not_found(db, username):
        return None

    # lookup misses, insert then hits the unique index
    monkeypatch.setattr(auth_api, "get_user_by_username", _not_found)
    r = client.post("/api/v1/auth/register", json={"username": "carol", "password": "secret1"})
    assert r.status_code == 409

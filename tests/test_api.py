"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from workout_calendar.web import create_app


def create_workout(client, **overrides) -> dict:
    payload = {"name": "Leg Day", "date": "2024-05-01", **overrides}
    response = client.post("/api/workouts", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_exercise(client, workout_id: str, **overrides) -> dict:
    payload = {"name": "Squat", "sets": 3, "reps": 12, "restDuration": 90, **overrides}
    response = client.post(f"/api/workouts/{workout_id}/exercises", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestAuth:
    """Tests for session authentication."""

    def test_requires_session(self, make_client):
        client = make_client(user=None)

        for method, path in [
            ("GET", "/api/auth/user"),
            ("GET", "/api/workouts"),
            ("POST", "/api/workouts"),
            ("PATCH", "/api/exercises/x"),
            ("DELETE", "/api/exercises/x"),
        ]:
            response = client.request(method, path)
            assert response.status_code == 401, path
            assert response.json() == {"message": "Unauthorized"}

    def test_login_without_identity_is_rejected(self, make_client):
        client = make_client(user=None)

        response = client.get("/api/login", follow_redirects=False)

        assert response.status_code == 401

    def test_login_upserts_user(self, client):
        response = client.get("/api/auth/user")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "alice"
        assert body["email"] == "alice@example.com"
        assert "createdAt" in body

    def test_logout_ends_session(self, client):
        response = client.get("/api/logout", follow_redirects=False)
        assert response.status_code == 302

        assert client.get("/api/workouts").status_code == 401

    def test_health_is_public(self, make_client):
        response = make_client(user=None).get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestWorkoutEndpoints:
    """Tests for /api/workouts."""

    def test_create_defaults(self, client):
        body = create_workout(client)

        assert body["date"] == "2024-05-01"
        assert body["completed"] is False
        assert body["color"] == "#6366F1"
        assert body["userId"] == "alice"

    def test_user_id_in_body_is_ignored(self, client):
        body = create_workout(client, userId="bob")
        assert body["userId"] == "alice"

    def test_validation_errors_are_structured(self, client):
        response = client.post("/api/workouts", json={"color": "blue"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid request data"
        fields = {e["field"] for e in body["errors"]}
        assert {"name", "date", "color"} <= fields

    def test_list_and_by_date(self, client):
        create_workout(client, name="Old", date="2024-04-01")
        create_workout(client, name="New", date="2024-05-01")

        listed = client.get("/api/workouts").json()
        on_day = client.get("/api/workouts/date/2024-04-01").json()

        assert [w["name"] for w in listed] == ["New", "Old"]
        assert [w["name"] for w in on_day] == ["Old"]

    def test_bad_date_path_is_400(self, client):
        response = client.get("/api/workouts/date/yesterday")
        assert response.status_code == 400

    def test_get_other_users_workout_is_404(self, make_client):
        alice = make_client("alice")
        bob = make_client("bob")
        workout = create_workout(alice)

        response = bob.get(f"/api/workouts/{workout['id']}")

        assert response.status_code == 404
        assert response.json() == {"message": "Workout not found"}
        assert bob.get("/api/workouts").json() == []

    def test_patch(self, client):
        workout = create_workout(client)

        response = client.patch(f"/api/workouts/{workout['id']}", json={"completed": True})

        assert response.status_code == 200
        assert response.json()["completed"] is True
        assert response.json()["name"] == "Leg Day"

    def test_patch_unmatched_returns_null_body(self, make_client):
        """Unlike GET, an unmatched PATCH answers 200 with null."""
        alice = make_client("alice")
        bob = make_client("bob")
        workout = create_workout(alice)

        response = bob.patch(f"/api/workouts/{workout['id']}", json={"name": "Mine now"})

        assert response.status_code == 200
        assert response.json() is None
        assert alice.get(f"/api/workouts/{workout['id']}").json()["name"] == "Leg Day"

    def test_patch_rejects_invalid(self, client):
        workout = create_workout(client)

        response = client.patch(f"/api/workouts/{workout['id']}", json={"name": None})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "name"

    def test_delete_is_always_204(self, client):
        workout = create_workout(client)

        assert client.delete(f"/api/workouts/{workout['id']}").status_code == 204
        assert client.delete(f"/api/workouts/{workout['id']}").status_code == 204
        assert client.get(f"/api/workouts/{workout['id']}").status_code == 404

    def test_delete_cascades_to_exercises(self, client):
        workout = create_workout(client)
        create_exercise(client, workout["id"])

        client.delete(f"/api/workouts/{workout['id']}")

        assert client.get(f"/api/workouts/{workout['id']}/exercises").json() == []


class TestExerciseEndpoints:
    """Tests for exercise routes."""

    def test_create_and_list_in_order(self, client):
        workout = create_workout(client)
        first = create_exercise(client, workout["id"], name="Squat")
        second = create_exercise(client, workout["id"], name="Lunge", restDuration=60)

        listed = client.get(f"/api/workouts/{workout['id']}/exercises").json()

        assert [e["id"] for e in listed] == [first["id"], second["id"]]
        assert first["restDuration"] == 90
        assert first["order"] == 0
        assert second["order"] == 1
        assert first["completed"] is False

    def test_zero_sets_rejected(self, client):
        workout = create_workout(client)

        response = client.post(
            f"/api/workouts/{workout['id']}/exercises",
            json={"name": "Squat", "sets": 0},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "sets"

    def test_patch_and_delete(self, client):
        workout = create_workout(client)
        exercise = create_exercise(client, workout["id"])

        patched = client.patch(f"/api/exercises/{exercise['id']}", json={"completed": True})
        deleted = client.delete(f"/api/exercises/{exercise['id']}")

        assert patched.json()["completed"] is True
        assert deleted.status_code == 204
        assert client.get(f"/api/workouts/{workout['id']}/exercises").json() == []

    def test_patch_missing_returns_null_body(self, client):
        response = client.patch("/api/exercises/missing", json={"sets": 2})

        assert response.status_code == 200
        assert response.json() is None

    def test_exercise_routes_trust_the_caller(self, make_client):
        """Without strict ownership another user can read and change exercises."""
        alice = make_client("alice")
        bob = make_client("bob")
        workout = create_workout(alice)
        exercise = create_exercise(alice, workout["id"])

        listed = bob.get(f"/api/workouts/{workout['id']}/exercises")
        patched = bob.patch(f"/api/exercises/{exercise['id']}", json={"reps": 1})

        assert [e["id"] for e in listed.json()] == [exercise["id"]]
        assert patched.json()["reps"] == 1

    def test_create_under_missing_workout_is_500(self, client):
        response = client.post("/api/workouts/missing/exercises", json={"name": "Squat"})

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to create exercise"}


class TestStrictOwnership:
    """Tests for strict_exercise_ownership."""

    def _clients(self, settings):
        app = create_app(settings.model_copy(update={"strict_exercise_ownership": True}))
        clients = []
        for user in ("alice", "bob"):
            client = TestClient(app, raise_server_exceptions=False)
            client.__enter__()
            client.get(
                "/api/login",
                headers={settings.auth_user_header: user},
                follow_redirects=False,
            )
            clients.append(client)
        return clients

    def test_other_users_are_rejected(self, settings):
        alice, bob = self._clients(settings)
        try:
            workout = create_workout(alice)
            exercise = create_exercise(alice, workout["id"])

            assert bob.get(f"/api/workouts/{workout['id']}/exercises").status_code == 404
            assert bob.post(
                f"/api/workouts/{workout['id']}/exercises", json={"name": "Curl"}
            ).status_code == 404
            assert bob.patch(
                f"/api/exercises/{exercise['id']}", json={"reps": 1}
            ).json() == {"message": "Exercise not found"}
            assert bob.delete(f"/api/exercises/{exercise['id']}").status_code == 404

            assert alice.patch(
                f"/api/exercises/{exercise['id']}", json={"reps": 1}
            ).json()["reps"] == 1
        finally:
            for client in (alice, bob):
                client.__exit__(None, None, None)


class TestErrorHandling:
    """Tests for the error-to-response mapping."""

    def test_unexpected_errors_are_generic_500(self, app, make_client):
        @app.get("/api/boom")
        async def boom():
            raise RuntimeError("secret detail")

        response = make_client("alice").get("/api/boom")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
        assert "secret" not in response.text

    def test_unknown_route_uses_message_body(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}

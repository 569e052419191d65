def test_create_list_get_workout(client, make_headers):
    h = make_headers()
    r = client.post("/workouts", headers=h, json={"name": "Push Day"})
    assert r.status_code == 201, r.text
    w = r.json()
    assert w["name"] == "Push Day"
    assert w["type"] == "strength"
    assert w["exercises"] == []

    r = client.post("/exercises", headers=h, json={
        "workout_id": w["id"], "name": "Bench Press", "sets": 3, "reps": 8, "weight": 135,
    })
    assert r.status_code == 201, r.text
    ex = r.json()
    assert (ex["workout_id"], ex["sets"], ex["reps"], ex["weight"]) == (w["id"], 3, 8, 135.0)

    [listed] = client.get("/workouts", headers=h).json()
    assert listed["id"] == w["id"]
    assert [e["name"] for e in listed["exercises"]] == ["Bench Press"]
    assert client.get(f"/workouts/{w['id']}", headers=h).json()["exercises"][0]["id"] == ex["id"]
    assert [e["id"] for e in client.get(f"/workouts/{w['id']}/exercises", headers=h).json()] == [ex["id"]]


def test_blank_name_422_names_field(client, make_headers):
    r = client.post("/workouts", headers=make_headers(), json={"name": "   "})
    assert r.status_code == 422
    assert r.json()["field"] == "name"


def test_unknown_type_422(client, make_headers):
    r = client.post("/workouts", headers=make_headers(), json={"name": "Dance", "type": "zumba"})
    assert r.status_code == 422


def test_exercise_bounds_422(client, make_headers):
    h = make_headers()
    w = client.post("/workouts", headers=h, json={"name": "Pull"}).json()
    base = {"workout_id": w["id"], "name": "Row", "sets": 3, "reps": 10, "weight": 60}
    for bad in ({"sets": 0}, {"sets": 51}, {"reps": 0}, {"weight": -1}):
        r = client.post("/exercises", headers=h, json={**base, **bad})
        assert r.status_code == 422, bad
    r = client.post("/exercises", headers=h, json={**base, "name": " "})
    assert r.status_code == 422
    assert r.json()["field"] == "name"
    assert client.get(f"/workouts/{w['id']}/exercises", headers=h).json() == []


def test_rename_update_delete(client, make_headers):
    h = make_headers()
    w = client.post("/workouts", headers=h, json={"name": "Old"}).json()
    r = client.patch(f"/workouts/{w['id']}", headers=h, json={"name": "New"})
    assert r.status_code == 200
    assert r.json()["name"] == "New"

    ex = client.post("/exercises", headers=h, json={
        "workout_id": w["id"], "name": "Curl", "sets": 3, "reps": 10, "weight": 15,
    }).json()
    r = client.put(f"/exercises/{ex['id']}", headers=h, json={"name": "Hammer Curl", "sets": 4, "reps": 8, "weight": 17.5})
    assert r.status_code == 200, r.text
    assert (r.json()["name"], r.json()["weight"]) == ("Hammer Curl", 17.5)

    assert client.delete(f"/exercises/{ex['id']}", headers=h).status_code == 200
    assert client.delete(f"/exercises/{ex['id']}", headers=h).status_code == 404

    assert client.delete(f"/workouts/{w['id']}", headers=h).status_code == 200
    assert client.get(f"/workouts/{w['id']}", headers=h).status_code == 404
    assert client.get("/workouts", headers=h).json() == []


def test_workouts_are_private(client, make_headers):
    owner, other = make_headers(), make_headers()
    w = client.post("/workouts", headers=owner, json={"name": "Mine"}).json()
    ex = client.post("/exercises", headers=owner, json={
        "workout_id": w["id"], "name": "Squat", "sets": 5, "reps": 5, "weight": 100,
    }).json()

    assert client.get("/workouts", headers=other).json() == []
    assert client.get(f"/workouts/{w['id']}", headers=other).status_code == 404
    assert client.patch(f"/workouts/{w['id']}", headers=other, json={"name": "x"}).status_code == 404
    assert client.delete(f"/workouts/{w['id']}", headers=other).status_code == 404
    assert client.post("/exercises", headers=other, json={
        "workout_id": w["id"], "name": "Sneaky", "sets": 1, "reps": 1, "weight": 1,
    }).status_code == 404
    assert client.put(f"/exercises/{ex['id']}", headers=other,
                      json={"name": "x", "sets": 1, "reps": 1}).status_code == 404
    assert client.delete(f"/exercises/{ex['id']}", headers=other).status_code == 404

    mine = client.get(f"/workouts/{w['id']}", headers=owner).json()
    assert mine["name"] == "Mine"
    assert [e["name"] for e in mine["exercises"]] == ["Squat"]

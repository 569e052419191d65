import pytest

from liftoff.errors import NotFound, ValidationError
from liftoff.services import SessionEngine, WorkoutStore


@pytest.fixture
def store(db, backend):
    return WorkoutStore(db, backend)


def test_create_and_get_workout(store, alice):
    w = store.create_workout(alice, "  Push Day  ")
    assert w.name == "Push Day"
    assert w.type == "strength"
    assert w.user_id == alice
    assert store.get_workout(alice, w.id).exercises == []


@pytest.mark.parametrize("name", ["", "   ", None, "x" * 256])
def test_workout_name_validated(store, alice, name):
    with pytest.raises(ValidationError) as err:
        store.create_workout(alice, name)
    assert err.value.field == "name"


def test_workout_type_validated(store, alice):
    assert store.create_workout(alice, "Run", "cardio").type == "cardio"
    with pytest.raises(ValidationError) as err:
        store.create_workout(alice, "Dance", "zumba")
    assert err.value.field == "type"


@pytest.mark.parametrize("field,kwargs", [
    ("name", dict(name="", sets=3, reps=8, weight=135)),
    ("sets", dict(name="Bench", sets=0, reps=8, weight=135)),
    ("sets", dict(name="Bench", sets=True, reps=8, weight=135)),
    ("reps", dict(name="Bench", sets=3, reps=0, weight=135)),
    ("weight", dict(name="Bench", sets=3, reps=8, weight=-1)),
    ("weight", dict(name="Bench", sets=3, reps=8, weight=float("nan"))),
])
def test_exercise_validation_names_the_field(store, alice, field, kwargs):
    w = store.create_workout(alice, "Push Day")
    with pytest.raises(ValidationError) as err:
        store.create_exercise(alice, w.id, **kwargs)
    assert err.value.field == field
    assert store.list_exercises(alice, w.id) == []


def test_bodyweight_exercise_allowed(store, alice):
    w = store.create_workout(alice, "Calisthenics")
    ex = store.create_exercise(alice, w.id, "Pull-up", sets=3, reps=10, weight=0)
    assert ex.weight == 0


def test_weight_rounded_to_cents_like_the_column(store, alice):
    w = store.create_workout(alice, "Accessories")
    ex = store.create_exercise(alice, w.id, "Lateral Raise", sets=3, reps=15, weight=2.555)
    assert ex.weight == 2.56
    assert store.list_exercises(alice, w.id)[0].weight == 2.56
    ex = store.update_exercise(alice, ex.id, "Lateral Raise", sets=3, reps=15, weight=7.125)
    assert ex.weight == 7.13
    top = store.create_exercise(alice, w.id, "Sled Push", sets=1, reps=1, weight=999999.99)
    assert top.weight == 999999.99


@pytest.mark.parametrize("weight", [999999.995, 1_000_000, 1e9, 1e300])
def test_weight_beyond_column_range_rejected(store, alice, weight):
    w = store.create_workout(alice, "Strongman")
    with pytest.raises(ValidationError) as err:
        store.create_exercise(alice, w.id, "Truck Pull", sets=1, reps=1, weight=weight)
    assert err.value.field == "weight"
    assert store.list_exercises(alice, w.id) == []


def test_exercises_listed_in_creation_order(store, alice):
    w = store.create_workout(alice, "Push Day")
    names = ["Bench Press", "Overhead Press", "Dips"]
    for n in names:
        store.create_exercise(alice, w.id, n, sets=3, reps=8, weight=20)
    assert [e.name for e in store.get_workout(alice, w.id).exercises] == names
    assert [e.name for e in store.list_exercises(alice, w.id)] == names
    listed = store.list_workouts(alice)
    assert [e.name for e in listed[0].exercises] == names


def test_list_workouts_is_scoped_to_owner(store, alice, bob):
    store.create_workout(alice, "A1")
    store.create_workout(alice, "A2")
    store.create_workout(bob, "B1")
    assert sorted(w.name for w in store.list_workouts(alice)) == ["A1", "A2"]
    assert [w.name for w in store.list_workouts(bob)] == ["B1"]


def test_cross_user_access_is_not_found(store, alice, bob):
    w = store.create_workout(alice, "Mine")
    ex = store.create_exercise(alice, w.id, "Squat", sets=5, reps=5, weight=100)
    with pytest.raises(NotFound):
        store.get_workout(bob, w.id)
    with pytest.raises(NotFound):
        store.rename_workout(bob, w.id, "Stolen")
    with pytest.raises(NotFound):
        store.delete_workout(bob, w.id)
    with pytest.raises(NotFound):
        store.create_exercise(bob, w.id, "Curl", sets=1, reps=1, weight=1)
    with pytest.raises(NotFound):
        store.update_exercise(bob, ex.id, "Curl", sets=1, reps=1, weight=1)
    with pytest.raises(NotFound):
        store.delete_exercise(bob, ex.id)
    with pytest.raises(NotFound):
        store.list_exercises(bob, w.id)
    # untouched
    w = store.get_workout(alice, w.id)
    assert w.name == "Mine"
    assert [e.name for e in w.exercises] == ["Squat"]


def test_rename_workout(store, alice):
    w = store.create_workout(alice, "Old")
    assert store.rename_workout(alice, w.id, "New").name == "New"
    assert store.get_workout(alice, w.id).name == "New"


def test_update_and_delete_exercise(store, alice):
    w = store.create_workout(alice, "Pull")
    ex = store.create_exercise(alice, w.id, "Row", sets=3, reps=10, weight=60)
    ex = store.update_exercise(alice, ex.id, "Barbell Row", sets=4, reps=8, weight=70)
    assert (ex.name, ex.sets, ex.reps, ex.weight) == ("Barbell Row", 4, 8, 70)
    store.delete_exercise(alice, ex.id)
    assert store.get_workout(alice, w.id).exercises == []
    with pytest.raises(NotFound):
        store.delete_exercise(alice, ex.id)


def test_delete_workout_cascades_exercises_but_keeps_sessions(db, backend, store, alice):
    w = store.create_workout(alice, "Push Day")
    store.create_exercise(alice, w.id, "Bench Press", sets=2, reps=8, weight=135)
    engine = SessionEngine(db, backend)
    session = engine.create_session(alice, w.id)
    engine.end_session(alice, session.id)

    store.delete_workout(alice, w.id)

    with pytest.raises(NotFound):
        store.get_workout(alice, w.id)
    history = engine.get_completed_sessions(alice)
    assert [s.id for s in history] == [session.id]
    kept = history[0]
    assert kept.workout_id is None
    assert kept.workout_name == "Push Day"
    assert kept.exercises[0].exercise.name == "Bench Press"
    assert kept.exercises[0].exercise_id is None
    assert len(kept.exercises[0].sets) == 2

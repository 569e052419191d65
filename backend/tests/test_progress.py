from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import update

from liftoff.models import WorkoutSession
from liftoff.services import ProgressAggregator, ProgressEntry, SessionEngine, WorkoutStore


@pytest.fixture
def store(db, backend):
    return WorkoutStore(db, backend)


@pytest.fixture
def engine(db, backend):
    return SessionEngine(db, backend)


@pytest.fixture
def progress(db, backend):
    return ProgressAggregator(db, backend)


def _backdate(db, session_id, when):
    db.execute(update(WorkoutSession).where(WorkoutSession.id == session_id).values(started_at=when))
    db.commit()


def test_only_completed_sets_count(engine, store, progress, alice):
    w = store.create_workout(alice, "Push Day")
    store.create_exercise(alice, w.id, "Bench Press", sets=3, reps=5, weight=100)
    session = engine.create_session(alice, w.id)
    engine.complete_set(alice, session.exercises[0].id, 0)

    [entry] = progress.get_progress(alice)
    assert entry.exercise_name == "Bench Press"
    assert entry.max_weight == 100
    assert entry.total_volume == 500
    assert entry.date == session.started_at.astimezone(timezone.utc).date()


def test_no_completed_sets_no_entries(engine, store, progress, alice):
    w = store.create_workout(alice, "Push Day")
    store.create_exercise(alice, w.id, "Bench Press", sets=3, reps=5, weight=100)
    engine.create_session(alice, w.id)
    assert progress.get_progress(alice) == []


def test_logged_values_drive_max_and_volume(engine, store, progress, alice):
    w = store.create_workout(alice, "Legs")
    store.create_exercise(alice, w.id, "Squat", sets=3, reps=5, weight=100)
    session = engine.create_session(alice, w.id)
    sets = session.exercises[0].sets
    engine.log_set(alice, sets[0].id, reps=5, weight=100)
    engine.log_set(alice, sets[1].id, reps=3, weight=120)

    [entry] = progress.get_progress(alice)
    assert entry.max_weight == 120
    assert entry.total_volume == 100 * 5 + 120 * 3


def test_same_day_sessions_merge_per_exercise(db, engine, store, progress, alice):
    w = store.create_workout(alice, "Push Day")
    store.create_exercise(alice, w.id, "Bench Press", sets=1, reps=5, weight=100)
    for weight in (100, 110):
        session = engine.create_session(alice, w.id)
        engine.log_set(alice, session.exercises[0].sets[0].id, reps=5, weight=weight)
        engine.end_session(alice, session.id)
        _backdate(db, session.id, datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc))

    assert progress.get_progress(alice) == [
        ProgressEntry(exercise_name="Bench Press", date=date(2026, 3, 2), max_weight=110, total_volume=1050),
    ]


def test_entries_newest_day_first_then_name(db, engine, store, progress, alice):
    w = store.create_workout(alice, "Full Body")
    store.create_exercise(alice, w.id, "Squat", sets=1, reps=5, weight=100)
    store.create_exercise(alice, w.id, "Deadlift", sets=1, reps=5, weight=140)

    for day in (1, 3):
        session = engine.create_session(alice, w.id)
        for se in session.exercises:
            engine.complete_set(alice, se.id, 0)
        engine.end_session(alice, session.id)
        _backdate(db, session.id, datetime(2026, 3, day, 18, 30, tzinfo=timezone.utc))

    assert [(e.date, e.exercise_name) for e in progress.get_progress(alice)] == [
        (date(2026, 3, 3), "Deadlift"),
        (date(2026, 3, 3), "Squat"),
        (date(2026, 3, 1), "Deadlift"),
        (date(2026, 3, 1), "Squat"),
    ]


def test_day_is_utc_date_of_session_start(db, engine, store, progress, alice):
    w = store.create_workout(alice, "Late")
    store.create_exercise(alice, w.id, "Row", sets=1, reps=10, weight=50)
    session = engine.create_session(alice, w.id)
    engine.complete_set(alice, session.exercises[0].id, 0)
    # 23:30 in New York on the 1st is already the 2nd in UTC
    new_york = timezone(timedelta(hours=-5))
    _backdate(db, session.id, datetime(2026, 3, 1, 23, 30, tzinfo=new_york))

    [entry] = progress.get_progress(alice)
    assert entry.date == date(2026, 3, 2)


def test_progress_is_per_user(engine, store, progress, alice, bob):
    for user in (alice, bob):
        w = store.create_workout(user, "Push Day")
        store.create_exercise(user, w.id, "Bench Press", sets=1, reps=5, weight=100)
        session = engine.create_session(user, w.id)
        engine.complete_set(user, session.exercises[0].id, 0)
    engine.log_set(bob, engine.get_active_session(bob).exercises[0].sets[0].id, reps=1, weight=200)

    assert [e.max_weight for e in progress.get_progress(alice)] == [100]
    assert [e.max_weight for e in progress.get_progress(bob)] == [200]


def test_history_survives_plan_edits(engine, store, progress, alice):
    w = store.create_workout(alice, "Push Day")
    ex = store.create_exercise(alice, w.id, "Bench Press", sets=1, reps=5, weight=100)
    session = engine.create_session(alice, w.id)
    engine.complete_set(alice, session.exercises[0].id, 0)
    engine.end_session(alice, session.id)

    store.update_exercise(alice, ex.id, "Incline Bench", sets=1, reps=5, weight=80)
    store.delete_workout(alice, w.id)

    assert [(e.exercise_name, e.max_weight) for e in progress.get_progress(alice)] == [("Bench Press", 100)]


def test_bodyweight_sets_have_zero_volume(engine, store, progress, alice):
    w = store.create_workout(alice, "Calisthenics")
    store.create_exercise(alice, w.id, "Pull-up", sets=2, reps=10, weight=0)
    session = engine.create_session(alice, w.id)
    engine.complete_set(alice, session.exercises[0].id, 0)
    engine.complete_set(alice, session.exercises[0].id, 1)

    [entry] = progress.get_progress(alice)
    assert (entry.max_weight, entry.total_volume) == (0, 0)


def test_fractional_weights_aggregate_at_stored_precision(engine, store, progress, alice):
    w = store.create_workout(alice, "Rehab")
    store.create_exercise(alice, w.id, "Band Pull-apart", sets=3, reps=1, weight=2.555)
    session = engine.create_session(alice, w.id)
    for i in range(3):
        engine.complete_set(alice, session.exercises[0].id, i)

    [entry] = progress.get_progress(alice)
    assert entry.max_weight == 2.56
    assert entry.total_volume == pytest.approx(7.68)

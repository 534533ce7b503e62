"""Tests for the application services wired through build_app.

Each test runs against its own in-memory database with a frozen clock and
the in-process reminder dispatcher.
"""

import datetime
import random

import pytest

from app.main import build_app
from app.primal.catalog import EXERCISE_CATALOG, get_seed_exercise
from app.primal.errors import ExerciseNotFoundError
from app.primal.session_scheduler import AFTERNOON_REMINDER_ID, MORNING_REMINDER_ID
from app.schemas.exercise import Exercise, ExerciseType
from app.schemas.scheduled_exercise import SessionSlot
from app.schemas.sprint import SprintSession
from app.services.reminders import SPRINT_REMINDER_ID


@pytest.fixture
def app(session, clock, reminders):
    return build_app(session, clock=clock, reminders=reminders, rng=random.Random(0))


# ======================================================================
# ExerciseService
# ======================================================================


class TestExerciseService:
    def test_initialize_seeds(self, app, storage):
        exercises = app.exercises.initialize()
        assert len(exercises) == len(EXERCISE_CATALOG)
        assert storage.load_exercises() == exercises

    def test_initialize_merges_catalog(self, app, storage):
        progressed = get_seed_exercise("push_up").model_copy(update={"current_reps": 40})
        retired = Exercise(id="l_sit", name="L-Sit", type=ExerciseType.STRENGTH)
        storage.save_exercises([progressed, retired])

        exercises = app.exercises.initialize()
        ids = [e.id for e in exercises]
        assert "l_sit" not in ids
        assert ids[0] == "push_up"
        assert exercises[0].current_reps == 40
        assert len(exercises) == len(EXERCISE_CATALOG)

    def test_complete_scheduled_session(self, app, storage, clock):
        scheduled = app.schedule.ensure_today_scheduled()
        entry = scheduled[0]
        before = app.exercises.get(entry.exercise_id)
        clock.advance(hours=2)

        updated = app.exercises.complete_session(entry.exercise_id, before.current_reps, was_easy=True)

        assert updated.current_reps > before.current_reps
        assert updated.last_performed_date == clock.now()
        stored = {s.notification_id: s for s in storage.load_scheduled_exercises()}
        assert stored[entry.notification_id].is_completed
        history = storage.load_exercise_history()
        assert len(history) == 1
        assert history[0].exercise_id == entry.exercise_id

    def test_ad_hoc_session_logged(self, app, storage):
        app.exercises.initialize()
        updated = app.exercises.complete_session("push_up", 5, was_easy=False)
        assert updated.current_reps == get_seed_exercise("push_up").current_reps
        assert storage.load_scheduled_exercises() is None
        assert [h.exercise_id for h in app.exercises.todays_history()] == ["push_up"]

    def test_unknown_exercise_raises(self, app):
        with pytest.raises(ExerciseNotFoundError):
            app.exercises.complete_session("does_not_exist", 10, was_easy=True)
        assert app.exercises.history() == []

    def test_enable_toggle_and_adjust(self, app):
        assert not app.exercises.set_enabled("push_up", False).is_enabled
        assert app.exercises.toggle_enabled("push_up").is_enabled
        assert app.exercises.adjust_reps("push_up", 0).current_reps == 1
        assert app.exercises.get("push_up").current_reps == 1

    def test_reset_todays_exercises_only_todays_family(self, app):
        app.exercises.mark_performed("cat_cow")   # mobility: Monday's family
        app.exercises.mark_performed("push_up")   # strength
        app.exercises.reset_todays_exercises()
        assert app.exercises.get("cat_cow").last_performed_date is None
        assert app.exercises.get("push_up").last_performed_date is not None

    def test_reset_to_defaults(self, app):
        app.exercises.adjust_reps("push_up", 50)
        app.exercises.reset_to_defaults()
        assert app.exercises.get("push_up") == get_seed_exercise("push_up")

    def test_add_and_remove(self, app):
        custom = Exercise(id="my_drill", name="My Drill", type=ExerciseType.MOBILITY)
        assert app.exercises.add_exercise(custom)[-1] == custom
        assert app.exercises.get("my_drill") is not None
        app.exercises.remove_exercise("my_drill")
        assert app.exercises.get("my_drill") is None

    def test_random_exercise_matches_day(self, app):
        assert app.exercises.random_exercise().type == ExerciseType.MOBILITY

    def test_history_statistics(self, app):
        app.exercises.complete_session("push_up", 10, was_easy=True)
        app.exercises.complete_session("push_up", 12, was_easy=True)
        stats = app.exercises.history_statistics()
        assert stats.total_completed == 2
        assert stats.counts_by_name == [("Push-Up", 2)]


# ======================================================================
# ScheduleService
# ======================================================================


class TestScheduleService:
    def test_builds_todays_schedule(self, app, storage, clock, reminders):
        scheduled = app.schedule.ensure_today_scheduled()
        assert len(scheduled) == 6
        assert all(app.exercises.get(s.exercise_id).type == ExerciseType.MOBILITY for s in scheduled)
        assert set(reminders.pending) == {MORNING_REMINDER_ID, AFTERNOON_REMINDER_ID}
        assert storage.load_last_scheduled_date() == clock.today()

    def test_idempotent_within_day(self, app):
        first = app.schedule.ensure_today_scheduled()
        assert app.schedule.ensure_today_scheduled() == first

    def test_rebuilds_next_day(self, app, clock):
        app.schedule.ensure_today_scheduled()
        clock.advance(days=1)
        scheduled = app.schedule.ensure_today_scheduled()
        assert all(s.scheduled_time.date() == clock.today() for s in scheduled)
        assert all(app.exercises.get(s.exercise_id).type == ExerciseType.STRENGTH for s in scheduled)

    def test_stale_schedule_is_not_today(self, app, clock):
        app.schedule.ensure_today_scheduled()
        clock.advance(days=1)
        assert app.schedule.today() == []

    def test_reconciles_with_history(self, app, storage):
        scheduled = app.schedule.ensure_today_scheduled()
        target = scheduled[2]
        app.exercises.complete_session(target.exercise_id, 1, was_easy=False)
        storage.save_scheduled_exercises(scheduled)  # schedule update lost

        reconciled = app.schedule.ensure_today_scheduled()
        assert [s.is_completed for s in reconciled] == [s.notification_id == target.notification_id
                                                        for s in scheduled]

    def test_one_completion_closes_one_repeated_entry(self, app):
        mobility = [e for e in app.exercises.list_exercises() if e.type == ExerciseType.MOBILITY]
        for exercise in mobility[2:]:
            app.exercises.set_enabled(exercise.id, False)
        scheduled = app.schedule.ensure_today_scheduled()
        assert len(scheduled) == 6
        repeated = scheduled[0].exercise_id

        app.exercises.complete_session(repeated, 1, was_easy=False)
        reconciled = app.schedule.ensure_today_scheduled()
        assert [s.is_completed for s in reconciled].count(True) == 1
        assert app.schedule.progress() == (1, 6)

    def test_notifications_disabled(self, app, reminders):
        app.settings.update(notifications_enabled=False)
        app.schedule.ensure_today_scheduled()
        assert reminders.pending == {}

    def test_only_future_session_reminders(self, app, clock, reminders):
        clock.set(clock.now().replace(hour=12))
        app.schedule.ensure_today_scheduled()
        assert set(reminders.pending) == {AFTERNOON_REMINDER_ID}

    def test_no_enabled_exercises(self, app, reminders):
        for exercise in app.exercises.list_exercises():
            app.exercises.set_enabled(exercise.id, False)
        assert app.schedule.ensure_today_scheduled() == []
        assert reminders.pending == {}

    def test_reschedule_after_settings_change(self, app):
        app.schedule.ensure_today_scheduled()
        app.settings.update(snacks_per_day=4)
        scheduled = app.schedule.reschedule_today()
        assert len(scheduled) == 4
        assert [s.session for s in scheduled] == [SessionSlot.MORNING] * 2 + [SessionSlot.AFTERNOON] * 2

    def test_handle_tap(self, app):
        entry = app.schedule.ensure_today_scheduled()[1]
        assert app.schedule.handle_tap(entry.exercise_id) == entry
        app.exercises.complete_session(entry.exercise_id, 1, was_easy=False)
        assert app.schedule.handle_tap(entry.exercise_id) is None

    def test_handle_snooze(self, app, storage, clock, reminders):
        entry = app.schedule.ensure_today_scheduled()[3]
        clock.set(entry.scheduled_time)

        snoozed = app.schedule.handle_snooze(entry.exercise_id, 20)

        assert snoozed.notification_id == entry.notification_id + 100
        assert snoozed.scheduled_time == entry.scheduled_time + datetime.timedelta(minutes=20)
        assert reminders.pending[snoozed.notification_id].exercise_id == entry.exercise_id
        stored_ids = [s.notification_id for s in storage.load_scheduled_exercises()]
        assert snoozed.notification_id in stored_ids
        assert entry.notification_id not in stored_ids
        assert app.schedule.handle_tap(entry.exercise_id) == snoozed

    def test_handle_snooze_unscheduled_exercise(self, app, storage):
        scheduled = app.schedule.ensure_today_scheduled()
        ids = {s.exercise_id for s in scheduled}
        outsider = next(e.id for e in app.exercises.list_exercises() if e.id not in ids)

        snoozed = app.schedule.handle_snooze(outsider)
        assert snoozed.notification_id == 100
        assert storage.load_scheduled_exercises() == scheduled

    def test_progress(self, app):
        scheduled = app.schedule.ensure_today_scheduled()
        app.schedule.update_entry(scheduled[0].mark_completed())
        assert app.schedule.progress() == (1, 6)


# ======================================================================
# SprintService
# ======================================================================


class TestSprintService:
    def test_ensure_scheduled(self, app, storage):
        sprints = app.sprints.ensure_scheduled()
        assert len(sprints) == 4
        assert storage.load_sprint_sessions() == sprints
        assert app.sprints.ensure_scheduled() == sprints

    def test_reminder_on_sprint_day(self, app, clock, reminders):
        app.sprints.add_ad_hoc(clock.today(), 3)
        app.sprints.ensure_scheduled()
        reminder = reminders.pending[SPRINT_REMINDER_ID]
        assert reminder.fire_at == datetime.datetime.combine(clock.today(), datetime.time(9, 0))

    def test_reminder_fires_now_when_late(self, app, clock, reminders):
        clock.set(clock.now().replace(hour=17))
        app.sprints.add_ad_hoc(clock.today(), 3)
        app.sprints.ensure_scheduled()
        assert reminders.pending[SPRINT_REMINDER_ID].fire_at == clock.now()

    def test_reveal_persists(self, app, storage, clock):
        storage.save_sprint_sessions([SprintSession(date=clock.today())])

        session = app.sprints.todays_sprint()
        assert 3 <= session.target_sets <= 6
        assert app.sprints.todays_sprint().target_sets == session.target_sets
        assert storage.load_sprint_sessions()[0].target_sets == session.target_sets

    def test_increment_to_completion(self, app, clock, reminders):
        app.sprints.add_ad_hoc(clock.today(), 3)
        app.sprints.ensure_scheduled()

        sessions = [app.sprints.increment() for _ in range(5)]
        assert [s.completed_sets for s in sessions] == [1, 2, 3, 3, 3]
        assert sessions[2].completed
        assert SPRINT_REMINDER_ID not in reminders.pending

    def test_increment_without_sprint_today(self, app, clock):
        app.sprints.add_ad_hoc(clock.today() + datetime.timedelta(days=2), 3)
        assert app.sprints.increment() is None
        assert app.sprints.complete_today() is None

    def test_complete_today(self, app, clock):
        app.sprints.add_ad_hoc(clock.today(), 5)
        session = app.sprints.complete_today()
        assert session.completed
        assert session.completed_sets == 5

    def test_reschedule_month(self, app, clock):
        app.sprints.ensure_scheduled()
        sprints = app.sprints.reschedule_month()
        october = [s for s in sprints if s.is_in_month(2026, 10)]
        assert 1 <= len(october) <= 2
        assert all(s.date >= clock.today() for s in october)

    def test_queries_and_statistics(self, app, clock):
        today = clock.today()
        app.sprints.add_ad_hoc(today - datetime.timedelta(days=7), 3)
        app.sprints.add_ad_hoc(today + datetime.timedelta(days=7), 3)
        clock.advance(days=-7)
        app.sprints.complete_today()
        clock.advance(days=7)

        assert [s.date for s in app.sprints.past()] == [today - datetime.timedelta(days=7)]
        assert app.sprints.next_session().date == today + datetime.timedelta(days=7)
        assert len(app.sprints.upcoming()) == 1
        stats = app.sprints.statistics()
        assert stats.total_completed == 1
        assert stats.current_streak == 1


# ======================================================================
# WalkService / SettingsService
# ======================================================================


class TestWalkService:
    def test_walks_accumulate(self, app, storage):
        app.walks.add_walk(600, 900.0)
        record = app.walks.add_walk(300, 400.0)
        assert record.total_seconds == 900
        assert len(storage.load_daily_walks()) == 1

    def test_week_statistics(self, app, clock):
        app.walks.add_walk(600)
        clock.advance(days=1)
        app.walks.add_walk(1200)
        stats = app.walks.this_week()
        assert stats.completed_days == 2
        assert stats.current_streak == 2
        assert stats.total_seconds == 1800

    def test_log_today_overwrites(self, app):
        app.walks.add_walk(600)
        app.walks.log_today(total_seconds=60, notes="Short")
        assert app.walks.today().total_seconds == 60
        assert app.walks.all_time().total_days == 1

    def test_month_and_year(self, app):
        app.walks.add_walk(600)
        assert app.walks.this_month().completed_days == 1
        assert app.walks.this_year().period_start == datetime.date(2026, 1, 1)


class TestSettingsService:
    def test_defaults_until_saved(self, app, storage):
        assert app.settings.load().snacks_per_day == 6
        assert storage.load_settings() is None

    def test_update_clamps(self, app):
        assert app.settings.update(snacks_per_day=0).snacks_per_day == 1

    def test_complete_onboarding(self, app, storage):
        app.settings.complete_onboarding()
        assert storage.load_settings().has_seen_onboarding


# ======================================================================
# Startup
# ======================================================================


class TestStartup:
    def test_startup_runs_daily_checks(self, app, storage):
        app.startup()
        assert storage.load_exercises() is not None
        assert len(storage.load_scheduled_exercises()) == 6
        assert len(storage.load_sprint_sessions()) == 4

    def test_startup_twice_is_stable(self, app, storage):
        app.startup()
        scheduled = storage.load_scheduled_exercises()
        sprints = storage.load_sprint_sessions()
        app.startup()
        assert storage.load_scheduled_exercises() == scheduled
        assert storage.load_sprint_sessions() == sprints

"""What would Primal Pal ask of you TODAY?

Builds today's exercise schedule, the sprint calendar and walk statistics
against a scratch in-memory database and prints them.

Usage:
    python scripts/simulate_today.py [YYYY-MM-DD]
"""

import datetime
import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load .env file
from dotenv import load_dotenv

load_dotenv()

from sqlmodel import Session

from app.core.clock import FixedClock
from app.db.init_db import init_db
from app.db.session import make_engine
from app.main import build_app
from app.primal.selection import alternating_weekday_policy
from app.primal.walks import format_duration

SEED = 42


def main(day: datetime.date) -> None:
    engine = make_engine("sqlite://")
    init_db(engine)
    clock = FixedClock(datetime.datetime.combine(day, datetime.time(7, 30)))

    with Session(engine) as session:
        app = build_app(session, clock=clock, rng=random.Random(SEED))
        app.settings.update(secondary_discipline_enabled=True)
        app.startup()

        sport_day = alternating_weekday_policy(day)
        print("=" * 60)
        print(f"Primal Pal: {day:%A %Y-%m-%d} ({'sport day' if sport_day else 'rest day'})")
        print("=" * 60)

        # ─── Exercise schedule ─────────────────────────────────────
        print()
        print("Today's schedule")
        for entry in app.schedule.today():
            exercise = app.exercises.get(entry.exercise_id)
            target = f"{exercise.current_reps} {exercise.unit_label}" if exercise else "?"
            print(f"  {entry.scheduled_time:%H:%M}  [{entry.session.value:<9}]  {entry.exercise_name:<32} {target}")

        print()
        print("Pending reminders")
        for reminder in sorted(app.reminders.pending.values(), key=lambda r: r.fire_at):
            print(f"  #{reminder.notification_id:<4} {reminder.fire_at:%Y-%m-%d %H:%M}  {reminder.title}")

        # ─── Simulated morning ─────────────────────────────────────
        scheduled = app.schedule.today()
        if scheduled:
            first = scheduled[0]
            clock.set(first.scheduled_time)
            updated = app.exercises.complete_session(first.exercise_id, actual_amount=100, was_easy=True)
            print()
            print(f"Completed {updated.name}; next target {updated.current_reps} {updated.unit_label}")
            done, total = app.schedule.progress()
            print(f"Progress: {done}/{total}")

        # ─── Sprints ───────────────────────────────────────────────
        print()
        print("Sprint calendar")
        for s in app.sprints.upcoming():
            print(f"  {s.date:%Y-%m-%d}  {s.state}")
        todays = app.sprints.todays_sprint()
        if todays is not None:
            print(f"Today is a sprint day: {todays.target_sets} sprints")

        # ─── Walks ─────────────────────────────────────────────────
        app.walks.add_walk(25 * 60, distance_meters=2400)
        week = app.walks.this_week()
        print()
        print(f"Walks this week: {week.completed_days} days, {format_duration(week.total_seconds)}, "
              f"streak {week.current_streak}")


if __name__ == "__main__":
    target_day = datetime.date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else datetime.date.today()
    main(target_day)

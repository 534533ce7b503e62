"""
Built-in exercise catalog.

Seed data used on first launch and merged into the stored list on every
start: exercises added to the catalog since the user's last launch are
appended, and exercises retired from the catalog (``REMOVED_EXERCISE_IDS``)
are dropped.  User progression on existing entries is never touched.

To add a new exercise, append it to ``_EXERCISES``.
"""

from __future__ import annotations

from app.schemas.exercise import Exercise, ExerciseType

# ======================================================================
# Helpers
# ======================================================================

# Aliases for brevity in the table below
S = ExerciseType.STRENGTH
M = ExerciseType.MOBILITY
D = ExerciseType.SECONDARY_DISCIPLINE

# Exercises retired from the catalog; purged from stored lists on load.
REMOVED_EXERCISE_IDS: frozenset[str] = frozenset({
    "single_leg_glute_bridge",
    "duck_walk",
    "broad_jump",
    "prone_ywt",
    "bear_crawl",
    "crab_walk",
    "dead_bug",
    "hollow_body_hold",
    "l_sit",
})

# ======================================================================
# Built-in exercises
# ======================================================================

_EXERCISES: list[Exercise] = [
    # ── Strength ──────────────────────────────────────────────────
    Exercise(id="push_up", name="Push-Up", type=S, current_reps=10,
             description="Hands under shoulders, body in one line, chest to the floor.",
             related_stretch="Doorway chest stretch. 30 seconds each side."),
    Exercise(id="air_squat", name="Air Squat", type=S, current_reps=15,
             description="Feet shoulder-width, hips below knees, drive up through the heels.",
             related_stretch="Standing quad stretch. 30 seconds each leg."),
    Exercise(id="reverse_lunge", name="Reverse Lunge", type=S, current_reps=10,
             description="Step back, back knee hovers above the floor, alternate legs.",
             related_stretch="Kneeling hip flexor stretch. 30 seconds each side."),
    Exercise(id="glute_bridge", name="Glute Bridge", type=S, current_reps=15,
             description="Lying on the back, squeeze the glutes to lift the hips.",
             related_stretch="Figure-four stretch. 30 seconds each side."),
    Exercise(id="pike_push_up", name="Pike Push-Up", type=S, current_reps=8,
             description="Hips high, lower the head toward the floor between the hands.",
             related_stretch="Thread the needle. 5 slow reps each side."),
    Exercise(id="chair_dip", name="Chair Dip", type=S, current_reps=10,
             description="Hands on a sturdy chair, lower until elbows reach 90 degrees.",
             related_stretch="Overhead triceps stretch. 20 seconds each arm."),
    Exercise(id="calf_raise", name="Calf Raise", type=S, current_reps=20,
             description="Rise onto the toes, pause, lower slowly.",
             related_stretch="Wall calf stretch. 30 seconds each leg."),
    Exercise(id="plank", name="Plank", type=S, current_reps=30, is_timed=True,
             description="Forearms under shoulders, ribs down, squeeze the glutes.",
             related_stretch="Cobra stretch. 20 seconds."),
    Exercise(id="wall_sit", name="Wall Sit", type=S, current_reps=30, is_timed=True,
             description="Back against the wall, thighs parallel to the floor.",
             related_stretch="Standing hamstring stretch. 30 seconds."),
    Exercise(id="superman", name="Superman", type=S, current_reps=12,
             description="Face down, lift arms and legs together, hold one second.",
             related_stretch="Child's pose. 30 seconds."),

    # ── Mobility ──────────────────────────────────────────────────
    Exercise(id="cat_cow", name="Cat-Cow", type=M, current_reps=10,
             description="On all fours, alternate rounding and arching the spine.",
             related_stretch="Child's pose. 30 seconds."),
    Exercise(id="worlds_greatest_stretch", name="World's Greatest Stretch", type=M, current_reps=6,
             description="Lunge, elbow to instep, rotate the arm to the ceiling.",
             related_stretch="Pigeon pose. 30 seconds each side."),
    Exercise(id="deep_squat_hold", name="Deep Squat Hold", type=M, current_reps=30, is_timed=True,
             description="Sit in the bottom of a squat, heels down, chest up.",
             related_stretch="Ankle rocks. 10 each side."),
    Exercise(id="hip_90_90", name="90/90 Hip Switch", type=M, current_reps=10,
             description="Seated with both knees at 90 degrees, rotate side to side.",
             related_stretch="Butterfly stretch. 30 seconds."),
    Exercise(id="thoracic_rotation", name="Thoracic Rotation", type=M, current_reps=8,
             description="Side-lying, open the top arm across the body and follow it with the eyes.",
             related_stretch="Open book stretch. 5 slow reps each side."),
    Exercise(id="shoulder_dislocate", name="Shoulder Pass-Through", type=M, current_reps=10,
             description="Wide grip on a band or towel, pass it overhead and back.",
             related_stretch="Cross-body shoulder stretch. 20 seconds each arm."),
    Exercise(id="leg_swing", name="Leg Swing", type=M, current_reps=12,
             description="Hold a wall, swing one leg front to back, then side to side.",
             related_stretch="Standing hamstring stretch. 30 seconds."),
    Exercise(id="ankle_circle", name="Ankle Circles", type=M, current_reps=10,
             description="Slow full circles in both directions, each foot.",
             related_stretch="Wall calf stretch. 30 seconds each leg."),
    Exercise(id="neck_mobility", name="Neck Mobility", type=M, current_reps=5,
             description="Slow nods, turns and tilts within a pain-free range.",
             related_stretch="Upper trapezius stretch. 20 seconds each side."),
    Exercise(id="cossack_squat", name="Cossack Squat", type=M, current_reps=8,
             description="Wide stance, shift into one hip keeping the other leg straight.",
             related_stretch="Frog stretch. 30 seconds."),

    # ── Secondary discipline (Taekwondo drills) ──────────────────
    Exercise(id="front_kick", name="Front Kick (Ap Chagi)", type=D, current_reps=10,
             description="Chamber the knee, snap the ball of the foot forward, recoil.",
             related_stretch="Standing hamstring stretch. 30 seconds each leg."),
    Exercise(id="roundhouse_kick", name="Roundhouse Kick (Dollyeo Chagi)", type=D, current_reps=10,
             description="Pivot on the support foot, strike with the instep.",
             related_stretch="Side lunge stretch. 30 seconds each side."),
    Exercise(id="side_kick", name="Side Kick (Yeop Chagi)", type=D, current_reps=8,
             description="Chamber sideways, drive the heel out in a straight line.",
             related_stretch="Butterfly stretch. 30 seconds."),
    Exercise(id="back_kick", name="Back Kick (Dwi Chagi)", type=D, current_reps=8,
             description="Turn, look over the shoulder, thrust the heel straight back.",
             related_stretch="Kneeling hip flexor stretch. 30 seconds each side."),
    Exercise(id="axe_kick", name="Axe Kick (Naeryeo Chagi)", type=D, current_reps=8,
             description="Raise a straight leg high and bring the heel down.",
             related_stretch="Front split progression. 30 seconds each side."),
    Exercise(id="horse_stance", name="Horse Stance (Juchum Seogi)", type=D, current_reps=30, is_timed=True,
             description="Wide stance, knees out, thighs toward parallel, back upright.",
             related_stretch="Deep squat hold. 20 seconds."),
    Exercise(id="poomsae_basics", name="Poomsae Basics", type=D, current_reps=3,
             description="Run the first form slowly, focusing on stances and chambers.",
             related_stretch="Shoulder rolls. 10 each direction."),
    Exercise(id="fast_footwork", name="Fast Footwork", type=D, current_reps=30, is_timed=True,
             description="Light bouncing steps forward, back and sideways.",
             related_stretch="Wall calf stretch. 30 seconds each leg."),
]

# ======================================================================
# Catalog storage
# ======================================================================

EXERCISE_CATALOG: dict[str, Exercise] = {ex.id: ex for ex in _EXERCISES}


def get_seed_exercise(exercise_id: str) -> Exercise | None:
    """Look up a catalog exercise by its ID.  Returns ``None`` if not found."""
    return EXERCISE_CATALOG.get(exercise_id)


def seed_exercises() -> list[Exercise]:
    """Catalog exercises in table order.  Records are immutable, so sharing is safe."""
    return list(_EXERCISES)


def reconcile_with_seed(stored: list[Exercise]) -> tuple[list[Exercise], bool]:
    """Merge the catalog into a stored exercise list.

    Retired ids are removed, catalog exercises missing from *stored* are
    appended.  Existing entries keep their progression state.

    Returns:
        ``(exercises, changed)``
    """
    kept = [e for e in stored if e.id not in REMOVED_EXERCISE_IDS]
    known = {e.id for e in kept}
    new = [e for e in _EXERCISES if e.id not in known]
    changed = bool(new) or len(kept) != len(stored)
    return kept + new, changed

"""
Seed demo habits and a few weeks of completions for the default owner.
Run:  python seed_demo_data.py
"""
import random
from datetime import timedelta

# ── bootstrap ────────────────────────────────────────────────────
from habitgrid.config import get_settings
from habitgrid.infrastructure.db.session import get_session_factory, init_db
from habitgrid.application.habits import CreateHabitUseCase, list_habits
from habitgrid.application.completions import MarkHabitCompleteUseCase
from habitgrid.utils.dates import local_now, to_day

init_db()
db = get_session_factory()()
OWNER_ID = get_settings().DEFAULT_OWNER_ID

# habit name -> chance of being done on a given day
DEMO_HABITS = {
    "Leer 20 minutos": 0.8,
    "Correr": 0.4,
    "Meditar": 0.6,
    "Beber 2 litros de agua": 0.9,
}
WEEKS_BACK = 6

existing = {h.name: h.habit_id for h in list_habits(db, OWNER_ID)}
if existing:
    print(f"Owner {OWNER_ID} already has {len(existing)} habits, reusing them")

habit_ids = {}
for name in DEMO_HABITS:
    habit_ids[name] = existing.get(name) or CreateHabitUseCase(db).execute(OWNER_ID, name)

now = local_now()
today = to_day(now)
rng = random.Random(42)
mark = MarkHabitCompleteUseCase(db)

created = 0
for offset in range(WEEKS_BACK * 7, -1, -1):
    day = today - timedelta(days=offset)
    for name, chance in DEMO_HABITS.items():
        if rng.random() < chance and mark.execute(habit_ids[name], OWNER_ID, day=day, now=now):
            created += 1

db.close()
print(f"Done: {len(habit_ids)} habits, {created} new completions up to {today}")

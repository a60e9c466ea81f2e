"""
Print the size and weight recorded for every fish.

    (.venv) python print_fish.py
"""

from sqlalchemy import select

from divesight.db.session import SessionLocal
from divesight.models.fish import Fish


def _fmt(value) -> str:
    return "null" if value is None else f"{value:g}"


def main() -> None:
    db = SessionLocal()
    try:
        for f in db.scalars(select(Fish).order_by(Fish.name)):
            print(f"{f.name} -> sizeCm: {_fmt(f.size_cm)}, weightKg: {_fmt(f.weight_kg)}")
    finally:
        db.close()


if __name__ == "__main__":
    main()

"""
Wipe and re-populate the reference data (diving centers, fish, sensors).

Run this from the project root:

    (.venv) python reseed.py

This is destructive: every existing sighting is deleted as well.
"""

from divesight.core.config import settings
from divesight.db.init_db import init_db
from divesight.db.seed import reseed
from divesight.db.session import SessionLocal


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        print(f"[INFO] Reseeding {settings.database_url} ...")
        counts = reseed(
            db,
            center_lat=settings.diving_area_lat,
            center_lon=settings.diving_area_lon,
            radius_km=settings.diving_area_radius_km,
        )
        for table, count in counts.items():
            print(f"[INFO] Inserted {count} {table} rows")
        print("[INFO] Done.")
    finally:
        db.close()


if __name__ == "__main__":
    main()

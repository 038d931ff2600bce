"""Create missing tables and catch up columns/indexes on an existing member directory database."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import engine, Base
import app.models  # noqa: F401 - registers profile, request and timeline models
from app.utils.schema_sync import sync_missing_schema_objects


def init_db():
    print(f"Preparing schema on {engine.url.render_as_string(hide_password=True)} ...")
    Base.metadata.create_all(bind=engine)
    added = sync_missing_schema_objects(engine, Base.metadata)
    if added:
        print("Added: " + ", ".join(added))
    print("Database ready.")


if __name__ == "__main__":
    init_db()

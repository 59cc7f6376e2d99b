# scripts/seed_demo.py
import os, sys
# If running script directly, ensure repo root is on path
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from dotenv import load_dotenv
load_dotenv()

from app.db import Base, engine, SessionLocal
from app.seed import seed_demo_data


def ensure_tables():
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    ensure_tables()
    db = SessionLocal()
    try:
        if seed_demo_data(db):
            print("Seeded demo applicants and schemes.")
        else:
            print("Database already populated, no seeding done.")
    except Exception as e:
        print(f"Error seeding data: {e}")
        raise
    finally:
        db.close()

"""Seed the database with demo admins and member profiles in each review state."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime
from app.database import SessionLocal, engine, Base
import app.models  # noqa: F401

from app.models.user import User
from app.models.profile import Profile
from app.models.update_request import ProfileUpdateRequest


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        users = [
            User(email="admin@example.com", name="Asha Admin", role="admin"),
            User(email="rajesh.kumar@example.com", name="Rajesh Kumar", role="member"),
            User(email="priya.sharma@example.com", name="Priya Sharma", role="member"),
            User(email="arjun.mehta@example.com", name="Arjun Mehta", role="member"),
        ]
        db.add_all(users)
        db.flush()

        profiles = [
            Profile(
                user_id=users[1].user_id,
                first_name="Rajesh",
                last_name="Kumar",
                email="rajesh.kumar@example.com",
                phone="+91-98765-43210",
                program="MBA-PGDBM",
                graduation_year=2018,
                organization="Apollo Hospitals",
                organization_type="Hospital/Clinic",
                position="Vice President - Operations",
                experience_level="Senior",
                city="Mumbai",
                country="India",
                bio="Healthcare operations leader.",
                skills=["Operations", "Strategy"],
                interests=["Digital Health"],
                organizations=[],
                preferred_mode_of_communication=["email"],
                approval_status="approved",
                is_public=True,
                approved_at=datetime.utcnow(),
            ),
            Profile(
                user_id=users[2].user_id,
                first_name="Priya",
                last_name="Sharma",
                email="priya.sharma@example.com",
                program="PGDM",
                graduation_year=2021,
                organization="Infosys",
                organization_type="IT/Software",
                position="Product Manager",
                experience_level="Mid",
                city="Bengaluru",
                country="India",
                skills=["Product", "Analytics"],
                interests=["Mentoring"],
                organizations=[],
                preferred_mode_of_communication=["email", "linkedin"],
                approval_status="pending",
            ),
            Profile(
                user_id=users[3].user_id,
                first_name="Arjun",
                last_name="Mehta",
                email="arjun.mehta@example.com",
                organization="Unknown",
                skills=[],
                interests=[],
                organizations=[],
                preferred_mode_of_communication=[],
                approval_status="rejected",
                rejection_reason="Please add your program and graduation year.",
            ),
        ]
        db.add_all(profiles)
        db.flush()

        db.add(
            ProfileUpdateRequest(
                profile_user_id=users[1].user_id,
                submitted_payload={"position": "Senior Vice President - Operations", "city": "Pune"},
                status="pending",
            )
        )

        db.commit()
        print("Seed data created successfully.")
        print("Login emails: admin@example.com, rajesh.kumar@example.com, priya.sharma@example.com, arjun.mehta@example.com")
    except Exception as e:
        db.rollback()
        print(f"Seeding failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()

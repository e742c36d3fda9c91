# storefront/data/seed.py
from storefront.data.database import SessionLocal
from storefront.data.models.user import UserModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_USERS = [
    {"id": 1, "name": "Demo Customer", "address": "1 Market Street", "phone": "+1-555-0100"},
    {"id": 2, "name": "No Profile Customer", "address": None, "phone": None},
]


def seed(session_factory=SessionLocal):
    db = session_factory()
    try:
        # not forcing: only seed if empty
        if db.query(UserModel).first():
            return
        for data in DEMO_USERS:
            db.add(UserModel(**data))
        db.commit()
        logger.info(f"Seeded {len(DEMO_USERS)} demo users")
    finally:
        db.close()

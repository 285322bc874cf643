from app_logger import get_logger
from schemas.classes import ClassCreate
from storage.base import RecordStore

log = get_logger("seed")

SAMPLE_CLASSES = [
    {"name": "9-A", "standard": 9, "section": "A", "class_teacher": "Mrs. Sharma", "room": "101", "capacity": 35},
    {"name": "9-B", "standard": 9, "section": "B", "class_teacher": "Mr. Kumar", "room": "102", "capacity": 35},
    {"name": "10-A", "standard": 10, "section": "A", "class_teacher": "Mrs. Patel", "room": "201", "capacity": 40},
    {"name": "10-B", "standard": 10, "section": "B", "class_teacher": "Mr. Singh", "room": "202", "capacity": 40},
    {"name": "11-A", "standard": 11, "section": "A", "class_teacher": "Dr. Reddy", "room": "301", "capacity": 30},
    {"name": "12-A", "standard": 12, "section": "A", "class_teacher": "Prof. Gupta", "room": "401", "capacity": 25},
]


def seed_sample_classes(store: RecordStore) -> int:
    """Add the sample classes that are missing; safe to run on every start."""
    added = 0
    for item in SAMPLE_CLASSES:
        if store.get_class_by_name(item["name"]):
            log.debug("Exists: %s", item["name"])
            continue
        store.create_class(ClassCreate(**item))
        added += 1
        log.info("Added class %s", item["name"])
    return added


if __name__ == "__main__":
    from config import get_settings
    from storage.sql import SqlStore

    settings = get_settings()
    store = SqlStore.from_url(settings.database_url)
    try:
        print(f"Seeded {seed_sample_classes(store)} classes into {settings.database_url}")
    finally:
        store.close()

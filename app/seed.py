"""
Demo data for local development

Inserts a handful of schedules (with their visit rows, tasks and activities)
when the schedules table is empty. Records can also be supplied as dicts with
string timestamps, e.g. loaded from a JSON file by ``run_seed.py``.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

from sqlalchemy.orm import sessionmaker

from .domain.schedules.repository import ScheduleRepository
from .models import Schedule, ScheduleStatus
from .shared.validators import parse_timestamp, validate_coordinates

logger = logging.getLogger(__name__)

DEFAULT_TASKS = [
    "Assist with morning medication",
    "Help with personal hygiene",
    "Prepare light meal",
    "Check vital signs",
    "Light housekeeping",
]

DEFAULT_ACTIVITIES = [
    {
        "title": "Room Cleaning",
        "description": "Clean and organize the client's living room and bedroom",
        "is_resolved": False,
        "reason": "",
    },
    {
        "title": "Medication Check",
        "description": "Verify medication schedule and ensure proper dosage",
        "is_resolved": True,
        "reason": "",
    },
    {
        "title": "Meal Preparation",
        "description": "Prepare healthy lunch according to dietary requirements",
        "is_resolved": False,
        "reason": "Client was not hungry at the time",
    },
]


def default_records(now: Optional[datetime] = None) -> list[dict]:
    """Two shifts today, one missed yesterday, one tomorrow"""
    today = (now or datetime.now()).replace(hour=0, minute=0, second=0, microsecond=0)
    yesterday = today - timedelta(days=1)
    tomorrow = today + timedelta(days=1)
    fmt = "%Y-%m-%d %H:%M:%S"

    def window(day, start_hour, end_hour):
        return (
            (day + timedelta(hours=start_hour)).strftime(fmt),
            (day + timedelta(hours=end_hour)).strftime(fmt),
        )

    rows = [
        ("John Smith", window(today, 9, 11), 40.7128, -74.0060, "upcoming"),
        ("Mary Johnson", window(today, 14, 16), 40.7589, -73.9851, "upcoming"),
        ("Robert Davis", window(yesterday, 10, 12), 40.6892, -74.0445, "missed"),
        ("Sarah Wilson", window(tomorrow, 8, 10), 40.7831, -73.9712, "upcoming"),
    ]
    return [
        {
            "client_name": name,
            "shift_start": start,
            "shift_end": end,
            "latitude": lat,
            "longitude": lng,
            "status": status,
        }
        for name, (start, end), lat, lng, status in rows
    ]


def _build_schedule(record: dict) -> dict:
    """Validate a raw record; raises KeyError, TypeError or ValueError on bad data"""
    latitude, longitude = validate_coordinates(
        float(record["latitude"]), float(record["longitude"])
    )
    return {
        "client_name": record["client_name"],
        "shift_start": parse_timestamp(record["shift_start"]),
        "shift_end": parse_timestamp(record["shift_end"]),
        "latitude": latitude,
        "longitude": longitude,
        "status": ScheduleStatus(record.get("status", "upcoming")),
    }


def seed_database(session_factory: sessionmaker, records: Optional[Iterable[dict]] = None) -> int:
    """
    Insert demo schedules if none exist.

    Returns the number of schedules created. Records with missing fields,
    unparseable timestamps or coordinates, or malformed activities are
    logged and skipped; nothing of a skipped record is written.
    """
    db = session_factory()
    try:
        if db.query(Schedule.id).first() is not None:
            logger.info("Data already exists, skipping seed")
            return 0

        created = 0
        for record in records if records is not None else default_records():
            # One commit per record: a record is stored whole or not at all
            try:
                ScheduleRepository.create_schedule(
                    db,
                    task_descriptions=record.get("tasks", DEFAULT_TASKS),
                    activities=record.get("activities", DEFAULT_ACTIVITIES),
                    **_build_schedule(record),
                )
            except (KeyError, TypeError, ValueError) as e:
                db.rollback()
                logger.warning(f"⚠️ Skipping seed record {record.get('client_name')!r}: {e}")
                continue
            created += 1

        logger.info(f"✅ Seeded {created} schedules")
        return created
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

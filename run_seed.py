"""
Seed the database with demo schedules
Usage: python run_seed.py [seed_file.json]

The optional JSON file holds a list of schedule records:
  {"client_name", "shift_start", "shift_end", "latitude", "longitude",
   "status"?, "tasks"?, "activities"?}
"""
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from app.database import create_db_engine, create_session_factory, init_db
from app.seed import seed_database

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def run_seed(seed_file_path: str | None = None) -> int:
    """Create tables if needed and load seed records"""
    records = None
    if seed_file_path:
        seed_file = Path(seed_file_path)
        if not seed_file.exists():
            logger.error(f"Seed file not found: {seed_file}")
            sys.exit(1)

        logger.info(f"Reading seed file: {seed_file}")
        with open(seed_file, 'r') as f:
            records = json.load(f)

    engine = create_db_engine()
    try:
        init_db(engine)
        return seed_database(create_session_factory(engine), records)
    finally:
        engine.dispose()


if __name__ == "__main__":
    try:
        created = run_seed(sys.argv[1] if len(sys.argv) > 1 else None)
        logger.info(f"✅ Seed completed ({created} schedules)")
    except Exception as e:
        logger.error(f"❌ Seed failed: {e}")
        sys.exit(1)

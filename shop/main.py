# shop/main.py
from shop.api import create_app
from shop.data.database import Base, engine, init_db
from shop.utils.logging import get_logger
import uvicorn

logger = get_logger(__name__)

logger.info("Initializing database...")

try:
    init_db()
    logger.info(f"Database tables ready: {sorted(Base.metadata.tables.keys())}")
except Exception as e:
    logger.error(f"Failed to create tables on {engine.url!r}: {e}")
    raise


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)

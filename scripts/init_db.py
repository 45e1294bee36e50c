"""Script to initialize the relational schema."""

from app.database import create_schema, make_engine
from app.models import metadata


def init_db() -> None:
    """Initialize the database by creating all tables."""
    engine = make_engine()
    create_schema(engine)
    engine.dispose()

    print(f"✓ Database initialized with {len(metadata.tables)} tables!")


if __name__ == "__main__":
    init_db()

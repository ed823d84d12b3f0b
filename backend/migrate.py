from pathlib import Path

from alembic import command
from alembic.config import Config

from rovart.config import settings

BACKEND_DIR = Path(__file__).resolve().parent
ALEMBIC_INI = BACKEND_DIR / "alembic.ini"


def apply_migrations(revision: str = "head"):
    print(f"Using DB: {settings.resolved_database_url}")

    cfg = Config(str(ALEMBIC_INI))
    cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))

    command.upgrade(cfg, revision)

    print("All migrations applied.")


if __name__ == "__main__":
    apply_migrations()

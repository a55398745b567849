"""
Terminal contact book: ContactService + JSON file storage + rich list view.
Run: python -m cli (from repo root, with .env or env vars set).
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Repo root: from src/cli/__main__.py go up to repo root (parent.parent.parent when in src layout)
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent
# Load .env from repo root or current dir
for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
    if path.exists():
        load_dotenv(path)
        break

from rich.console import Console

from cli.app import run
from rolodex.application import ContactBook, ContactService, load_initial_state
from rolodex.infrastructure import (
    CsvExporter,
    InMemoryPersonRepository,
    JsonContactBookStorage,
    load_tag_types,
)

DEFAULT_DATA_PATH = "data/rolodex.json"

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=os.environ.get("ROLODEX_LOG_LEVEL", "INFO").strip().upper() or "INFO",
)
logger = logging.getLogger(__name__)


def main() -> None:
    data_path = Path(os.environ.get("ROLODEX_DATA_PATH", "").strip() or DEFAULT_DATA_PATH)
    storage = JsonContactBookStorage(data_path.expanduser())
    persons, tag_types = load_initial_state(storage, load_tag_types())
    book = ContactBook(InMemoryPersonRepository(persons), tag_types)
    service = ContactService(book, storage=storage, exporter=CsvExporter())
    logger.info("Contact book running. Data file: %s", storage.path)
    run(service, Console())


if __name__ == "__main__":
    main()

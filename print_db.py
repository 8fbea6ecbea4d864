"""Print every image record stored in the project's SQLite database.

For each row this prints the id, stored filename, byte size and the content
type that downloads would be served with. It reuses the same `DATABASE_DIR`
behavior as the application via `utils.database_init.AsyncDatabaseInitializer`.

Run: set the `DATABASE_DIR` environment variable and run `python print_db.py`.
"""
import asyncio

from dotenv import load_dotenv

from dal.image_dal import ImageDAL
from models.image_record import ImageRecord
from utils.content_types import content_type_for
from utils.database_init import AsyncDatabaseInitializer


def format_record(record: ImageRecord) -> str:
    """Return a one-line summary of a stored image.

    Args:
        record: The image record to describe.
    """
    return (
        f"id={record.id}: file_name={record.file_name!r}; "
        f"size={len(record.data)}; content_type={content_type_for(record.file_name)}"
    )


async def main() -> None:
    """Ensure DB exists and print a summary of every stored image."""
    load_dotenv()
    # Never wipe the database from the inspection script.
    initializer = AsyncDatabaseInitializer(reset=False)
    records = await ImageDAL(initializer).find_all()
    print(f"Table: IMAGE ({len(records)} rows)")
    for record in records:
        print(f"  {format_record(record)}")


if __name__ == "__main__":
    asyncio.run(main())

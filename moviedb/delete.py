import logging
import os

from moviedb.config import load_settings


def drop_database(path, confirm=input):
    """Removes the database file after the operator types DELETE.

    The next bootstrap then rebuilds the database from the CSV extracts.
    """
    if not os.path.exists(path):
        print(f"No database at {path}, nothing to delete.")
        return False

    size = os.path.getsize(path)
    print(f"Found database {path} ({size:,} bytes)")

    answer = confirm("\nType 'DELETE' to confirm removing the database: ")
    if answer.strip().upper() != "DELETE":
        print("Aborted.")
        return False

    os.remove(path)
    logging.info(f"Removed {path}")
    print(f"Database {path} deleted.")
    return True


if __name__ == "__main__":
    drop_database(load_settings().database_path)

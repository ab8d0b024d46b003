"""Example usage of the minidb library."""

from pathlib import Path

from minidb import Engine, MiniDBError
from minidb.repl import print_result

database_file = Path("./example_database.txt")
engine = Engine(database_file=database_file)

# Define a table and its columns
for line in [
    "CREATE TABLE people",
    "ADD COLUMN id int PRIMARY",
    "ADD COLUMN name text NOTNULL",
    "ADD COLUMN email text UNIQUE",
]:
    print_result(engine.execute(line))

people = [
    "(1,Alice,alice@example.com)",
    "(2,Bob,bob@example.com)",
    "(3,'Smith, Jane',jane@example.com)",
    "(4,Diana,alice@example.com)",
    "(1,Eve,eve@example.com)",
]

print("\nInserting rows...")
for values in people:
    try:
        engine.execute(f"INSERT INTO people VALUES {values}")
        print(f"  Inserted: {values}")
    except MiniDBError as e:
        print(f"  Rejected: {values} ({e})")

print("\nAll people in database:")
print_result(engine.execute("SELECT * FROM people"))

print()
print_result(engine.execute("SAVE TO FILE"))
print(f"\n{database_file} ({database_file.stat().st_size} bytes):")
print(database_file.read_text())

print("=" * 60)
print("You can now query this data using the minidb shell:")
print(f"  minidb -d {database_file}")
print("\nExample commands:")
print("  LOAD FROM FILE")
print("  SELECT * FROM people")

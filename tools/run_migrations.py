from pathlib import Path
import sys

# Ensure project root is on sys.path when running directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invoicedesk.core.paths import db_path
from invoicedesk.data import db

if __name__ == "__main__":
    # Optional argument: path to another database file
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else db_path()
    db.configure(target)
    db.create_db_and_tables()
    print(f"Migration run complete: {target}")

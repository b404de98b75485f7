import json
import sys
from datetime import UTC, datetime

from collate_sides.cli import app

if __name__ == "__main__":
    try:
        app(prog_name="collate-sides")
    except Exception as e:
        # last-ditch log
        print(json.dumps({
            "ts": datetime.now(UTC).isoformat(),
            "level": "error",
            "event": "fatal",
            "error": str(e),
        }), file=sys.stderr)
        sys.exit(1)

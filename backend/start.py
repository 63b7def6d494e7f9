import os
import sys
import uvicorn
import socket

# DATABASE_URL must be set before campboard.db is imported
if not os.getenv("DATABASE_URL"):
    if getattr(sys, 'frozen', False):
        base_dir = os.path.dirname(sys.executable)
    else:
        base_dir = os.path.dirname(os.path.abspath(__file__))

    db_path = os.path.join(base_dir, "campboard.db")
    os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"
    print(f"[INFO] Using SQLite database at: {db_path}")

from campboard.db import Base, engine  # noqa: E402
import campboard.models  # noqa: E402,F401
from campboard.main import app as fastapi_app  # noqa: E402


def find_free_port(start_port=8000, max_attempts=10):
    """Find a free port starting from start_port"""
    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(('127.0.0.1', port))
                return port
        except OSError:
            continue
    raise RuntimeError(f"Could not find a free port in range {start_port}-{start_port + max_attempts}")


if __name__ == "__main__":
    if os.environ["DATABASE_URL"].startswith("sqlite"):
        # no alembic run for the bundled SQLite file
        Base.metadata.create_all(bind=engine)

    try:
        port = find_free_port(8000)
        if port != 8000:
            print(f"[WARN] Port 8000 in use, using port {port} instead")
    except RuntimeError:
        print("[ERROR] No free ports available")
        sys.exit(1)

    uvicorn.run(fastapi_app, host="127.0.0.1", port=port, reload=False)

"""
Point the app at a throwaway SQLite file before anything imports it,
then create the schema once. Runs before any test module loads.
"""
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="physiotrack-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ.pop("OPENAI_API_KEY", None)

from physiotrack.db import Base, engine  # noqa: E402
from physiotrack import models  # noqa: E402,F401

Base.metadata.create_all(engine)

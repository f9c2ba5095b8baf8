#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Uses a local SQLite file (or TEST_DATABASE_URL when set) so local experiments
never touch shared data. Tables are created on start.
"""
import os
from pathlib import Path

os.chdir(Path(__file__).parent)

# Force test database for local development
os.environ["IS_TESTING"] = "true"
os.environ.setdefault("TEST_DATABASE_URL", "sqlite:///./slotbook_dev.db")

import uvicorn

if __name__ == "__main__":
    from slotbook.database import Base, engine
    import slotbook.models  # noqa: F401

    Base.metadata.create_all(bind=engine)

    print("Starting slot engine development server with TEST database...")
    print("Access at: http://localhost:8000")
    print("API Docs: http://localhost:8000/docs")

    uvicorn.run("slotbook.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")

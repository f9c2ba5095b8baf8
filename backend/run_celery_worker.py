#!/usr/bin/env python3
# backend/run_celery_worker.py
"""
Development Celery worker runner for the expired-lock sweep.
"""
import os
from pathlib import Path
import subprocess
import sys

os.chdir(Path(__file__).parent)

if __name__ == "__main__":
    queues = os.getenv("CELERY_QUEUES") or "celery,maintenance"
    print(f"Starting Celery worker, consuming queues: {queues}")

    cmd = [
        sys.executable,
        "-m",
        "celery",
        "-A",
        "slotbook.tasks.celery_app",
        "worker",
        "--loglevel=info",
        "--concurrency=2",
        "--max-tasks-per-child=100",
        "-Q",
        queues,
    ]

    subprocess.run(cmd)

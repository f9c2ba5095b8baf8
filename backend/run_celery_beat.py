#!/usr/bin/env python3
# backend/run_celery_beat.py
"""
Development Celery beat runner; schedules the expired-lock sweep.
"""
import os
from pathlib import Path
import subprocess
import sys

os.chdir(Path(__file__).parent)

if __name__ == "__main__":
    print("Starting Celery beat (expired slot lock sweep)...")

    cmd = [sys.executable, "-m", "celery", "-A", "slotbook.tasks.celery_app", "beat", "--loglevel=info"]

    subprocess.run(cmd)

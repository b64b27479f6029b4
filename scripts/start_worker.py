#!/usr/bin/env python3
# =============================================================================
# scripts/start_worker.py - Celery Worker Entry Point
# =============================================================================
# Starts a Celery worker with an embedded beat scheduler, so the daily
# delivery scheduler runs at SCHEDULE_TODAY_HOUR:SCHEDULE_TODAY_MINUTE IST.
#
# Usage:
#   python scripts/start_worker.py
#
#   # Or use Celery CLI directly
#   celery -A workers.celery_app worker -B -Q default,scheduler --loglevel=info
#
# Prerequisites:
#   - Redis must be running
#   - Environment variables must be set (.env file)
#   - Run exactly one beat process per deployment, or deliveries are
#     inserted once per beat
# =============================================================================

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from workers.celery_app import celery_app  # noqa: E402


def main():
    """Start the Celery worker with beat."""
    print("=" * 60)
    print("NutriFit Celery Worker (with beat)")
    print("=" * 60)
    print()
    print("Starting worker...")
    print("Press Ctrl+C to stop")
    print()

    celery_app.worker_main([
        "worker",
        "--beat",
        "--queues=default,scheduler",
        "--loglevel=info",
        "--concurrency=1",
    ])


if __name__ == "__main__":
    main()

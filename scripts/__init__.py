# =============================================================================
# scripts/ - Operational Scripts
# =============================================================================
# - seed.py: Demo data seeder
# - start_worker.py: Celery worker + beat launcher
# =============================================================================

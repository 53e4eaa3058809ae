"""
Test suite for the supplier ordering service.

Run all tests: pytest
Run with coverage: pytest --cov=. --cov-report=html
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_alert_scan_service.py -v
"""

"""
Spellcheck Tests Package
========================
Test suite for the spellcheck engine and its hosts.

Run all tests: python3 -m pytest tests/ -v
Run specific: python3 -m pytest tests/test_engine.py -v
"""

"""Integration tests for lokalise-sync.

These tests run the export and import tasks end to end against a real
filesystem. Only the python-lokalise-api client is replaced, so the
APIWrapper, RetryExecutor, FileWalker and BundleProcessor all take part.

Use the pytest mark to run them on their own:
    pytest tests/integration -m integration
"""

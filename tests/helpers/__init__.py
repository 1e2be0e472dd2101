"""Test helpers for lokalise-sync tests."""

from .bundle_builder import build_bundle, write_bundle
from .fake_api import FakeTranslationsAPI, FakeProcess

__all__ = [
    'build_bundle',
    'write_bundle',
    'FakeTranslationsAPI',
    'FakeProcess',
]

"""Playwright UI layer: framework, page objects, workflow modules and journey tests."""

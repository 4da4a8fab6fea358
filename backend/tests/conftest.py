"""Root conftest — shared test configuration."""

import os

# Keep tests independent of a developer's .env / shell settings
os.environ.setdefault("REFRESH_FAILURE_POLICY", "surface")
os.environ.setdefault("COALESCE_REFRESHES", "true")
os.environ.setdefault("LOG_FORMAT", "text")

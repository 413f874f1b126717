"""Global test fixtures."""

import os

# Keep developer config files and env out of Config() instances built by tests.
# This must happen at module load time, not in a fixture
os.environ.pop("ORGSSO_CONFIG_FILE", None)
os.environ.setdefault("ORGSSO_AUTH__JWT__SECRET", "test-secret-for-unit-tests-min-32")

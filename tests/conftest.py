"""Root pytest configuration for all tests."""

import logging

# atlassian-python-api logs failed lookups at ERROR level; tests that
# exercise not-found paths would otherwise flood the output.
logging.getLogger("atlassian").setLevel(logging.WARNING)

"""Global pytest configuration."""

import os

# Never reach live providers from tests unless a test opts in explicitly
os.environ["PLACE_RESOLVER_MODE"] = "test"

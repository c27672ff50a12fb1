import sys
import os
import pytest

# Make `pgsearch` importable without installing it
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

if __name__ == "__main__":
    # Run the unit tests, the integration tests are skipped unless PGSEARCH_TEST_DATABASE_URL is set
    sys.exit(pytest.main(["tests", "-v"]))

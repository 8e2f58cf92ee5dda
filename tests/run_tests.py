#!/usr/bin/env python3
"""
Run the File Organizer test suite without pytest.

Usage:
    python tests/run_tests.py
    python tests/run_tests.py --pattern "test_conf*.py" --quiet
"""

import argparse
import os
import sys
import unittest

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
# tests/unit has no __init__.py, so each folder is discovered on its own
SUITE_DIRS = [TESTS_DIR, os.path.join(TESTS_DIR, "unit")]


def build_suite(pattern: str) -> unittest.TestSuite:
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    for start_dir in SUITE_DIRS:
        suite.addTests(loader.discover(start_dir, pattern=pattern, top_level_dir=start_dir))
    return suite


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the File Organizer tests")
    parser.add_argument("--pattern", default="test_*.py",
                        help="File name pattern of test modules (default: test_*.py)")
    parser.add_argument("--quiet", action="store_true",
                        help="Only print failures and the final tally")
    args = parser.parse_args(argv)

    # Make file_organizer importable from a plain checkout
    sys.path.insert(0, os.path.dirname(TESTS_DIR))

    runner = unittest.TextTestRunner(verbosity=1 if args.quiet else 2)
    result = runner.run(build_suite(args.pattern))
    return 0 if result.wasSuccessful() else 1


if __name__ == "__main__":
    sys.exit(main())

"""
Hub-VNS Test Runner
Runs all unit tests and prints a summary.
"""

import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def run_tests(pattern: str = 'test_*.py') -> bool:
    """Run all unit tests matching pattern."""
    loader = unittest.TestLoader()
    start_dir = os.path.dirname(os.path.abspath(__file__))
    suite = loader.discover(start_dir, pattern=pattern)

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    passed = result.testsRun - len(result.failures) - len(result.errors)
    print(f"\n{'=' * 60}")
    print("TEST SUMMARY")
    print(f"{'=' * 60}")
    print(f"Tests run: {result.testsRun}")
    print(f"Failures: {len(result.failures)}")
    print(f"Errors: {len(result.errors)}")
    print(f"Skipped: {len(result.skipped)}")
    if result.testsRun:
        print(f"Success rate: {passed / result.testsRun * 100:.1f}%")

    for label, entries in (("FAILURES", result.failures), ("ERRORS", result.errors)):
        if entries:
            print(f"\n{label}:")
            for test, traceback in entries:
                print(f"  {test}")
                print(f"    {traceback.strip().splitlines()[-1]}")

    return result.wasSuccessful()


if __name__ == '__main__':
    selected = sys.argv[1] if len(sys.argv) > 1 else 'test_*.py'
    success = run_tests(selected)
    sys.exit(0 if success else 1)

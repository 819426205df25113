"""
Unit Tests for the Attacking UCI Engine

The wrapped engine and the attacking evaluator are replaced by the fakes
in tests/fakes.py, so no chess engine is needed except for the Stockfish
integration tests, which are skipped when it is not installed.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_selector.py

    # Run specific test
    pytest tests/test_uci.py::TestUCIGo::test_selects_most_attacking_move

Dependencies:
    - pytest: Test framework
"""

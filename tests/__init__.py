"""
timeoutify test suite.

- Deadline wrapper tests (resolution, deadline, failure, timer release)
- Decorator tests
- Configuration tests
- Exception tests
"""

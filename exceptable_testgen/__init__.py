"""
Exceptable test-suite generator.

Writes a JUnit test suite for every class marked ``@TestSource``.
"""

__version__ = "0.1.0"

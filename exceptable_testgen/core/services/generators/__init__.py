"""
Generators — produce source files from scanned declarations.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedFile``.
"""

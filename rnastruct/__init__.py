"""rnastruct: field-selective readers for RNA secondary-structure files."""

__version__ = "0.1.0"

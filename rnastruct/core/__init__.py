"""Shared infrastructure: errors, logging, validators, tables."""

"""Kernel – errors, structured values and the evaluation context."""

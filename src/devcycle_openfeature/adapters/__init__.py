"""Adapters – concrete implementations of the vendor client ports."""

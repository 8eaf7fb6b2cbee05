"""Embedded crystallographic tables."""

"""Pipelines built on top of the engine."""

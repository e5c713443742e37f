"""Domain layer — error descriptors, rules, and edit lifecycle.

This layer depends only on stdlib and pydantic.
It must never import from observable, behaviors, plugins, or config.
"""

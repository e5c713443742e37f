"""Behavior layer — validation and transactional editing.

Behaviors may import from domain, observable, and config.
They must never import from model or plugins.
"""

"""
Activations module - Per-site license bindings.

This module handles:
- Activation entity and domain logic
- Site activation/deactivation
"""

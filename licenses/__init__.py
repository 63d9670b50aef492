"""
Licenses module - License records and the license engine.

This module handles:
- License entity and domain logic
- Activation, verification and administrative issuing
- License listing
"""

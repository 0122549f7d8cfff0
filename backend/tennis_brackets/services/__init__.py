"""
Services Layer

Business logic that:
- Accepts domain inputs (IDs, a Store, plain values)
- Returns domain outputs (models, dataclasses, dicts)
- Does NOT depend on HTTP request/response objects
- Raises tennis_brackets.errors exceptions for invalid input
"""

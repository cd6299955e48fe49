"""
Cross-app test suite for the livestock program backend.

Test Organization:
- integration/ - API tests exercising participants and reports together
- App-specific tests remain in their respective app directories (e.g., peternak/tests.py)
"""

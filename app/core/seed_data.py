"""
Seed data for the default expense categories.

Every installation starts with the same catalogue so that expenses can be
recorded right away. The ids are fixed so that exports and budgets created
against a fresh database stay portable between installs.
"""

OTHER_CATEGORY_ID = "0c9d1e2f-3a4b-5c6d-7e8f-9a0b1c2d3e4f"

DEFAULT_CATEGORIES = [
    {"id": "1f8e7a9b-3c5d-4e2f-8a9c-1d2e3f4a5b6c", "name": "Food & Dining", "color": "#FF6B6B"},
    {"id": "2a1b3c4d-5e6f-7a8b-9c0d-1e2f3a4b5c6d", "name": "Transportation", "color": "#4ECDC4"},
    {"id": "3b2c4d5e-6f7a-8b9c-0d1e-2f3a4b5c6d7e", "name": "Utilities", "color": "#45B7D1"},
    {"id": "4c3d5e6f-7a8b-9c0d-1e2f-3a4b5c6d7e8f", "name": "Entertainment", "color": "#96CEB4"},
    {"id": "5d4e6f7a-8b9c-0d1e-2f3a-4b5c6d7e8f9a", "name": "Healthcare", "color": "#FFEAA7"},
    {"id": "6e5f7a8b-9c0d-1e2f-3a4b-5c6d7e8f9a0b", "name": "Shopping", "color": "#DDA0DD"},
    {"id": "7f6a8b9c-0d1e-2f3a-4b5c-6d7e8f9a0b1c", "name": "Education", "color": "#98D8C8"},
    {"id": "8a7b9c0d-1e2f-3a4b-5c6d-7e8f9a0b1c2d", "name": "Travel", "color": "#F7DC6F"},
    {"id": "9b8c0d1e-2f3a-4b5c-6d7e-8f9a0b1c2d3e", "name": "Insurance", "color": "#BB8FCE"},
    {"id": OTHER_CATEGORY_ID, "name": "Other", "color": "#AED6F1"},
]

"""Pydantic schemas package.

Folder intent:
  common.py    — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  vendor.py    — vendor registration/approval and branch DTOs
  menu.py      — menu item and offer DTOs (offer window validated here)
  favorite.py  — favorite DTOs (flat polymorphic reference fields)
  review.py    — review, reply and like DTOs
"""

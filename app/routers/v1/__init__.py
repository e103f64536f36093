"""v1 router package — all /api/v1/* endpoints live here.

Files:
  vendors.py    — vendor registration/approval and every vendor-scoped write
  branches.py   — public branch reads (menu, active offers, reviews)
  favorites.py  — customer favorites
  reviews.py    — reviews, replies, likes

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to app/services/.
"""

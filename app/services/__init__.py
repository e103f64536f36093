"""Services package — business logic, one module per aggregate.

  vendor.py         — vendor registration/approval, branches
  menu.py           — menu items and offers
  favorite.py       — customer favorites
  review.py         — reviews, replies, likes
  ownership.py      — vendor → branch → resource authorization checks
  targets.py        — existence checks for polymorphic targets
  notifications.py  — webhook fan-out
  storage.py        — menu image uploads
"""

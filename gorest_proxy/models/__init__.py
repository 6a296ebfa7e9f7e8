"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata knows every table
"""

from gorest_proxy.models.user import User  # noqa: F401

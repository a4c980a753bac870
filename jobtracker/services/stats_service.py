"""
Statistics for a user's job applications.

Recomputed from the store on every call; nothing is cached.
"""
from typing import Dict
from sqlalchemy.orm import Session

from jobtracker.services.application_service import count_by_status, count_total


def get_statistics(db: Session, owner_id: int) -> Dict[str, int]:
    """
    Total plus one count per status, keyed by lower-case status name.

    Example:
        {"total": 3, "applied": 2, "screening": 0, "interview": 1, ...}
    """
    stats = {"total": count_total(db, owner_id)}
    for status, count in count_by_status(db, owner_id).items():
        stats[status.value.lower()] = count
    return stats

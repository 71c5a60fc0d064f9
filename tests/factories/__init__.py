"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import AssignmentFactory, ReleaseFactory, ...
"""

from tests.factories.base import BaseFactory, short_id, utc_now
from tests.factories.pipeline import (
    AssignmentFactory,
    MessageFactory,
    ReleaseFactory,
    ReleaseSetFactory,
    TaskFactory,
)

__all__ = [
    # Base
    "BaseFactory",
    "short_id",
    "utc_now",
    # Assignment aggregate
    "AssignmentFactory",
    "TaskFactory",
    # Release aggregate
    "ReleaseFactory",
    "ReleaseSetFactory",
    # Messages
    "MessageFactory",
]

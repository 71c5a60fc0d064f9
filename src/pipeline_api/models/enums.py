"""Shared enums for models."""

from enum import Enum


class DeploymentStatus(str, Enum):
    """Statuses written by the deploy transitions.

    Other statuses are caller-supplied free text.
    """

    DEPLOY_IN_PROGRESS = "DEPLOY_IN_PROGRESS"
    IN_PROGRESS = "IN_PROGRESS"


SYSTEM_DEPLOYER = "system"

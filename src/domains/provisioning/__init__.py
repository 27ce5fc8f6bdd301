# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Group provisioning domain.

This package provides the GroupProvisioningService that approves a group
and provisions its repository and team on the course's provider, along
with the components it composes.
"""

from src.domains.provisioning.membership import MembershipResolver
from src.domains.provisioning.reconciler import RepositoryReconciler
from src.domains.provisioning.recorder import PersistenceRecorder
from src.domains.provisioning.service import (
    GroupProvisioningService,
    ProvisioningStage,
)
from src.domains.provisioning.teams import TeamSynchronizer

__all__ = [
    "GroupProvisioningService",
    "ProvisioningStage",
    "MembershipResolver",
    "RepositoryReconciler",
    "PersistenceRecorder",
    "TeamSynchronizer",
]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Group provisioning service.

Approving a group provisions its workspace on the course's provider: a
private repository named after the group, a local record of it, the new
group status, and a team of the group's members with access to the
repository.

The provisioning flow:
1. Validate the requested status (REQUESTED)
2. Resolve the caller, check privilege, load group and course (AUTHORIZED)
3. Find or create the repository in the course directory (REPO_RESOLVED)
4. Record the repository locally (REPO_PERSISTED)
5. Write the requested group status (STATUS_UPDATED)
6. Resolve member usernames on the provider (MEMBERS_RESOLVED)
7. Create the team and attach the repository (TEAM_SYNCED)

Steps are not transactional and nothing is compensated on failure. A run
that fails after step 3 leaves the provider repository in place; re-running
reuses it, but the repository record from step 4 makes a second run fail
there. Two concurrent runs for the same group are not excluded.

Example:
    >>> service = GroupProvisioningService(store, registry, threshold=3)
    >>> result = await service.provision_group(42, 2, ["1"])
"""

from collections.abc import Sequence
from enum import StrEnum

from src.domains.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    ProvisioningError,
    StoreFailureError,
)
from src.domains.identity import resolve_identity, resolve_scm
from src.domains.provisioning.membership import MembershipResolver
from src.domains.provisioning.policy import (
    can_update_group_status,
    is_status_reserved,
    parse_requested_status,
)
from src.domains.provisioning.reconciler import RepositoryReconciler
from src.domains.provisioning.recorder import PersistenceRecorder
from src.domains.provisioning.remote import call_remote
from src.domains.provisioning.teams import TeamSynchronizer
from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import Course, Group
from src.infrastructure.database.models import Repository as RepositoryRecord
from src.infrastructure.database.store import GroupStore, RecordNotFoundError
from src.infrastructure.scm.registry import SCMRegistry
from src.models.enums import RepositoryType
from src.models.group import ProvisioningResult
from src.utils.logging import bound_context, get_logger

logger = get_logger(__name__)


class ProvisioningStage(StrEnum):
    """Stages of a group provisioning run.

    A failure is reported with the stage whose work was in progress.
    """

    REQUESTED = "requested"
    AUTHORIZED = "authorized"
    REPO_RESOLVED = "repo_resolved"
    REPO_PERSISTED = "repo_persisted"
    STATUS_UPDATED = "status_updated"
    MEMBERS_RESOLVED = "members_resolved"
    TEAM_SYNCED = "team_synced"
    COMPLETED = "completed"
    FAILED = "failed"


class GroupProvisioningService:
    """Orchestrates approval and provisioning of a student group.

    Attributes:
        _store: Local store.
        _registry: Live provider clients keyed by access token.
        _threshold: Highest status a privileged caller may request.
        _timeout: Default per-call provider timeout in seconds.
    """

    def __init__(
        self,
        store: GroupStore,
        registry: SCMRegistry,
        threshold: int,
        timeout: float | None = None,
    ) -> None:
        """Initialize the provisioning service.

        Args:
            store: Local store.
            registry: Live provider clients keyed by access token.
            threshold: Highest status a privileged caller may request.
            timeout: Default per-call provider timeout in seconds.
        """
        self._store = store
        self._registry = registry
        self._threshold = threshold
        self._timeout = timeout
        self._recorder = PersistenceRecorder(store)

    async def provision_group(
        self,
        group_id: int,
        requested_status: int,
        caller_token: Sequence[str],
        timeout: float | None = None,
    ) -> ProvisioningResult:
        """Set a group's status and provision its repository and team.

        Args:
            group_id: Group to provision.
            requested_status: New approval status.
            caller_token: Values of the caller header.
            timeout: Per-call provider timeout overriding the default.

        Returns:
            ProvisioningResult describing the provisioned workspace.

        Raises:
            ProvisioningError: Any workflow error, with ``stage`` set to the
                stage that failed. Earlier steps are not undone.
        """
        with bound_context(group_id=group_id):
            return await self._provision(group_id, requested_status, caller_token, timeout)

    async def _provision(
        self,
        group_id: int,
        requested_status: int,
        caller_token: Sequence[str],
        timeout: float | None,
    ) -> ProvisioningResult:
        timeout = self._timeout if timeout is None else timeout
        stage = ProvisioningStage.REQUESTED

        try:
            status = parse_requested_status(requested_status, self._threshold)

            stage = ProvisioningStage.AUTHORIZED
            caller = await resolve_identity(caller_token, self._store)
            if not can_update_group_status(caller, status, self._threshold):
                raise PermissionDeniedError(
                    "Only administrators may change group status",
                    details={"user_id": caller.id},
                )
            group = await self._load_group(group_id)
            if is_status_reserved(group.status, self._threshold):
                raise PermissionDeniedError(
                    f"Group {group_id} status {group.status} is reserved",
                    details={"status": group.status},
                )
            course = await self._load_course(group.course_id)
            scm = resolve_scm(caller, course.provider, self._registry)
            self._log_stage(stage, user_id=caller.id, provider=course.provider)

            stage = ProvisioningStage.REPO_RESOLVED
            directory = await call_remote(
                scm.get_directory(course.directory_id),
                f"get directory {course.directory_id}",
                timeout,
            )
            repo, created = await RepositoryReconciler(scm, timeout).reconcile(
                directory, group.name
            )
            self._log_stage(stage, repository_id=repo.id, created=created)

            stage = ProvisioningStage.REPO_PERSISTED
            await self._recorder.record_repository(
                RepositoryRecord(
                    directory_id=directory.id,
                    repository_id=repo.id,
                    html_url=repo.web_url,
                    type=RepositoryType.GROUP.value,
                    group_id=group.id,
                    user_id=None,
                )
            )
            self._log_stage(stage)

            stage = ProvisioningStage.STATUS_UPDATED
            await self._recorder.update_group_status(group.id, status)
            self._log_stage(stage, status=status.name)

            stage = ProvisioningStage.MEMBERS_RESOLVED
            usernames = await MembershipResolver(scm, timeout).resolve(
                group.users, course.provider
            )
            self._log_stage(stage, members=len(usernames))

            stage = ProvisioningStage.TEAM_SYNCED
            teams = TeamSynchronizer(scm, timeout)
            team = await teams.create_team(directory, group.name, usernames)
            await teams.attach_repository(team, repo)
            self._log_stage(stage, team_id=team.id)

        except ProvisioningError as e:
            e.stage = stage.value
            logger.error(
                "group_provisioning_failed",
                state=ProvisioningStage.FAILED.value,
                stage=stage.value,
                error_code=e.code,
                error=e.message,
            )
            raise

        stage = ProvisioningStage.COMPLETED
        self._log_stage(stage)
        return ProvisioningResult(
            group_id=group.id,
            status=int(status),
            repository_id=repo.id,
            repository_url=repo.web_url,
            repository_created=created,
            team_id=team.id,
            stage=stage.value,
        )

    async def _load_group(self, group_id: int) -> Group:
        try:
            return await self._store.get_group(group_id)
        except RecordNotFoundError as e:
            raise NotFoundError(f"Group {group_id} not found") from e
        except DatabaseError as e:
            raise StoreFailureError(f"Failed to load group {group_id}: {e.message}") from e

    async def _load_course(self, course_id: int) -> Course:
        try:
            return await self._store.get_course(course_id)
        except RecordNotFoundError as e:
            raise NotFoundError(f"Course {course_id} not found") from e
        except DatabaseError as e:
            raise StoreFailureError(f"Failed to load course {course_id}: {e.message}") from e

    @staticmethod
    def _log_stage(stage: ProvisioningStage, **fields: object) -> None:
        logger.info("group_provisioning_stage", stage=stage.value, **fields)

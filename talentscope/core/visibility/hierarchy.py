"""
Organizational hierarchy resolution.

Computes the set of users whose work an actor may see by walking the
``reporter`` tree a fixed number of hops for the actor's designation.
"""

from typing import Iterable, Optional

from bson import ObjectId

from talentscope.data.models import User
from talentscope.utils.constants import Designation
from talentscope.utils.logger import get_logger

logger = get_logger(__name__)


def _as_object_id(value) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class OrgHierarchyResolver:
    """
    Resolves visible user ids from a snapshot of the user directory.

    Traversal depth is fixed per designation:
    - Admin: every user
    - Manager: self, reporting Mentors, and Recruiters reporting to them
    - Mentor: self and reporting Recruiters
    - anything else: self only

    Deeper chains and cycles in ``reporter`` data are never followed.
    """

    def __init__(self, users: Iterable[User]):
        self._users: dict[ObjectId, User] = {}
        self._children: dict[ObjectId, list[User]] = {}

        for user in users:
            if user.id is None:
                continue
            self._users[user.id] = user
            if user.reporter is not None:
                self._children.setdefault(user.reporter, []).append(user)

    @property
    def users(self) -> list[User]:
        return list(self._users.values())

    @property
    def user_ids(self) -> set[ObjectId]:
        return set(self._users)

    def get_user(self, user_id) -> Optional[User]:
        oid = _as_object_id(user_id)
        return self._users.get(oid) if oid is not None else None

    def reportees(self, user_ids: Iterable[ObjectId], designation: str) -> set[ObjectId]:
        """Direct reports of any of ``user_ids`` holding ``designation``."""
        return {
            child.id
            for uid in user_ids
            for child in self._children.get(uid, ())
            if child.designation == designation
        }

    def resolve(self, user_id, designation: Optional[str]) -> set:
        """
        Resolve the ids whose uploads ``user_id`` may see.

        An unknown user fails closed to the supplied id alone, whatever the
        designation claims.

        Args:
            user_id: Actor id (ObjectId or hex string)
            designation: Actor designation

        Returns:
            Set of visible user ids
        """
        oid = _as_object_id(user_id)
        if oid is None or oid not in self._users:
            logger.debug(f"Unknown user {user_id}; visibility limited to self")
            return {oid if oid is not None else user_id}

        if designation == Designation.ADMIN.value:
            return self.user_ids

        visible = {oid}
        if designation == Designation.MANAGER.value:
            mentors = self.reportees({oid}, Designation.MENTOR.value)
            visible |= mentors
            visible |= self.reportees(mentors, Designation.RECRUITER.value)
        elif designation == Designation.MENTOR.value:
            visible |= self.reportees({oid}, Designation.RECRUITER.value)

        return visible

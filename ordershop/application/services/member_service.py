"""Member registration and lookup."""

from ordershop.core.observability import get_logger, monitor_operation
from ordershop.domain.ordering.entities import Member
from ordershop.domain.shared.exceptions import DuplicateMemberError

from .base_service import ApplicationServiceBase

logger = get_logger(__name__)


class MemberService(ApplicationServiceBase):
    """Registers members and keeps member names unique."""

    @monitor_operation("join_member")
    def join(self, member: Member) -> int:
        """
        Register a new member.

        Args:
            member: Transient member to persist

        Returns:
            The new member's id

        Raises:
            ValidationError: If the name is blank
            DuplicateMemberError: If a member with this name exists
        """
        self.validate_non_empty_string(member.name, "name")

        with self._uow_factory() as uow:
            self._validate_duplicate_member(uow, member.name)
            uow.members.save(member)
            member_id = member.id

        logger.info("Member joined", member_id=member_id)
        return member_id

    @staticmethod
    def _validate_duplicate_member(uow, name: str) -> None:
        # Not race-free: two concurrent joins can both pass this check.
        if uow.members.find_by_name(name):
            raise DuplicateMemberError(name)

    def find_members(self) -> list[Member]:
        with self._uow_factory() as uow:
            return uow.members.find_all()

    def find_one(self, member_id: int) -> Member:
        """
        Raises:
            EntityNotFoundError: If no member has this id
        """
        with self._uow_factory() as uow:
            return uow.members.get_by_id_required(member_id)

    @monitor_operation("update_member")
    def update(self, member_id: int, name: str) -> None:
        """Rename a member through change tracking on the managed entity."""
        self.validate_non_empty_string(name, "name")
        with self._uow_factory() as uow:
            member = uow.members.get_by_id_required(member_id)
            member.rename(name)

"""Update system use case."""

from collections.abc import Callable
from datetime import datetime

from accessgate.application.dto.system_dto import SystemUpdateInput
from accessgate.application.ports import PermissionChecker
from accessgate.application.services.grant_resolver import utc_now
from accessgate.domain.entities import System
from accessgate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from accessgate.domain.value_objects import Account


class UpdateSystemUseCase:
    """Update the mutable fields of an active system."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        admin_security_id: int,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._admin_security_id = admin_security_id
        self._clock = clock

    async def execute(
        self, actor: Account, system_code: str, input_data: SystemUpdateInput
    ) -> System:
        if not await self._permission_checker.check(actor, self._admin_security_id):
            raise PermissionDenied("Account is not allowed to manage systems")
        if not input_data.name.strip():
            raise ValidationError("System name is required")

        async with self._uow_factory() as uow:
            system = await uow.catalog.get_system_by_code(system_code)
            if not system or not system.is_active:
                raise NotFound("System", system_code)

            system.name = input_data.name.strip()
            system.description = input_data.description
            system.icon = input_data.icon
            system.base_url = input_data.base_url
            system.is_internal = input_data.is_internal
            system.requires_manager = input_data.requires_manager
            system.modified_date = self._clock()
            system.modified_by = actor.key
            await uow.catalog.update_system(system)
            return system

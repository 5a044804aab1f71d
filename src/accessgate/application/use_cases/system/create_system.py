"""Create system use case."""

from collections.abc import Callable
from datetime import datetime

from accessgate.application.dto.system_dto import SystemCreateInput
from accessgate.application.ports import PermissionChecker
from accessgate.application.services.grant_resolver import utc_now
from accessgate.domain.entities import System
from accessgate.domain.exceptions import DuplicateSystem, PermissionDenied, ValidationError
from accessgate.domain.value_objects import Account
from accessgate.logging import get_logger

log = get_logger(__name__)


class CreateSystemUseCase:
    """Register a sub-application. Codes are unique across active and inactive systems."""

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

    async def execute(self, actor: Account, input_data: SystemCreateInput) -> System:
        if not await self._permission_checker.check(actor, self._admin_security_id):
            raise PermissionDenied("Account is not allowed to manage systems")

        code = input_data.code.strip()
        name = input_data.name.strip()
        if not code or not name:
            raise ValidationError("System code and name are required")

        async with self._uow_factory() as uow:
            if await uow.catalog.system_code_exists(code):
                raise DuplicateSystem(f"System code already exists: {code}")

            system = await uow.catalog.create_system(
                System(
                    id=0,
                    code=code,
                    name=name,
                    description=input_data.description,
                    icon=input_data.icon,
                    base_url=input_data.base_url,
                    is_internal=input_data.is_internal,
                    requires_manager=input_data.requires_manager,
                    created_date=self._clock(),
                    created_by=actor.key,
                )
            )

        log.info("system_created", system_code=system.code, actor=actor.key)
        return system

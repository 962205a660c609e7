from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo
from src.app.use_cases.company.dtos import CompanyProfileResponse
from src.libs.result import Error, Result, Return
from .dtos import ProfileResponse


class GetProfileUseCase:
    """Load the current user together with their company profile, if any."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[ProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            company = await self.uow.companies.get_by_owner_id(user.id)

            return Return.ok(
                ProfileResponse(
                    user=UserInfo.from_user(user),
                    company=CompanyProfileResponse.from_entity(company) if company else None,
                )
            )

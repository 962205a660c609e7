"""
Update Profile Use Case

Changes the personal fields of the current user.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo
from src.libs.result import Error, Result, Return
from .dtos import UpdateProfileCommand


class UpdateProfileUseCase:
    """
    Business Rules:
    - Only full_name, gender and mobile_no can be changed
    - At least one of them must be supplied
    - A new mobile number must not belong to another user
    - Changing the mobile number clears is_mobile_verified
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, command: UpdateProfileCommand) -> Result[UserInfo]:
        changes = command.model_dump(exclude_none=True)
        if not changes:
            return Return.err(Error("NO_FIELDS_TO_UPDATE", "No valid fields to update"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            new_mobile = changes.get("mobile_no")
            if new_mobile is not None and new_mobile != user.mobile_no:
                if await self.uow.users.mobile_exists(new_mobile, exclude_user_id=user.id):
                    return Return.err(
                        Error("MOBILE_ALREADY_EXISTS", "Mobile number already registered")
                    )
                user.mobile_no = new_mobile
                user.is_mobile_verified = False
                user.mobile_verification_id = None

            if "full_name" in changes:
                user.full_name = changes["full_name"]
            if "gender" in changes:
                user.gender = changes["gender"]

            user = await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(UserInfo.from_user(user))

"""
Register Use Case DTOs (Data Transfer Objects)

- RegisterCommand: Input to use case (validated business intent)
- RegisterResponse: Output from use case (structured result)
"""

from pydantic import BaseModel

from src.domain.entities import Gender, SignupType


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    email: str
    password: str
    full_name: str
    gender: Gender
    mobile_no: str
    signup_type: SignupType = SignupType.email


class RegisterResponse(BaseModel):
    """Identifiers the client needs to continue with OTP entry"""

    user_id: str
    email: str
    full_name: str
    mobile_no: str
    external_uid: str

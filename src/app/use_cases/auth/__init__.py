"""
Authentication Use Cases

register / login / logout / request reset / confirm reset, plus bearer
token authentication. Each returns a Result.
"""

from .register_use_case import RegisterUseCase
from .register_dto import RegisterCommand, RegisterResponse
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .authenticate_use_case import AuthenticateUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import LoginResponse, MessageResponse, UserInfo

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "AuthenticateUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "MessageResponse",
    # DTOs - Nested Models
    "UserInfo",
]

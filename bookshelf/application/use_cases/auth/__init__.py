from .login_user import LoginResult, LoginUserUseCase
from .logout_user import LogoutUserUseCase

__all__ = ["LoginResult", "LoginUserUseCase", "LogoutUserUseCase"]

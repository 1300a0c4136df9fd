from .dto import LoginIn, LogoutIn, RefreshIn
from .service import AuthFacade

__all__ = ["AuthFacade", "LoginIn", "LogoutIn", "RefreshIn"]

from enum import Enum


class AuthEvent(str, Enum):
    LOGIN = "login"
    LOGOUT = "logout"

"""HTTP access to the CodeMenu snippet API."""

from .api_client import ApiResult, CodeMenuClient, ErrorKind
from .config import CodeMenuSettings

__all__ = ["ApiResult", "CodeMenuClient", "CodeMenuSettings", "ErrorKind"]

"""Client for the Kakao user-profile API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests

AUTH_TYPE = "kakao"
GOOGLE_AUTH_TYPE = "google"
USER_INFO_PATH = "/v2/user/me"


def _text(section: dict[str, Any], key: str) -> str:
    value = section.get(key)
    return "" if value is None else str(value)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be a JSON object")
    return value


@dataclass(frozen=True)
class KakaoUser:
    """The parts of a Kakao account the application uses."""

    email: str = ""
    nickname: str = ""
    profile_image: str = ""

    @staticmethod
    def from_dict(data: Any) -> KakaoUser:
        """Read a user from the decoded body of the user-info endpoint."""
        if not isinstance(data, dict):
            raise ValueError("kakao user info must be a JSON object")
        account = _section(data, "kakao_account")
        profile = _section(data, "properties")
        return KakaoUser(
            email=_text(account, "email"),
            nickname=_text(profile, "nickname"),
            profile_image=_text(profile, "profile_image"),
        )


class KakaoClient:
    """Fetches the logged-in user's profile through an authorised session."""

    def __init__(self, base_url: str, session: requests.Session | None = None) -> None:
        self.base_url = base_url
        self._session = session if session is not None else requests.Session()

    def get_user_info(self) -> KakaoUser:
        """Return the profile of the user the session is authorised for."""
        response = self._session.get(f"{self.base_url}{USER_INFO_PATH}")
        return KakaoUser.from_dict(response.json())
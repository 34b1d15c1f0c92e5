"""
================================================================================
Fixture Data
================================================================================

Typed login/profile records read from the JSON files under `testdata/`.

Both files use camelCase keys:
    login_data.json    {"phone": ..., "otp": ..., "expectedResult": ...}
    profile_data.json  {"firstName": ..., "lastName": ..., "phone": ...,
                        "email": ..., "companyName": ...}

================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from .config_loader import get_config


TESTDATA_DIR = Path(__file__).parent.parent.parent / "testdata"
LOGIN_DATA_FILE = TESTDATA_DIR / "login_data.json"
PROFILE_DATA_FILE = TESTDATA_DIR / "profile_data.json"


class FixtureDataError(Exception):
    """Raised when a fixture file is unreadable or misses a required field."""
    pass


@dataclass(frozen=True)
class LoginData:
    phone: str
    otp: str
    expected_result: Optional[str] = None


@dataclass(frozen=True)
class ProfileData:
    first_name: str
    last_name: str
    email: str
    company_name: str
    phone: str = ""

    # Field name -> label used in mismatch reports
    LABELS = {
        "first_name": "firstName",
        "last_name": "lastName",
        "email": "email",
        "company_name": "companyName",
    }

    def editable_fields(self) -> Dict[str, str]:
        """Fields written by the profile form, keyed by report label."""
        return {label: getattr(self, attr) for attr, label in self.LABELS.items()}


def _read_json(path: Union[str, Path]) -> Dict[str, Any]:
    full_path = Path(path).resolve()
    try:
        with open(full_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FixtureDataError(f"Error reading JSON file: {full_path}. {e}") from e

    if not isinstance(data, dict):
        raise FixtureDataError(f"Expected a JSON object in {full_path}")
    logger.debug(f"Loaded fixture data from: {full_path}")
    return data


def _required(data: Dict[str, Any], key: str, source: Path) -> str:
    value = data.get(key)
    if value is None or str(value).strip() == "":
        raise FixtureDataError(f"Field '{key}' is missing or empty in {source}")
    return str(value)


def _resolve(path: Optional[Union[str, Path]], config_key: str, default: Path) -> Path:
    if path:
        return Path(path)
    configured = get_config(config_key, "")
    return Path(configured) if configured else default


def load_login_data(path: Optional[Union[str, Path]] = None) -> LoginData:
    """Load the login fixture (phone + OTP)."""
    source = _resolve(path, "testdata.login_file", LOGIN_DATA_FILE)
    data = _read_json(source)
    return LoginData(
        phone=_required(data, "phone", source),
        otp=_required(data, "otp", source),
        expected_result=data.get("expectedResult"),
    )


def load_profile_data(path: Optional[Union[str, Path]] = None) -> ProfileData:
    """Load the profile fixture (names, email, company)."""
    source = _resolve(path, "testdata.profile_file", PROFILE_DATA_FILE)
    data = _read_json(source)
    return ProfileData(
        first_name=_required(data, "firstName", source),
        last_name=_required(data, "lastName", source),
        email=_required(data, "email", source),
        company_name=_required(data, "companyName", source),
        phone=str(data.get("phone") or ""),
    )


__all__ = [
    "FixtureDataError",
    "LoginData",
    "ProfileData",
    "load_login_data",
    "load_profile_data",
]

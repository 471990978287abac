from __future__ import annotations

import pytest

from transports.auth import basic_auth_token, encode_credentials


def test_known_vector() -> None:
    assert encode_credentials("Medion", "iot@medion") == "TWVkaW9uOmlvdEBtZWRpb24="


@pytest.mark.parametrize(
    ("username", "password", "expected"),
    [
        ("a", "b", "YTpi"),
        ("user", "pw", "dXNlcjpwdw=="),
        ("ab", "c", "YWI6Yw=="),
    ],
)
def test_padding(username: str, password: str, expected: str) -> None:
    assert encode_credentials(username, password) == expected


@pytest.mark.parametrize(("username", "password"), [("Medion", ""), ("", "iot@medion"), ("", "")])
def test_token_omitted_when_either_part_is_empty(username: str, password: str) -> None:
    assert basic_auth_token(username, password) is None


def test_token_present_for_full_credentials() -> None:
    assert basic_auth_token("Medion", "iot@medion") == "TWVkaW9uOmlvdEBtZWRpb24="

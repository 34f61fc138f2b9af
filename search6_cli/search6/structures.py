from typing import TypedDict


class UserRecord(TypedDict):
    """
    A search6 profile as returned by the lookup API.
    Every field is present after decoding, missing keys hold their zero value.
    """
    avatar_url: str
    level: int
    level_progress: float
    xp: int
    id: int
    username: str
    discriminator: str
    avatar: str
    message_count: int
    rank: int


# field name -> zero value, the value's type drives decoding
USER_FIELDS: dict[str, str | int | float] = {
    "avatar_url": "",
    "level": 0,
    "level_progress": 0.0,
    "xp": 0,
    "id": 0,
    "username": "",
    "discriminator": "",
    "avatar": "",
    "message_count": 0,
    "rank": 0,
}

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def empty_user() -> UserRecord:
    return UserRecord(**USER_FIELDS)

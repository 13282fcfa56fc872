"""CSP API ファサード。選挙・投票者エンドポイントを 1 つの名前空間にまとめる。"""

from __future__ import annotations

from . import election, user
from .election import auth as election_auth
from .election import create as election_create
from .election import delete as election_delete
from .election import get as election_get
from .election import list as election_list
from .user import create as user_create
from .user import delete as user_delete
from .user import get as user_get
from .user import list as user_list
from .user import search as user_search
from .user import update as user_update

__all__ = [
    "election",
    "user",
    "election_create",
    "election_auth",
    "election_get",
    "election_delete",
    "election_list",
    "user_create",
    "user_get",
    "user_update",
    "user_delete",
    "user_list",
    "user_search",
]

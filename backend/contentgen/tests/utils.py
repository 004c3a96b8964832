from unittest.mock import AsyncMock, MagicMock

from contentgen.core.security import create_session_token


def make_llm(text: str = "Generated content") -> MagicMock:
    """Stand-in completion client whose ``complete`` resolves to ``text``."""
    llm = MagicMock()
    llm.complete = AsyncMock(return_value=text)
    return llm


def auth_headers(open_id: str = "test-user-1", **claims) -> dict[str, str]:
    token = create_session_token(open_id, **claims)
    return {"Authorization": f"Bearer {token}"}

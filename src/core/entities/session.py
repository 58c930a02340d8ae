from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, SecretStr


class Role(str, Enum):
    CLIENT = "CLIENT"
    ADMIN = "ADMIN"


class ClientSession(BaseModel):
    """
    Who is asking, and on behalf of which client.
    Built once per request from the upstream login and passed to every fetch.
    """
    model_config = ConfigDict(frozen=True)

    username: str
    password: SecretStr
    role: Role
    client_id: Optional[int] = None
    full_name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can_view(self, client_id: int) -> bool:
        return self.is_admin or self.client_id == client_id

    def basic_auth(self) -> Tuple[str, str]:
        return self.username, self.password.get_secret_value()

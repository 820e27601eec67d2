from pydantic import BaseModel


class TokenPayload(BaseModel):
    sub: str  # user id from the identity provider
    exp: int
    type: str = "access"

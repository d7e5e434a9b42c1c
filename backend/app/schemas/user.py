from pydantic import BaseModel


class GoogleUser(BaseModel):
    id: str
    email: str | None = None
    name: str
    picture: str | None = None

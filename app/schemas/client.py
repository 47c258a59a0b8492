from pydantic import BaseModel

from app.models.client import Role


# Registration payload (POST /auth/register). Fields default to "" so that
# missing or blank values reach the registration rules instead of a schema error.
class ClientRegister(BaseModel):
    name: str = ""
    surname: str = ""
    login: str = ""
    password: str = ""
    confirm_password: str = ""


# POST /auth/admin/register
class AdminRegister(ClientRegister):
    admin_secret: str


class ClientLogin(BaseModel):
    login: str
    password: str


# Public view of a client, never carries the password hash
class ClientDisplay(BaseModel):
    id: int
    first_name: str
    last_name: str
    login: str
    role: Role

    class Config:
        from_attributes = True


class SessionToken(BaseModel):
    access_token: str
    token_type: str
    client: ClientDisplay

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr


class TokenRequest(BaseModel):
    code: str
    redirect_uri: str


class RevokeRequest(BaseModel):
    token: str


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    access_token: StrictStr
    token_type: StrictStr
    scope: StrictStr
    created_at: StrictInt


class MessageOutput(BaseModel):
    message: str

from pydantic import BaseModel, Field


class ProfileRequest(BaseModel):
    name: str = Field(min_length=1, max_length=128)


class ProfileResponse(BaseModel):
    name: str

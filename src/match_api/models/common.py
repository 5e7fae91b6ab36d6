from pydantic import BaseModel, Field


class HealthData(BaseModel):
    status: str = Field(default="UP", description="Service status")


class MessageError(BaseModel):
    message: str

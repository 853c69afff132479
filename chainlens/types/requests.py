from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, description="User chat message")


class ApiKeyTestRequest(BaseModel):
    api_key: str = Field(default="", alias="apiKey", description="Tatum API key to validate")

    model_config = {"populate_by_name": True}

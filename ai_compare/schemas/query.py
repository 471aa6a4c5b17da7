from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    model_config = {"populate_by_name": True}

    input_text: str | None = Field(default=None, alias="inputText")


class DiscordRequest(BaseModel):
    message: str | None = None


class DiscordResponse(BaseModel):
    success: bool
    message: str

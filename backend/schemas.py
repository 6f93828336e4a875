from pydantic import BaseModel, ConfigDict, Field


class ArticlePreviewOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName")
    content: str


class ErrorOut(BaseModel):
    error: str

from pydantic import BaseModel, Field


class Sample(BaseModel):
    """
    Plain value object the application works with instead of SampleRecord.
    Unset fields sit at their zero value; there is no separate "missing" state.
    """

    id: int = Field(default=0, description="Primary key, assigned by the repository on insert")
    name: str = Field(default="", description="Display name")

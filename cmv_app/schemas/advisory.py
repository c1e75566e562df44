from pydantic import BaseModel


class AdvisoryResult(BaseModel):
    text: str
    available: bool = True
